"""
MIX Instruction Set Definition
==============================

This module defines the closed set of mnemonics the parser accepts and
the category each belongs to. The table is generated once, at import
time, by expanding every alternation of the instruction grammar into
concrete mnemonic strings, so classifying a mnemonic is a single dict
lookup.

Categories
----------
1. **ONLY_NAME**: the mnemonic alone, no operands
   - NOP, HALT, NUM, CHAR

2. **FIELD**: ``ADDRESS,INDEX`` plus an optional Fields spec ``(L:R)``
   - LD<reg>[N], ST<reg|J|Z>, ADD, SUB, MUL, DIV, CMP<reg>
   - Example: LDAN 2000,1(0:5)

3. **NON_FIELD**: ``ADDRESS,INDEX`` and nothing else
   - J<cond>, EN<T|N><reg>, INC<reg>, DEC<reg>, shifts
   - Example: JLE 10,1

4. **ARG**: ``ADDRESS,INDEX`` plus an optional Argument ``(n)``
   - IN, OUT, IOC, JRED, JBUS, MOVE
   - Example: OUT 1000,1(18)

Registers are A, X and the index registers 1 to 5.

Jump Conditions
---------------
``J`` is followed by one of:

| Suffix             | Meaning                          |
|--------------------|----------------------------------|
| MP, SJ             | unconditional (SJ keeps rJ)      |
| OV, NOV            | overflow toggle set / not set    |
| L, E, G, GE, NE, LE| comparison indicator             |
| <reg>N, Z, P, ...  | register negative/zero/positive  |

Only the textual shape is defined here; what an instruction does when
executed is outside the scope of this package.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Category Enumeration
# =============================================================================

class Category(Enum):
    """
    Instruction categories of the grammar.

    The category alone decides which operands a mnemonic takes and
    which trailing operand, if any, may follow ``ADDRESS,INDEX``.
    """
    ONLY_NAME = auto()  # HALT
    FIELD = auto()      # LDAN 2000,1(0:5)
    NON_FIELD = auto()  # JLE 10,1
    ARG = auto()        # OUT 1000,1(18)

    def __str__(self) -> str:
        """Return human-readable name for messages."""
        return {
            Category.ONLY_NAME: "only-name",
            Category.FIELD: "field",
            Category.NON_FIELD: "non-field",
            Category.ARG: "arg",
        }[self]


# =============================================================================
# Mnemonic Information
# =============================================================================

@dataclass(frozen=True)
class MnemonicInfo:
    """
    Decomposition of one concrete mnemonic.

    Attributes:
        name: Full mnemonic as written (e.g. "LD1N")
        category: The instruction category
        base: Opcode family (e.g. "LD", "J", "EN", "ADD")
        register: Register selector ("A", "X", "1".."5"), or None
        negated: True for the negating forms (LD<reg>N, ENN<reg>)
        condition: Jump condition suffix (e.g. "LE", "NZ"), or None
    """
    name: str
    category: Category
    base: str
    register: Optional[str] = None
    negated: bool = False
    condition: Optional[str] = None

    @property
    def takes_operands(self) -> bool:
        """True unless the mnemonic stands alone."""
        return self.category is not Category.ONLY_NAME

    @property
    def allows_fields(self) -> bool:
        """True if a ``(L:R)`` Fields spec may follow the operands."""
        return self.category is Category.FIELD

    @property
    def allows_argument(self) -> bool:
        """True if an ``(n)`` Argument may follow the operands."""
        return self.category is Category.ARG

    def __repr__(self) -> str:
        return f"MnemonicInfo({self.name}, {self.category})"


# =============================================================================
# Grammar Alternatives
# =============================================================================

INDEX_REGISTERS = ("1", "2", "3", "4", "5")

REGISTERS = ("A", "X") + INDEX_REGISTERS

ONLY_NAME_MNEMONICS = ("NOP", "HALT", "NUM", "CHAR")

# Field instructions without a register selector
ARITHMETIC_MNEMONICS = ("ADD", "SUB", "MUL", "DIV")

SHIFT_MNEMONICS = ("SLA", "SRA", "SLAX", "SRAX", "SLC", "SRC")

ARG_MNEMONICS = ("IN", "OUT", "IOC", "JRED", "JBUS", "MOVE")

# Conditions that follow "J" directly
JUMP_CONDITIONS = ("MP", "SJ", "OV", "NOV", "L", "E", "G", "GE", "NE", "LE")

# Conditions that follow "J" + register
REGISTER_JUMP_CONDITIONS = ("N", "Z", "P", "NN", "NZ", "NP")


# =============================================================================
# Opcode Table Construction
# =============================================================================

def _build_opcode_table() -> dict[str, MnemonicInfo]:
    """Expand the grammar alternatives into a mnemonic -> info mapping."""
    table: dict[str, MnemonicInfo] = {}

    def add(info: MnemonicInfo) -> None:
        if info.name in table:
            raise ValueError(f"duplicate mnemonic in opcode table: {info.name}")
        table[info.name] = info

    for name in ONLY_NAME_MNEMONICS:
        add(MnemonicInfo(name, Category.ONLY_NAME, base=name))

    # FIELD
    for reg in REGISTERS:
        add(MnemonicInfo(f"LD{reg}", Category.FIELD, "LD", register=reg))
        add(MnemonicInfo(f"LD{reg}N", Category.FIELD, "LD", register=reg, negated=True))
        add(MnemonicInfo(f"ST{reg}", Category.FIELD, "ST", register=reg))
        add(MnemonicInfo(f"CMP{reg}", Category.FIELD, "CMP", register=reg))
    add(MnemonicInfo("STJ", Category.FIELD, "ST", register="J"))
    add(MnemonicInfo("STZ", Category.FIELD, "ST", register="Z"))
    for name in ARITHMETIC_MNEMONICS:
        add(MnemonicInfo(name, Category.FIELD, base=name))

    # NON_FIELD
    for cond in JUMP_CONDITIONS:
        add(MnemonicInfo(f"J{cond}", Category.NON_FIELD, "J", condition=cond))
    for reg in REGISTERS:
        for cond in REGISTER_JUMP_CONDITIONS:
            add(MnemonicInfo(f"J{reg}{cond}", Category.NON_FIELD, "J",
                             register=reg, condition=cond))
    for reg in REGISTERS:
        add(MnemonicInfo(f"ENT{reg}", Category.NON_FIELD, "EN", register=reg))
        add(MnemonicInfo(f"ENN{reg}", Category.NON_FIELD, "EN", register=reg, negated=True))
        add(MnemonicInfo(f"INC{reg}", Category.NON_FIELD, "INC", register=reg))
        add(MnemonicInfo(f"DEC{reg}", Category.NON_FIELD, "DEC", register=reg))
    for name in SHIFT_MNEMONICS:
        add(MnemonicInfo(name, Category.NON_FIELD, base=name))

    # ARG
    for name in ARG_MNEMONICS:
        add(MnemonicInfo(name, Category.ARG, base=name))

    return table


OPCODE_TABLE: dict[str, MnemonicInfo] = _build_opcode_table()

MNEMONICS = frozenset(OPCODE_TABLE)


# =============================================================================
# Lookup Functions
# =============================================================================

def get_mnemonic_info(name: str) -> Optional[MnemonicInfo]:
    """Return the table entry for a mnemonic, or None if it is unknown."""
    return OPCODE_TABLE.get(name)


def is_valid_mnemonic(name: str) -> bool:
    """Check whether a mnemonic is in the opcode table."""
    return name in OPCODE_TABLE


def get_mnemonics_by_category(category: Category) -> list[str]:
    """Return all mnemonics of one category, sorted alphabetically."""
    return sorted(
        name for name, info in OPCODE_TABLE.items()
        if info.category is category
    )


def find_similar_mnemonics(name: str, limit: int = 3) -> list[str]:
    """
    Find table mnemonics close to an unknown one, for error hints.

    Candidates are ranked by Levenshtein distance; only those within
    two edits are returned.
    """
    scored = []
    for candidate in OPCODE_TABLE:
        if abs(len(candidate) - len(name)) > 2:
            continue
        distance = _edit_distance(name, candidate)
        if distance <= 2:
            scored.append((distance, candidate))

    scored.sort()
    return [candidate for _, candidate in scored[:limit]]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(
                    distances[j], distances[j + 1], new_distances[-1]
                ))
        distances = new_distances
    return distances[-1]
