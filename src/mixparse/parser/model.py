"""
Parsed Instruction Data Model
=============================

Immutable value types produced by the parser.

Operands
--------
| Type     | Canonical text | Bound        |
|----------|----------------|--------------|
| Address  | ``2000``       | 0..3999      |
| Index    | ``3``          | 1..5         |
| Fields   | ``(0:5)``      | unbounded    |
| Argument | ``(18)``       | unbounded    |

A ParsedInstruction holds the mnemonic's table entry, the required
``ADDRESS,INDEX`` pair (absent for operand-less mnemonics) and at most
one trailing operand. The trailing operand is None when the source did
not write one; no default field spec or argument is ever filled in.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mixparse.errors import SourceLocation
from mixparse.isa import Category, MnemonicInfo


ADDRESS_MIN = 0
ADDRESS_MAX = 3999

INDEX_MIN = 1
INDEX_MAX = 5


# =============================================================================
# Operands
# =============================================================================

@dataclass(frozen=True)
class Address:
    """Memory location operand, 0..3999."""
    value: int

    def __post_init__(self) -> None:
        if not ADDRESS_MIN <= self.value <= ADDRESS_MAX:
            raise ValueError(
                f"address {self.value} outside {ADDRESS_MIN}..{ADDRESS_MAX}"
            )

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Index:
    """Index register operand, 1..5."""
    value: int

    def __post_init__(self) -> None:
        if not INDEX_MIN <= self.value <= INDEX_MAX:
            raise ValueError(f"index {self.value} outside {INDEX_MIN}..{INDEX_MAX}")

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Fields:
    """
    Sub-word byte range ``(L:R)``.

    ``L > R`` is accepted as written; ``is_reversed`` lets callers
    flag it.
    """
    left: int
    right: int

    @property
    def is_reversed(self) -> bool:
        return self.left > self.right

    def render(self) -> str:
        return f"({self.left}:{self.right})"


@dataclass(frozen=True)
class Argument:
    """Parenthesized integer of the I/O-class instructions, ``(n)``."""
    value: int

    def render(self) -> str:
        return f"({self.value})"


Operand = Union[Address, Index, Fields, Argument]

TrailingOperand = Union[Fields, Argument]


# =============================================================================
# Parsed Instruction
# =============================================================================

@dataclass(frozen=True)
class ParsedInstruction:
    """
    One successfully parsed instruction line.

    Attributes:
        mnemonic: Opcode table entry of the mnemonic
        address: Address operand (None for ONLY_NAME mnemonics)
        index: Index operand (None for ONLY_NAME mnemonics)
        trailing: Fields or Argument as written, or None when omitted
        location: Where the instruction was read from; not part of equality

    Raises:
        ValueError: If the operands do not fit the mnemonic's category
    """
    mnemonic: MnemonicInfo
    address: Optional[Address] = None
    index: Optional[Index] = None
    trailing: Optional[TrailingOperand] = None
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        name = self.mnemonic.name

        if not self.mnemonic.takes_operands:
            if self.operands:
                raise ValueError(f"{name} takes no operands")
            return

        if self.address is None or self.index is None:
            raise ValueError(f"{name} requires an address and an index")

        if isinstance(self.trailing, Fields) and not self.mnemonic.allows_fields:
            raise ValueError(f"{name} does not take a field specification")
        if isinstance(self.trailing, Argument) and not self.mnemonic.allows_argument:
            raise ValueError(f"{name} does not take an argument")

    # -------------------------------------------------------------------------
    # Mnemonic shortcuts
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.mnemonic.name

    @property
    def category(self) -> Category:
        return self.mnemonic.category

    @property
    def register(self) -> Optional[str]:
        return self.mnemonic.register

    @property
    def negated(self) -> bool:
        return self.mnemonic.negated

    @property
    def condition(self) -> Optional[str]:
        return self.mnemonic.condition

    # -------------------------------------------------------------------------
    # Operand views
    # -------------------------------------------------------------------------

    @property
    def fields(self) -> Optional[Fields]:
        return self.trailing if isinstance(self.trailing, Fields) else None

    @property
    def argument(self) -> Optional[Argument]:
        return self.trailing if isinstance(self.trailing, Argument) else None

    @property
    def operands(self) -> list[Operand]:
        """All operands in source order."""
        result: list[Operand] = []
        if self.address is not None:
            result.append(self.address)
        if self.index is not None:
            result.append(self.index)
        if self.trailing is not None:
            result.append(self.trailing)
        return result

    @property
    def line(self) -> Optional[int]:
        return self.location.line if self.location else None

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def render(self) -> str:
        """Canonical text of the instruction (parses back to an equal value)."""
        if not self.mnemonic.takes_operands:
            return self.name
        text = f"{self.name} {self.address.render()},{self.index.render()}"
        if self.trailing is not None:
            text += self.trailing.render()
        return text

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        fields_spec = self.fields
        argument = self.argument
        return {
            "line": self.line,
            "text": self.render(),
            "mnemonic": self.name,
            "category": str(self.category),
            "base": self.mnemonic.base,
            "register": self.register,
            "negated": self.negated,
            "condition": self.condition,
            "address": self.address.value if self.address is not None else None,
            "index": self.index.value if self.index is not None else None,
            "fields": [fields_spec.left, fields_spec.right] if fields_spec else None,
            "argument": argument.value if argument else None,
        }


def render_instruction(instruction: ParsedInstruction) -> str:
    """Render an instruction in canonical form."""
    return instruction.render()
