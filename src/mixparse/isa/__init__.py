"""
mixparse ISA Package
====================

Instruction-set definitions shared by the parser and the command-line
tool: the closed opcode table, instruction categories and the grammar
alternatives the table is generated from.

Usage:
    from mixparse.isa import OPCODE_TABLE, Category, get_mnemonic_info

    info = get_mnemonic_info("LD1N")
    assert info.category is Category.FIELD
"""

from mixparse.isa.mix import (
    # Core types
    Category,
    MnemonicInfo,
    # Master mnemonic database
    OPCODE_TABLE,
    MNEMONICS,
    # Grammar alternatives
    REGISTERS,
    INDEX_REGISTERS,
    ONLY_NAME_MNEMONICS,
    ARITHMETIC_MNEMONICS,
    SHIFT_MNEMONICS,
    ARG_MNEMONICS,
    JUMP_CONDITIONS,
    REGISTER_JUMP_CONDITIONS,
    # Lookup functions
    get_mnemonic_info,
    is_valid_mnemonic,
    get_mnemonics_by_category,
    find_similar_mnemonics,
)

__all__ = [
    "Category",
    "MnemonicInfo",
    "OPCODE_TABLE",
    "MNEMONICS",
    "REGISTERS",
    "INDEX_REGISTERS",
    "ONLY_NAME_MNEMONICS",
    "ARITHMETIC_MNEMONICS",
    "SHIFT_MNEMONICS",
    "ARG_MNEMONICS",
    "JUMP_CONDITIONS",
    "REGISTER_JUMP_CONDITIONS",
    "get_mnemonic_info",
    "is_valid_mnemonic",
    "get_mnemonics_by_category",
    "find_similar_mnemonics",
]
