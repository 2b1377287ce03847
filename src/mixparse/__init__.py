"""
mixparse - Instruction Parser for a MIX-like Machine Language
=============================================================

This package recognizes the surface syntax of a MIX-style instruction
language: opcode mnemonics, the ``ADDRESS,INDEX`` operand pair, field
specifications ``(L:R)`` and I/O arguments ``(n)``.

It parses; it does not assemble or execute. Each line becomes an
immutable ParsedInstruction or a located error.

Main Components
---------------
- **parser**: Lexer, line parser and multi-line source driver
- **isa**: The closed opcode table and instruction categories
- **cli**: The ``mixcheck`` command-line tool

Quick Start
-----------
Parse a line:
    >>> from mixparse import parse_line
    >>> instr = parse_line("JLE 10,1")
    >>> instr.condition
    'LE'

Check a source file:
    >>> from mixparse import parse_file
    >>> result = parse_file("prog.mix")
    >>> if not result.ok:
    ...     print(result.report())

Or use the command-line tool:
    $ mixcheck check prog.mix
    $ mixcheck fmt prog.mix -o prog.canonical.mix
    $ mixcheck opcodes --category field
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mixparse.errors import (
    MixError,
    SourceLocation,
    ParseError,
    LexError,
    UnknownMnemonic,
    MalformedOperand,
    UnexpectedTrailingOperand,
    OperandRangeError,
    ErrorCollector,
    TooManyErrors,
)
from mixparse.isa import (
    Category,
    MnemonicInfo,
    OPCODE_TABLE,
    MNEMONICS,
    get_mnemonic_info,
)
from mixparse.parser import (
    Address,
    Index,
    Fields,
    Argument,
    ParsedInstruction,
    ParseResult,
    parse_line,
    parse_source,
    parse_file,
    classify_mnemonic,
    render_instruction,
)

__all__ = [
    "__version__",
    # Exception hierarchy
    "MixError",
    "SourceLocation",
    "ParseError",
    "LexError",
    "UnknownMnemonic",
    "MalformedOperand",
    "UnexpectedTrailingOperand",
    "OperandRangeError",
    "ErrorCollector",
    "TooManyErrors",
    # Opcode table
    "Category",
    "MnemonicInfo",
    "OPCODE_TABLE",
    "MNEMONICS",
    "get_mnemonic_info",
    # Parser
    "Address",
    "Index",
    "Fields",
    "Argument",
    "ParsedInstruction",
    "ParseResult",
    "parse_line",
    "parse_source",
    "parse_file",
    "classify_mnemonic",
    "render_instruction",
]
