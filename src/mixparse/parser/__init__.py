"""
MIX Instruction Parser
======================

This package recognizes the instruction-line syntax of a MIX-like
machine language and turns each line into an immutable
ParsedInstruction.

Main Components
---------------
- **Lexer**: Splits a line into tokens
- **InstructionParser**: Classifies the mnemonic and parses its operands
- **parse_source / parse_file**: Parse many lines, collecting diagnostics

Parsing Process
---------------
1. **Tokenizing**: letters, digits, ``( ) : ,`` and spaces; any other
   character is a LexError.
2. **Classification**: the mnemonic is looked up in the opcode table,
   which yields its category (ONLY_NAME, FIELD, NON_FIELD, ARG).
3. **Operands**: ``ADDRESS,INDEX`` plus the trailing operand the
   category allows, with range checks on address and index.

Example Usage
-------------
>>> from mixparse.parser import parse_line
>>> instr = parse_line("LD1N 2000,3(1:5)")
>>> instr.register, instr.negated, instr.fields
('1', True, Fields(left=1, right=5))
>>> str(instr)
'LD1N 2000,3(1:5)'
"""

from mixparse.parser.lexer import Lexer, Token, TokenType, tokenize
from mixparse.parser.model import (
    ADDRESS_MAX,
    ADDRESS_MIN,
    INDEX_MAX,
    INDEX_MIN,
    Address,
    Argument,
    Fields,
    Index,
    Operand,
    ParsedInstruction,
    TrailingOperand,
    render_instruction,
)
from mixparse.parser.parser import InstructionParser, classify_mnemonic, parse_line
from mixparse.parser.source import ParseResult, parse_file, parse_source

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    # Data model
    "ADDRESS_MIN",
    "ADDRESS_MAX",
    "INDEX_MIN",
    "INDEX_MAX",
    "Address",
    "Index",
    "Fields",
    "Argument",
    "Operand",
    "TrailingOperand",
    "ParsedInstruction",
    "render_instruction",
    # Parser
    "InstructionParser",
    "parse_line",
    "classify_mnemonic",
    # Source driver
    "ParseResult",
    "parse_source",
    "parse_file",
]
