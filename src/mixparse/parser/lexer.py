"""
MIX Instruction Line Lexer
==========================

This module implements the tokenizer for a single instruction line. It
converts the line text into a list of tokens that the parser matches
against the instruction grammar.

Token Types
-----------
- WORD: Mnemonics (upper-case letter followed by letters/digits)
- NUMBER: Unsigned decimal integer literal
- Delimiters: ``(``, ``)``, ``:``, ``,``
- SPACE: A run of one or more spaces
- EOL: End of the line

The character set is closed: upper-case letters A-Z, digits 0-9,
parentheses, colon, comma and space. Anything else is a LexError.

Example
-------
>>> from mixparse.parser.lexer import Lexer
>>> for token in Lexer("LDA 2000,1(0:5)").tokenize():
...     print(token)
Token(WORD, 'LDA', 1)
Token(SPACE, 4)
Token(NUMBER, 2000, 5)
Token(COMMA, ',', 9)
Token(NUMBER, 1, 10)
Token(LPAREN, '(', 11)
Token(NUMBER, 0, 12)
Token(COLON, ':', 13)
Token(NUMBER, 5, 14)
Token(RPAREN, ')', 15)
Token(EOL, 16)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import string

from mixparse.errors import LexError, SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types of an instruction line."""

    EOL = auto()     # End of line

    WORD = auto()    # Mnemonic
    NUMBER = auto()  # Decimal integer

    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COLON = auto()   # :
    COMMA = auto()   # ,
    SPACE = auto()   # one or more spaces


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of an instruction line.

    Attributes:
        type: The TokenType classification
        value: The token text, or the integer value for NUMBER tokens
        column: Column of the first character (1-indexed)
        text: The characters as written (keeps leading zeros of numbers)
    """
    type: TokenType
    value: str | int | None
    column: int
    text: str = ""

    def __repr__(self) -> str:
        if self.value is not None and self.type is not TokenType.SPACE:
            return f"Token({self.type.name}, {self.value!r}, {self.column})"
        return f"Token({self.type.name}, {self.column})"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes one instruction line.

    Usage:
        lexer = Lexer("JLE 10,1", "prog.mix", line_number=7)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The line being tokenized (without line terminator)
        filename: Name of the source file (for error reporting)
        line_number: Line number of this line in its file
    """

    WORD_START = string.ascii_uppercase

    WORD_CHARS = string.ascii_uppercase + string.digits

    SINGLE_CHAR_TOKENS = {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
    }

    # Integers are converted with int() and rendered with str(); both are
    # capped at 4300 digits by the interpreter's default conversion limit.
    MAX_NUMBER_DIGITS = 4300

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        self.source = source
        self.filename = filename
        self.line_number = line_number
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the line.

        Yields:
            Token objects, always ending with an EOL token

        Raises:
            LexError: If a character belongs to no token class
        """
        while not self._at_end():
            yield self._scan_token()

        yield Token(TokenType.EOL, None, self._pos + 1)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character, or empty string past the end."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        char = self.source[self._pos]
        self._pos += 1
        return char

    def _error(self, message: str, column: int, hint: str | None = None) -> LexError:
        """Create a LexError pointing at the given column."""
        location = SourceLocation(self.filename, self.line_number, column)
        return LexError(message, location, hint=hint, source_line=self.source)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        column = self._pos + 1
        char = self._peek()

        if char == " ":
            while self._peek() == " ":
                self._advance()
            return Token(TokenType.SPACE, " ", column, self.source[column - 1:self._pos])

        if char in self.WORD_START:
            return self._scan_word(column)

        if char in string.digits:
            return self._scan_number(column)

        if char in self.SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(self.SINGLE_CHAR_TOKENS[char], char, column, char)

        if char in string.ascii_lowercase:
            raise self._error(
                f"unexpected character '{char}'",
                column,
                hint="mnemonics are written in upper case",
            )
        if char == "\t":
            raise self._error("unexpected tab character", column,
                              hint="separate mnemonic and operands with spaces")
        raise self._error(f"unexpected character {char!r}", column)

    def _scan_word(self, column: int) -> Token:
        """Scan a mnemonic: an upper-case letter followed by letters and digits."""
        chars = []
        # Note: '' in a string is True, so test for the empty string first
        while self._peek() and self._peek() in self.WORD_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        return Token(TokenType.WORD, name, column, name)

    def _scan_number(self, column: int) -> Token:
        """Scan an unsigned decimal integer."""
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        text = "".join(chars)
        digits = text.lstrip("0") or "0"
        if len(digits) > self.MAX_NUMBER_DIGITS:
            raise self._error(
                f"number too long ({len(digits)} digits)", column,
                hint=f"numbers are limited to {self.MAX_NUMBER_DIGITS} significant digits",
            )
        return Token(TokenType.NUMBER, int(digits), column, text)


def tokenize(source: str, filename: str = "<input>", line_number: int = 1) -> list[Token]:
    """Tokenize a line into a list (convenience wrapper around Lexer)."""
    return list(Lexer(source, filename, line_number).tokenize())
