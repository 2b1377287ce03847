"""
MIX Instruction Line Parser
===========================

This module turns the token list of one instruction line into a
ParsedInstruction. Each line is parsed on its own; no state carries
over from one line to the next.

Line Shapes
-----------
| Category  | Syntax                         | Example            |
|-----------|--------------------------------|--------------------|
| ONLY_NAME | MNEMONIC                       | HALT               |
| FIELD     | MNEMONIC ADDR,INDEX[(L:R)]     | LDAN 2000,1(0:5)   |
| NON_FIELD | MNEMONIC ADDR,INDEX            | JLE 10,1           |
| ARG       | MNEMONIC ADDR,INDEX[(n)]       | OUT 1000,1(18)     |

The mnemonic's category alone decides which trailing operand is
allowed. Leading and trailing spaces around the instruction are
ignored; a run of spaces separates the mnemonic from its operands, and
no space may appear inside the operand field.

Errors
------
- LexError: character outside the token classes (raised by the lexer)
- UnknownMnemonic: mnemonic not in the opcode table
- MalformedOperand: wrong punctuation or operand shape
- UnexpectedTrailingOperand: Fields/Argument the category forbids
- OperandRangeError: Address outside 0..3999 or Index outside 1..5
"""

import logging
from typing import Optional

from mixparse.errors import (
    MalformedOperand,
    OperandRangeError,
    SourceLocation,
    UnexpectedTrailingOperand,
    UnknownMnemonic,
)
from mixparse.isa import (
    Category,
    MnemonicInfo,
    find_similar_mnemonics,
    get_mnemonic_info,
)
from mixparse.parser.lexer import Lexer, Token, TokenType
from mixparse.parser.model import (
    ADDRESS_MAX,
    ADDRESS_MIN,
    INDEX_MAX,
    INDEX_MIN,
    Address,
    Argument,
    Fields,
    Index,
    ParsedInstruction,
    TrailingOperand,
)

logger = logging.getLogger(__name__)


# What each category accepts after ADDRESS,INDEX (for error hints)
_ALLOWED_TRAILING = {
    Category.ONLY_NAME: "no operands",
    Category.FIELD: "an optional field specification (L:R)",
    Category.NON_FIELD: "no field specification or argument",
    Category.ARG: "an optional argument (n)",
}


# =============================================================================
# Parser Implementation
# =============================================================================

class InstructionParser:
    """
    Parses one instruction line.

    Usage:
        parser = InstructionParser("ADD 2000,3(0:5)", "prog.mix", line_number=4)
        instruction = parser.parse()

    Attributes:
        source: The line text (a trailing line terminator is dropped)
        filename: Source filename for error reporting
        line_number: Line number for error reporting
    """

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        self.source = _strip_line_terminator(source)
        self.filename = filename
        self.line_number = line_number
        self._tokens: list[Token] = []
        self._pos = 0

    def parse(self) -> ParsedInstruction:
        """
        Parse the line.

        Returns:
            The ParsedInstruction for this line

        Raises:
            ParseError: One of its subclasses, describing the first problem found
        """
        self._tokens = _trim_spaces(
            list(Lexer(self.source, self.filename, self.line_number).tokenize())
        )
        self._pos = 0

        start = self._current()
        mnemonic = self._parse_mnemonic()
        location = self._location(start)

        if mnemonic.category is Category.ONLY_NAME:
            if not self._check(TokenType.EOL):
                raise self._unexpected_trailing(mnemonic, "operand text", self._current())
            instruction = ParsedInstruction(mnemonic, location=location)
        else:
            address, index = self._parse_address_index(mnemonic)
            trailing = self._parse_trailing(mnemonic)
            if not self._check(TokenType.EOL):
                raise self._malformed(
                    f"unexpected text after operands of '{mnemonic.name}'",
                    self._current(),
                )
            instruction = ParsedInstruction(mnemonic, address, index, trailing, location)

        logger.debug("%s:%d: parsed %s", self.filename, self.line_number, instruction)
        return instruction

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._current()
        if token.type is not TokenType.EOL:
            self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._current().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Expect a specific token type, raise MalformedOperand otherwise."""
        if not self._check(token_type):
            raise self._malformed(message, self._current())
        return self._advance()

    def _location(self, token: Token) -> SourceLocation:
        return SourceLocation(self.filename, self.line_number, token.column)

    # =========================================================================
    # Error Helpers
    # =========================================================================

    def _malformed(self, message: str, token: Token, hint: Optional[str] = None) -> MalformedOperand:
        return MalformedOperand(
            message, self._location(token), hint=hint, source_line=self.source
        )

    def _unexpected_trailing(
        self, mnemonic: MnemonicInfo, operand: str, token: Token
    ) -> UnexpectedTrailingOperand:
        return UnexpectedTrailingOperand(
            mnemonic.name,
            operand,
            location=self._location(token),
            source_line=self.source,
            allowed=_ALLOWED_TRAILING[mnemonic.category],
        )

    def _range_error(self, operand: str, token: Token, minimum: int, maximum: int) -> OperandRangeError:
        return OperandRangeError(
            operand,
            token.value,
            minimum,
            maximum,
            location=self._location(token),
            source_line=self.source,
        )

    # =========================================================================
    # Mnemonic
    # =========================================================================

    def _parse_mnemonic(self) -> MnemonicInfo:
        """Classify the leading word against the opcode table."""
        token = self._current()
        if token.type is TokenType.EOL:
            raise self._malformed("expected an instruction mnemonic", token)
        if token.type is not TokenType.WORD:
            raise self._malformed(
                "instruction must start with a mnemonic", token,
                hint="e.g. 'LDA 2000,1' or 'HALT'",
            )
        self._advance()

        info = get_mnemonic_info(token.value)
        if info is None:
            raise UnknownMnemonic(
                token.value,
                location=self._location(token),
                source_line=self.source,
                similar_mnemonics=find_similar_mnemonics(token.value),
            )
        return info

    # =========================================================================
    # Operands
    # =========================================================================

    def _parse_address_index(self, mnemonic: MnemonicInfo) -> tuple[Address, Index]:
        """Parse ``<space><Address>,<Index>``."""
        if self._check(TokenType.EOL):
            raise self._malformed(
                f"'{mnemonic.name}' requires operands ADDRESS,INDEX",
                self._current(),
            )
        self._expect(
            TokenType.SPACE,
            f"expected a space between '{mnemonic.name}' and its operands",
        )

        address_token = self._expect(TokenType.NUMBER, "expected an address")
        if not ADDRESS_MIN <= address_token.value <= ADDRESS_MAX:
            raise self._range_error("address", address_token, ADDRESS_MIN, ADDRESS_MAX)

        if self._check(TokenType.SPACE):
            raise self._malformed(
                "unexpected space in operand field", self._current(),
                hint="write operands without spaces, e.g. '2000,1'",
            )
        self._expect(TokenType.COMMA, "expected ',' between address and index")

        index_token = self._expect(TokenType.NUMBER, "expected an index after ','")
        if not INDEX_MIN <= index_token.value <= INDEX_MAX:
            raise self._range_error("index", index_token, INDEX_MIN, INDEX_MAX)

        return Address(address_token.value), Index(index_token.value)

    def _parse_trailing(self, mnemonic: MnemonicInfo) -> Optional[TrailingOperand]:
        """
        Parse an optional ``(L:R)`` or ``(n)`` after the index.

        The shape is read first, then checked against the category so
        the error names what was actually written.
        """
        lparen = self._match(TokenType.LPAREN)
        if lparen is None:
            return None

        first = self._expect(TokenType.NUMBER, "expected a number after '('")
        trailing: TrailingOperand
        if self._match(TokenType.COLON):
            second = self._expect(TokenType.NUMBER, "expected a number after ':'")
            trailing = Fields(first.value, second.value)
        else:
            trailing = Argument(first.value)
        self._expect(TokenType.RPAREN, "expected ')'")

        if isinstance(trailing, Fields) and not mnemonic.allows_fields:
            raise self._unexpected_trailing(
                mnemonic, f"field specification {trailing.render()}", lparen
            )
        if isinstance(trailing, Argument) and not mnemonic.allows_argument:
            raise self._unexpected_trailing(
                mnemonic, f"argument {trailing.render()}", lparen
            )
        return trailing


# =============================================================================
# Helpers
# =============================================================================

def _strip_line_terminator(text: str) -> str:
    if text.endswith("\n"):
        text = text[:-1]
    if text.endswith("\r"):
        text = text[:-1]
    return text


def _trim_spaces(tokens: list[Token]) -> list[Token]:
    """Drop SPACE tokens at the start of the line and right before EOL."""
    if tokens and tokens[0].type is TokenType.SPACE:
        tokens = tokens[1:]
    if len(tokens) >= 2 and tokens[-2].type is TokenType.SPACE:
        tokens = tokens[:-2] + tokens[-1:]
    return tokens


def parse_line(text: str, line: int = 1, filename: str = "<input>") -> ParsedInstruction:
    """
    Parse one instruction line.

    Args:
        text: The instruction text, e.g. "LD1 2000,3"
        line: Line number used in error locations
        filename: Filename used in error locations

    Returns:
        The ParsedInstruction

    Raises:
        ParseError: LexError, UnknownMnemonic, MalformedOperand,
            UnexpectedTrailingOperand or OperandRangeError
    """
    return InstructionParser(text, filename, line).parse()


def classify_mnemonic(name: str) -> MnemonicInfo:
    """
    Look up a mnemonic's category and suffix decomposition.

    Raises:
        UnknownMnemonic: If the mnemonic is not in the opcode table
    """
    info = get_mnemonic_info(name)
    if info is None:
        raise UnknownMnemonic(name, similar_mnemonics=find_similar_mnemonics(name))
    return info
