"""
mixparse Error Hierarchy
========================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from MixError, allowing callers to catch every
parser-related error with a single except clause if desired.

Exception Hierarchy
-------------------
MixError (base)
└── ParseError (errors tied to one source line)
    ├── LexError - character outside every token class
    ├── UnknownMnemonic - opcode not in the opcode table
    ├── MalformedOperand - operand text has the wrong shape
    │   └── UnexpectedTrailingOperand - operand the category forbids
    ├── OperandRangeError - numeric operand outside its bound
    └── TooManyErrors - error limit reached while parsing a source

Every ParseError carries a source location (filename, line, column) so
the message can point at the offending character.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
          ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MixError(Exception):
    """
    Base exception for all mixparse errors.

        try:
            parse_line("LDA 4000,1")
        except MixError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Parse Exceptions
# =============================================================================

class ParseError(MixError):
    """
    Base exception for errors found while parsing an instruction line.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.mix:3:5: error: address 4000 is out of range (0..3999)
                LDA 4000,1
                    ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class LexError(ParseError):
    """
    A character that belongs to no token class.

    Only upper-case letters, digits, parentheses, colon, comma and
    space may appear in an instruction line.
    """
    pass


class UnknownMnemonic(ParseError):
    """
    The mnemonic is not an entry of the closed opcode table.

    Close matches from the table are offered as a hint, which catches
    the usual typos (``LDAN`` vs ``LDNA``, ``JXN`` vs ``JX``).
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        similar_mnemonics: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.similar_mnemonics = similar_mnemonics or []

        if not hint and self.similar_mnemonics:
            suggestions = ", ".join(f"'{m}'" for m in self.similar_mnemonics[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MalformedOperand(ParseError):
    """
    Operand text does not have the shape the mnemonic's category expects.

    Examples:
        - LDA 100 1        (missing comma)
        - ADD 100,1(0:5    (unclosed parenthesis)
        - LDA 100, 1       (space inside the operand field)
    """
    pass


class UnexpectedTrailingOperand(MalformedOperand):
    """
    A trailing operand the mnemonic's category does not allow.

    Fields ``(L:R)`` are only valid on field instructions and an
    Argument ``(n)`` only on argument instructions. Operand-less
    mnemonics (NOP, HALT, NUM, CHAR) accept nothing at all.
    """

    def __init__(
        self,
        mnemonic: str,
        operand: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        allowed: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.operand = operand
        self.allowed = allowed

        hint = f"{mnemonic} accepts {allowed}" if allowed else None

        super().__init__(
            f"unexpected {operand} after '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class OperandRangeError(ParseError):
    """
    A numeric operand outside its declared bound.

    Address must lie in 0..3999 and Index in 1..5.
    """

    def __init__(
        self,
        operand: str,
        value: int,
        minimum: int,
        maximum: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        self.value = value
        self.minimum = minimum
        self.maximum = maximum

        super().__init__(
            f"{operand} {value} is out of range ({minimum}..{maximum})",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects errors and warnings while a multi-line source is parsed.

    Lines are independent, so the source driver records each failure
    here and moves on to the next line instead of stopping.

    Example:
        collector = ErrorCollector(max_errors=100)
        try:
            for line in lines:
                try:
                    parse_line(line)
                except ParseError as e:
                    collector.add(e)
        except TooManyErrors:
            pass

        if collector.has_errors():
            print(collector.report())  # notes the cut-off if truncated
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[ParseError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors
        self.truncated = False

    def add(self, error: ParseError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            self.truncated = True
            raise TooManyErrors(f"too many errors ({self.max_errors}), stopping")

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        if self.truncated:
            lines.append(f"stopped after {self.max_errors} errors")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)


class TooManyErrors(ParseError):
    """Raised when the error limit of an ErrorCollector is reached."""

    def __init__(self, message: str = "too many errors"):
        super().__init__(message)
