"""
Multi-Line Source Parsing
=========================

Drives the line parser over a whole source text. Lines are independent,
so a failing line is recorded in an ErrorCollector and parsing simply
continues with the next one. Blank lines are skipped.

Example Usage
-------------
>>> from mixparse.parser import parse_source
>>> result = parse_source('''
... LDA 2000,1
... STA 2001,1(0:5)
... HALT
... ''')
>>> result.ok
True
>>> [str(i) for i in result.instructions]
['LDA 2000,1', 'STA 2001,1(0:5)', 'HALT']
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from mixparse.errors import ErrorCollector, ParseError, TooManyErrors
from mixparse.parser.model import ParsedInstruction
from mixparse.parser.parser import parse_line

logger = logging.getLogger(__name__)


DEFAULT_MAX_ERRORS = 100


@dataclass
class ParseResult:
    """
    Outcome of parsing a multi-line source.

    Errors, warnings and the error-limit state live in the ErrorCollector
    that parse_source filled in.

    Attributes:
        filename: Name the source was read from
        instructions: Successfully parsed instructions in line order
        diagnostics: Collected errors and warnings
    """
    filename: str
    instructions: list[ParsedInstruction] = field(default_factory=list)
    diagnostics: ErrorCollector = field(default_factory=ErrorCollector)

    @property
    def errors(self) -> list[ParseError]:
        """One ParseError per failing line."""
        return self.diagnostics.errors

    @property
    def warnings(self) -> list[str]:
        """Messages about accepted-but-unusual input."""
        return self.diagnostics.warnings

    @property
    def truncated(self) -> bool:
        """True if parsing stopped at the error limit."""
        return self.diagnostics.truncated

    @property
    def ok(self) -> bool:
        """True if every line parsed."""
        return not self.diagnostics.has_errors()

    def report(self) -> str:
        """Format errors and warnings for display."""
        return self.diagnostics.report()

    def render(self) -> str:
        """Canonical text of all parsed instructions, one per line."""
        return "".join(f"{instruction}\n" for instruction in self.instructions)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "filename": self.filename,
            "ok": self.ok,
            "truncated": self.truncated,
            "instructions": [i.to_dict() for i in self.instructions],
            "errors": [
                {
                    "line": e.location.line if e.location else None,
                    "column": e.location.column if e.location else None,
                    "type": type(e).__name__,
                    "message": e.message,
                }
                for e in self.errors
            ],
            "warnings": list(self.warnings),
        }


def parse_source(
    text: str,
    filename: str = "<input>",
    max_errors: int = DEFAULT_MAX_ERRORS,
) -> ParseResult:
    """
    Parse every non-blank line of a source text.

    Args:
        text: Source text, one instruction per line
        filename: Name used in diagnostics
        max_errors: Stop after this many failing lines

    Returns:
        A ParseResult; errors are collected, never raised
    """
    collector = ErrorCollector(max_errors=max_errors)
    result = ParseResult(filename, diagnostics=collector)

    try:
        for line_number, line in enumerate(text.split("\n"), start=1):
            if not line.strip(" \r"):
                continue
            try:
                instruction = parse_line(line, line=line_number, filename=filename)
            except ParseError as e:
                logger.debug("%s:%d: %s", filename, line_number, e.message)
                collector.add(e)
                continue

            fields_spec = instruction.fields
            if fields_spec is not None and fields_spec.is_reversed:
                message = (
                    f"{instruction.location}: field specification "
                    f"{fields_spec.render()} has L > R"
                )
                logger.warning(message)
                collector.add_warning(message)

            result.instructions.append(instruction)
    except TooManyErrors:
        logger.warning("%s: stopped after %d errors", filename, max_errors)

    return result


def parse_file(
    path: Union[str, Path],
    max_errors: int = DEFAULT_MAX_ERRORS,
    encoding: str = "utf-8",
) -> ParseResult:
    """
    Read and parse a source file.

    Raises:
        FileNotFoundError: If the file does not exist
        UnicodeDecodeError: If the file is not valid in the given encoding
    """
    path = Path(path)
    logger.debug("parsing %s", path)
    text = path.read_text(encoding=encoding)
    return parse_source(text, filename=str(path), max_errors=max_errors)
