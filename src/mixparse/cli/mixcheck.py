"""
mixcheck - MIX Instruction Checker Command-Line Interface
=========================================================

Command-line front end for the instruction parser.

Usage Examples
--------------
Check one or more files:
    $ mixcheck check prog.mix lib.mix

Dump parsed instructions as JSON:
    $ mixcheck check --json prog.mix

Rewrite a file in canonical form:
    $ mixcheck fmt prog.mix -o prog.canonical.mix

List the opcode table:
    $ mixcheck opcodes --category field

Exit Codes
----------
0 - Every line parsed
1 - At least one line failed to parse
2 - Invalid arguments or unreadable file
3 - Internal error
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from mixparse import __version__
from mixparse.cli.errors import ExitCode, handle_cli_exception
from mixparse.isa import OPCODE_TABLE, Category
from mixparse.parser import ParseResult, parse_file
from mixparse.parser.source import DEFAULT_MAX_ERRORS

logger = logging.getLogger(__name__)


CATEGORY_NAMES = {str(category): category for category in Category}


# =============================================================================
# CLI Context
# =============================================================================

class Context:
    """Shared options of all subcommands."""

    def __init__(self) -> None:
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def _print_errors(result: ParseResult) -> None:
    for error in result.errors:
        click.echo(str(error), err=True)
    if result.truncated:
        click.echo(f"{result.filename}: too many errors, stopped", err=True)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="mixcheck")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Check MIX instruction source files.

    Every line holds one instruction, e.g. 'LDA 2000,1(0:5)' or 'HALT'.
    Lines are parsed independently; every failing line is reported.
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# check
# =============================================================================

@main.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print parsed instructions and diagnostics as JSON",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_ERRORS,
    show_default=True,
    help="Stop checking a file after this many errors",
)
@pass_context
def check(ctx: Context, files: tuple[Path, ...], as_json: bool, max_errors: int) -> None:
    """
    Parse FILES and report every malformed line.

    \b
    Examples:
        mixcheck check prog.mix
        mixcheck check --json prog.mix > prog.json
    """
    try:
        results = [parse_file(path, max_errors=max_errors) for path in files]
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    for result in results:
        logger.debug(
            "%s: %d instructions, %d errors, %d warnings",
            result.filename, len(result.instructions),
            len(result.errors), len(result.warnings),
        )

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        for result in results:
            _print_errors(result)
            if result.ok:
                click.echo(f"{result.filename}: {len(result.instructions)} instructions OK")
            else:
                click.echo(
                    f"{result.filename}: {len(result.errors)} errors, "
                    f"{len(result.instructions)} instructions OK",
                    err=True,
                )

    if not all(result.ok for result in results):
        sys.exit(ExitCode.PARSE_ERROR)


# =============================================================================
# fmt
# =============================================================================

@main.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: print to stdout)",
)
@pass_context
def fmt(ctx: Context, input_file: Path, output: Optional[Path]) -> None:
    """
    Rewrite INPUT_FILE with every instruction in canonical form.

    Blank lines are dropped, leading zeros removed, and operands written
    as ADDRESS,INDEX(L:R) or ADDRESS,INDEX(n). Nothing is written if
    any line fails to parse.
    """
    try:
        result = parse_file(input_file)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose)

    if not result.ok:
        _print_errors(result)
        sys.exit(ExitCode.PARSE_ERROR)

    text = result.render()
    if output is None:
        click.echo(text, nl=False)
    else:
        output.write_text(text, encoding="utf-8")
        if ctx.verbose:
            click.echo(f"Wrote {len(result.instructions)} instructions to {output}")


# =============================================================================
# opcodes
# =============================================================================

@main.command()
@click.option(
    "-c", "--category",
    type=click.Choice(sorted(CATEGORY_NAMES), case_sensitive=False),
    default=None,
    help="Only list mnemonics of this category",
)
def opcodes(category: Optional[str]) -> None:
    """
    List the mnemonics the parser accepts.

    \b
    Example:
        mixcheck opcodes --category non-field
    """
    wanted = CATEGORY_NAMES[category.lower()] if category else None

    click.echo(f"{'MNEMONIC':<10}{'CATEGORY':<11}{'REG':<5}{'NEG':<5}COND")
    for name in sorted(OPCODE_TABLE):
        info = OPCODE_TABLE[name]
        if wanted is not None and info.category is not wanted:
            continue
        click.echo(
            f"{name:<10}{str(info.category):<11}{info.register or '-':<5}"
            f"{'N' if info.negated else '-':<5}{info.condition or '-'}"
        )


if __name__ == "__main__":
    main()
