"""
mixparse Command-Line Interface
===============================

This package provides the ``mixcheck`` tool, a Click-based CLI with
three subcommands:

- **check**: parse files and report every failing line
- **fmt**: rewrite a file in canonical form
- **opcodes**: list the opcode table
"""

__all__ = ["mixcheck"]
