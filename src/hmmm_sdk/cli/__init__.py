"""
HMMM SDK Command-Line Interface
===============================

- **hmmm**: HMMM assembler and disassembler

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["hmmm"]
