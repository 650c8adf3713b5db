"""
HMMM Assembler - Main Interface
===============================

This module provides the Assembler class, which turns labeled HMMM
assembly source into a Program and writes it out as a binary file.

Source Format
-------------
One instruction per line, each led by its line label:

    # countdown from 5
    0 setn r1 5          # r1 = 5
    1 addn r1 -1
    2 jnezn r1 1
    3 halt

- Blank lines and lines starting with '#' are skipped.
- Labels count the remaining lines from 0 and must not skip or repeat.
- Commas, spaces, and tabs all separate tokens.
- Anything from the first token starting with '#' is a comment.

Example Usage
-------------
>>> from hmmm_sdk.assembler import Assembler
>>> asm = Assembler()
>>> program = asm.assemble_string("0 setn r0 5\\n1 halt")
>>> program.binary_lines()
['0001 0000 0000 0101', '0000 0000 0000 0000']

The first error stops assembly; no partial program is kept and no file
is written.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from hmmm_sdk.cpu.instruction import Instruction
from hmmm_sdk.cpu.program import Program
from hmmm_sdk.errors import (
    CompileError,
    ErrorKind,
    LineFields,
    LineNumberError,
    SourceLocation,
)

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")
_LABEL = re.compile(r"[+-]?[0-9]+")

COMMENT_PREFIX = "#"


def is_skipped_line(line: str) -> bool:
    """True for blank, whitespace-only, and whole-line comment lines."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def split_source_line(line: str) -> list[str]:
    """
    Split a source line into tokens, dropping any trailing comment.

    >>> split_source_line("3 add r1, r2, r3   # sum")
    ['3', 'add', 'r1', 'r2', 'r3']
    """
    parts = [part for part in _SEPARATORS.split(line) if part]
    for position, part in enumerate(parts):
        if part.startswith(COMMENT_PREFIX):
            return parts[:position]
    return parts


def parse_label(token: str) -> Optional[int]:
    """Parse a line label, or return None if the token is not an integer."""
    if _LABEL.fullmatch(token):
        return int(token)
    return None


class Assembler:
    """
    HMMM assembler.

    Each call to one of the assemble methods is an independent run with
    its own line counter. The last successfully assembled program is kept
    for the write methods.

    Attributes:
        verbose: If True, log each assembled line at INFO level
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._program: Optional[Program] = None

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> Program:
        """
        Assemble source lines into a Program.

        Args:
            lines: Source lines, without line terminators
            filename: Name used in error locations

        Returns:
            The assembled Program

        Raises:
            CompileError: On the first invalid line, carrying its 0-based
                index, raw text, and parsed (label, mnemonic, args) fields
        """
        self._program = None
        instructions: list[Instruction] = []
        line_counter = 0

        for index, line in enumerate(lines):
            if is_skipped_line(line):
                continue

            parts = split_source_line(line)
            fields = LineFields.from_parts(parts)
            location = SourceLocation(filename, index)

            try:
                label = parse_label(parts[0]) if parts else None
                if label is None:
                    raise LineNumberError(
                        "line number not present",
                        kind=ErrorKind.LINE_NUMBER_NOT_PRESENT,
                        hint=f"start the line with its number, {line_counter}",
                    )
                if label != line_counter:
                    raise LineNumberError(
                        f"expected line number {line_counter}, got {label}",
                        kind=ErrorKind.INVALID_LINE_NUMBER,
                    )
                instruction = Instruction.from_text(" ".join(parts[1:]).lower())
            except CompileError as error:
                logger.debug(f"{location}: {error.kind}")
                raise error.with_context(location, line, fields) from error

            if self.verbose:
                logger.info(f"{line_counter:4} {instruction.source_text} => {instruction.binary_text}")
            else:
                logger.debug(f"{location}: {instruction.source_text}")

            instructions.append(instruction)
            line_counter += 1

        program = Program(instructions)
        logger.info(f"Assembled {len(program)} instructions from {filename}")
        self._program = program
        return program

    def assemble_string(self, source: str, filename: str = "<input>") -> Program:
        """Assemble source text."""
        return self.assemble_lines(source.splitlines(), filename)

    def assemble_file(self, filepath: str | Path) -> Program:
        """
        Assemble a source file.

        Raises:
            FileNotFoundError: If the file does not exist
            CompileError: On the first invalid line
        """
        path = Path(filepath)
        source = path.read_text(encoding="utf-8")
        return self.assemble_string(source, filename=str(path))

    def get_program(self) -> Program:
        """
        Return the last assembled program.

        Raises:
            RuntimeError: If nothing has been assembled successfully
        """
        if self._program is None:
            raise RuntimeError("no program has been assembled")
        return self._program

    def write_binary(self, filepath: str | Path) -> None:
        """Write the last assembled program as a binary file."""
        write_binary(self.get_program(), filepath)


# =============================================================================
# Convenience Functions
# =============================================================================

def write_binary(program: Program, filepath: str | Path) -> None:
    """
    Write a program as a binary file: four nibbles per line.

    Lines are separated by newlines with no newline after the last one.
    """
    Path(filepath).write_text("\n".join(program.binary_lines()), encoding="utf-8")
    logger.debug(f"Wrote {len(program)} instructions to {filepath}")


def assemble(source: str, filename: str = "<input>") -> Program:
    """Assemble source text with a fresh Assembler."""
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> Program:
    """Assemble a source file with a fresh Assembler."""
    return Assembler().assemble_file(filepath)
