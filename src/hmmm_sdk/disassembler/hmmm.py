"""
HMMM Disassembler
=================

Reads compiled HMMM binary files (.hb) back into a Program and renders
programs as labeled assembly source.

Binary Format
-------------
One instruction per line, four 4-bit nibbles separated by whitespace.
The address of an instruction is its position in the file:

    0001 0000 0000 0101
    0000 0000 0000 0000

renders as:

    0 setn r0, 5
    1 halt

Usage:
    disasm = Disassembler()
    program = disasm.disassemble_file("countdown.hb")
    print(disasm.render(program))
"""

import logging
from pathlib import Path
from typing import Iterable

from hmmm_sdk.cpu.instruction import Instruction
from hmmm_sdk.cpu.program import Program
from hmmm_sdk.errors import CompileError, SourceLocation

logger = logging.getLogger(__name__)


class Disassembler:
    """
    Decoder for HMMM binary files.

    Every line must hold one instruction word, since a line's position
    is its address. Only blank lines at the end of the input are dropped.
    The first bad line stops the run.
    """

    def disassemble_lines(
        self,
        lines: Iterable[str],
        filename: str = "<input>",
    ) -> Program:
        """
        Decode binary lines into a Program.

        Raises:
            CompileError: On the first corrupted or unmatched line, with
                its 0-based index and raw text attached
        """
        lines = list(lines)
        while lines and not lines[-1].strip():
            lines.pop()

        instructions: list[Instruction] = []

        for index, line in enumerate(lines):
            try:
                instruction = Instruction.from_binary(line)
            except CompileError as error:
                location = SourceLocation(filename, index)
                logger.debug(f"{location}: {error.kind}")
                raise error.with_context(location, line) from error
            instructions.append(instruction)

        program = Program(instructions)
        logger.info(f"Decoded {len(program)} instructions from {filename}")
        return program

    def disassemble_string(self, text: str, filename: str = "<input>") -> Program:
        """Decode the text of a binary file."""
        return self.disassemble_lines(text.splitlines(), filename)

    def disassemble_file(self, filepath: str | Path) -> Program:
        """
        Decode a binary file.

        Raises:
            FileNotFoundError: If the file does not exist
            CompileError: On the first bad line
        """
        path = Path(filepath)
        return self.disassemble_string(path.read_text(encoding="utf-8"), str(path))

    def render(self, program: Program) -> str:
        """Render a program as labeled source, one instruction per line."""
        return render_source(program)


def render_source(program: Program) -> str:
    """Labeled source text with no newline after the last line."""
    return "\n".join(program.source_lines())


def write_source(program: Program, filepath: str | Path) -> None:
    """Write a program as a labeled assembly source file."""
    Path(filepath).write_text(render_source(program), encoding="utf-8")
    logger.debug(f"Wrote {len(program)} source lines to {filepath}")
