"""
HMMM Program
============

An ordered, immutable sequence of instructions where the index of each
instruction is its address. Assembling or decoding a file produces one
Program; changing it means building a new one.
"""

from typing import Iterable, Iterator, Union

from hmmm_sdk.cpu.hmmm import HALT_WORD
from hmmm_sdk.cpu.instruction import Instruction
from hmmm_sdk.errors import MemoryOverflowError

# Instruction memory of the HMMM machine
MEMORY_SIZE = 256


class Program:
    """
    Immutable list of instructions, addressed from 0.

    Example:
        >>> program = Program([Instruction.from_text("halt")])
        >>> program.binary_lines()
        ['0000 0000 0000 0000']
    """

    __slots__ = ("_instructions",)

    def __init__(self, instructions: Iterable[Instruction] = ()):
        self._instructions: tuple[Instruction, ...] = tuple(instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return Program(self._instructions[index])
        return self._instructions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._instructions == other._instructions

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:
        return f"Program({len(self)} instructions)"

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return self._instructions

    def binary_lines(self) -> list[str]:
        """One four-nibble line per instruction."""
        return [instruction.binary_text for instruction in self._instructions]

    def source_lines(self) -> list[str]:
        """One labeled source line per instruction: '<index> <mnemonic> <operands>'."""
        return [
            f"{index} {instruction.source_text}"
            for index, instruction in enumerate(self._instructions)
        ]

    def to_memory_image(self, size: int = MEMORY_SIZE) -> tuple[Instruction, ...]:
        """
        Lay the program out in a fixed-size instruction memory.

        Unused slots hold the all-zero word, which decodes as ``halt``.

        Raises:
            MemoryOverflowError: If the program is longer than ``size``
        """
        if len(self) > size:
            raise MemoryOverflowError(len(self), size)
        filler = Instruction.from_word(HALT_WORD)
        return self._instructions + (filler,) * (size - len(self))
