"""
HMMM Machine State
==================

The state an HMMM execution engine starts from:

- Instruction memory: 256 slots, the program at address 0 and the
  all-zero ``halt`` word everywhere else
- Registers: r0 - r15, signed 16-bit, all 0
- Program counter: 0

Only the initial state is defined here. Stepping the machine is left to
an execution engine built on top of this structure.
"""

from dataclasses import dataclass, field

from hmmm_sdk.cpu.instruction import Instruction
from hmmm_sdk.cpu.operands import REGISTER_COUNT
from hmmm_sdk.cpu.program import MEMORY_SIZE, Program

# Registers hold signed 16-bit values
REGISTER_MIN = -(1 << 15)
REGISTER_MAX = (1 << 15) - 1


@dataclass
class MachineState:
    """
    Complete machine state for an HMMM program.

    Attributes:
        memory: Instruction memory, one Instruction per address
        registers: r0 - r15 as Python ints in the signed 16-bit range
        program_counter: Address of the next instruction
        last_program_counter: Address of the previous instruction
    """
    memory: tuple[Instruction, ...]
    registers: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    program_counter: int = 0
    last_program_counter: int = 0

    @classmethod
    def from_program(cls, program: Program, memory_size: int = MEMORY_SIZE) -> "MachineState":
        """
        Load a program into a fresh machine.

        Raises:
            MemoryOverflowError: If the program does not fit in memory
        """
        return cls(memory=program.to_memory_image(memory_size))

    @property
    def memory_size(self) -> int:
        return len(self.memory)

    def fetch(self) -> Instruction:
        """Return the instruction at the program counter."""
        return self.memory[self.program_counter]
