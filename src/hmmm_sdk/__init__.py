"""
HMMM SDK - Toolchain for the Harvey Mudd Miniature Machine
==========================================================

This package translates programs for HMMM, a 16-bit teaching instruction
set, between labeled assembly source and the binary encoding, and builds
the initial machine state an execution engine would run.

Main Components
---------------
- **cpu**: Instruction table and the instruction codec
    Maps mnemonics with typed operands to 16-bit words and back

- **assembler**: Assembly source (.hmmm) to Program and binary (.hb)

- **disassembler**: Binary (.hb) to Program and labeled source

- **emulator**: Machine state (memory image, registers, program counter)

Quick Start
-----------
Assemble a program:
    >>> from hmmm_sdk.assembler import Assembler
    >>> asm = Assembler()
    >>> program = asm.assemble_file("countdown.hmmm")
    >>> asm.write_binary("countdown.hb")

Decode it again:
    >>> from hmmm_sdk.disassembler import Disassembler
    >>> print(Disassembler().render(program))

Or use the command-line tool:
    $ hmmm countdown.hmmm -o countdown.hb
    $ hmmm countdown.hb -o copy.hmmm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hmmm_sdk.errors import (
    HmmmError,
    ErrorKind,
    SourceLocation,
    LineFields,
    CompileError,
    InstructionLookupError,
    ArgumentError,
    OperandValueError,
    CorruptedBinaryError,
    LineNumberError,
    InstructionTableError,
    MemoryOverflowError,
)

from hmmm_sdk.cpu import (
    OperandKind,
    InstructionType,
    INSTRUCTION_TABLE,
    Instruction,
    Program,
    lookup_by_name,
    lookup_by_pattern,
)

from hmmm_sdk.assembler import Assembler, assemble, assemble_file
from hmmm_sdk.disassembler import Disassembler
from hmmm_sdk.emulator import MachineState
from hmmm_sdk.config import ToolchainConfig, get_default_config, set_default_config

__all__ = [
    "__version__",
    # Exception hierarchy
    "HmmmError",
    "ErrorKind",
    "SourceLocation",
    "LineFields",
    "CompileError",
    "InstructionLookupError",
    "ArgumentError",
    "OperandValueError",
    "CorruptedBinaryError",
    "LineNumberError",
    "InstructionTableError",
    "MemoryOverflowError",
    # Instruction set and codec
    "OperandKind",
    "InstructionType",
    "INSTRUCTION_TABLE",
    "Instruction",
    "Program",
    "lookup_by_name",
    "lookup_by_pattern",
    # Tools
    "Assembler",
    "assemble",
    "assemble_file",
    "Disassembler",
    "MachineState",
    # Configuration
    "ToolchainConfig",
    "get_default_config",
    "set_default_config",
]
