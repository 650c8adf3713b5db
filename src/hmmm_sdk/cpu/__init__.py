"""
HMMM SDK CPU Package
====================

This package holds the HMMM instruction set and the instruction codec
shared by the assembler, the disassembler, and the machine state.

Modules:
    hmmm: Instruction table, operand kinds, and table lookups
    operands: Encoding and decoding of a single operand
    instruction: The Instruction value and its text/binary codec
    program: Immutable instruction sequences and memory images

Usage:
    from hmmm_sdk.cpu import Instruction, lookup_by_name

    ins = Instruction.from_text("addn r1 -1")
    print(ins.binary_text)
"""

from hmmm_sdk.cpu.hmmm import (
    # Core types
    OperandKind,
    InstructionType,
    # Master instruction table
    INSTRUCTION_TABLE,
    MNEMONICS,
    HALT_WORD,
    # Lookup functions
    lookup_by_name,
    lookup_by_pattern,
    is_valid_instruction,
    validate_table,
    build_table,
    # Word helpers
    format_word,
    nibbles_to_word,
    word_to_nibbles,
)
from hmmm_sdk.cpu.operands import encode_operand, decode_operand
from hmmm_sdk.cpu.instruction import Instruction
from hmmm_sdk.cpu.program import Program, MEMORY_SIZE

__all__ = [
    "OperandKind",
    "InstructionType",
    "INSTRUCTION_TABLE",
    "MNEMONICS",
    "HALT_WORD",
    "lookup_by_name",
    "lookup_by_pattern",
    "is_valid_instruction",
    "validate_table",
    "build_table",
    "format_word",
    "nibbles_to_word",
    "word_to_nibbles",
    "encode_operand",
    "decode_operand",
    "Instruction",
    "Program",
    "MEMORY_SIZE",
]
