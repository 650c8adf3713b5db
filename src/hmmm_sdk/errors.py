"""
HMMM SDK Error Hierarchy
========================

This module defines the exception hierarchy for the entire HMMM SDK.
All exceptions inherit from HmmmError, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HmmmError (base)
├── CompileError (codec and source errors, carries an ErrorKind)
│   ├── InstructionLookupError - no table entry for a mnemonic or word
│   ├── ArgumentError - wrong number or shape of operands
│   ├── OperandValueError - operand text out of range or unparsable
│   ├── CorruptedBinaryError - malformed nibble line
│   └── LineNumberError - missing or out-of-sequence line label
├── InstructionTableError - instruction table fails its invariants
└── MemoryOverflowError - program does not fit the memory image

Every compile error is terminal for the run that raised it. The assembler
and disassembler attach the source location, the raw line, and the parsed
fields before re-raising, so the message a user sees looks like:

    program.hmmm:3: error: register 'r16' is out of range
        2 setn r16 5
    hint: registers are r0 to r15
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HmmmError(Exception):
    """
    Base exception for all HMMM SDK errors.

        try:
            assembler.assemble_file("program.hmmm")
        except HmmmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """
    The closed set of compile error kinds.

    Member names follow the error taxonomy used in reports, so
    ``str(ErrorKind.INVALID_REGISTER)`` prints ``InvalidRegister``.
    """
    INSTRUCTION_DOES_NOT_EXIST = "InstructionDoesNotExist"
    TOO_MANY_ARGUMENTS = "TooManyArguments"
    TOO_FEW_ARGUMENTS = "TooFewArguments"
    INVALID_ARGUMENT_TYPE = "InvalidArgumentType"
    INVALID_REGISTER = "InvalidRegister"
    INVALID_SIGNED_NUMBER = "InvalidSignedNumber"
    INVALID_UNSIGNED_NUMBER = "InvalidUnsignedNumber"
    INVALID_NUMBER = "InvalidNumber"
    CORRUPTED_BINARY = "CorruptedBinary"
    LINE_NUMBER_NOT_PRESENT = "LineNumberNotPresent"
    INVALID_LINE_NUMBER = "InvalidLineNumber"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Where in an input file an error occurred.

    Attributes:
        filename: Name of the input file (or "<input>" for in-memory lines)
        line: Line index (0-based, matching the compile report)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


@dataclass(frozen=True)
class LineFields:
    """
    How a source line was interpreted when it failed.

    Attributes:
        label: The leading line label token ("" when absent)
        mnemonic: The instruction mnemonic token ("" when absent)
        args: The remaining operand tokens
    """
    label: str
    mnemonic: str
    args: tuple[str, ...] = ()

    @classmethod
    def from_parts(cls, parts: list[str]) -> "LineFields":
        label = parts[0] if len(parts) > 0 else ""
        mnemonic = parts[1] if len(parts) > 1 else ""
        return cls(label, mnemonic, tuple(parts[2:]))


# =============================================================================
# Compile Exceptions
# =============================================================================

class CompileError(HmmmError):
    """
    Base exception for codec and source errors.

    Attributes:
        kind: The ErrorKind of this failure
        message: The error description
        location: Where in the input the error occurred (optional)
        source_line: The raw text of the failing line (optional)
        fields: The parsed (label, mnemonic, args) of the line (optional)
        hint: A suggestion for fixing the error (optional)
    """

    default_kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        fields: Optional[LineFields] = None,
        hint: Optional[str] = None,
    ):
        kind = kind or self.default_kind
        if kind is None:
            raise ValueError(f"{type(self).__name__} requires an error kind")
        self.kind = kind
        self.message = message
        self.location = location
        self.source_line = source_line
        self.fields = fields
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.hmmm:4: error: unknown instruction 'jmp'
                3 jmp 7
            hint: jumps to a constant address use 'jumpn'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def with_context(
        self,
        location: SourceLocation,
        source_line: str,
        fields: Optional[LineFields] = None,
    ) -> "CompileError":
        """Return a copy of this error annotated with where it happened."""
        return type(self)(
            self.message,
            kind=self.kind,
            location=location,
            source_line=source_line,
            fields=fields,
            hint=self.hint,
        )


class InstructionLookupError(CompileError):
    """
    No instruction table entry matches.

    Raised on the text path for an unknown mnemonic and on the binary
    path for a word that no entry's pattern matches.
    """
    default_kind = ErrorKind.INSTRUCTION_DOES_NOT_EXIST


class ArgumentError(CompileError):
    """
    Operand count or shape does not fit the instruction's signature.

    Examples:
        add r1 r2          ; TooFewArguments
        halt r0            ; TooManyArguments
        jumpr 5            ; InvalidArgumentType (expected a register)
    """
    pass


class OperandValueError(CompileError):
    """
    Operand text that cannot be encoded in its field.

    Examples:
        setn r16 0         ; InvalidRegister
        setn r1 128        ; InvalidSignedNumber
        loadn r1 -1        ; InvalidUnsignedNumber
        data xyz           ; InvalidNumber
    """
    pass


class CorruptedBinaryError(CompileError):
    """
    A binary line that is not exactly four 4-bit nibble tokens.
    """
    default_kind = ErrorKind.CORRUPTED_BINARY


class LineNumberError(CompileError):
    """
    Source line label missing or out of sequence.

    Labels must count processed lines from 0; comment and blank lines
    do not count.
    """
    pass


# =============================================================================
# Table and Memory Exceptions
# =============================================================================

class InstructionTableError(HmmmError):
    """
    The instruction table violates one of its construction invariants.

    Raised once, when the table is built. Seeing this means the table
    definition itself is wrong, not the user's program.
    """
    pass


class MemoryOverflowError(HmmmError):
    """
    A program has more instructions than the memory image holds.
    """

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"program has {size} instructions but memory holds {capacity}"
        )
