"""
HMMM Instruction Codec
======================

Converts between one line of HMMM assembly and one 16-bit instruction
word. Both directions produce the same immutable ``Instruction`` value:

    >>> ins = Instruction.from_text("setn r1 -3")
    >>> ins.binary_text
    '0001 0001 1111 1101'
    >>> Instruction.from_binary("0001 0001 1111 1101").source_text
    'setn r1, -3'

Text path
---------
1. Split the line into mnemonic and operand tokens.
2. Look the mnemonic up in the instruction table.
3. Check the token count against the entry's operand signature.
4. Encode each operand into its nibble slot over the match pattern.

Binary path
-----------
1. Split the line into exactly four nibble tokens.
2. Find the first table entry whose pattern matches the word.
3. Decode each operand from its slot.

Operand text from the text path keeps the source tokens: two operands
are joined by a space, any other count by ", ". The binary path always
joins with ", ". Skipped fields (SKIP4) never appear in text.
Instructions without operands have empty operand text instead of a copy
of the mnemonic, so ``halt`` renders as ``0 halt`` and not ``0 halt halt``.
"""

import re
from dataclasses import dataclass

from hmmm_sdk.cpu.hmmm import (
    WORD_NIBBLES,
    InstructionType,
    format_word,
    lookup_by_name,
    lookup_by_pattern,
    nibbles_to_word,
    word_to_nibbles,
)
from hmmm_sdk.cpu.operands import decode_operand, encode_operand
from hmmm_sdk.errors import (
    ArgumentError,
    CorruptedBinaryError,
    ErrorKind,
    InstructionLookupError,
)

_NIBBLE = re.compile(r"[01]{4}")


@dataclass(frozen=True)
class Instruction:
    """
    One assembled HMMM instruction.

    Attributes:
        type: The instruction table entry this word belongs to
        text_form: Operand text (empty for operand-less instructions)
        binary_form: The word as four 4-character binary strings
    """
    type: InstructionType
    text_form: str
    binary_form: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.binary_form) != WORD_NIBBLES:
            raise ValueError(f"instruction word needs {WORD_NIBBLES} nibbles")
        if not self.type.matches(self.word):
            raise ValueError(
                f"{self.binary_text} does not match '{self.type.name}'"
            )

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_text(cls, line: str) -> "Instruction":
        """
        Assemble a cleaned source line such as ``"add r1 r2 r3"``.

        The line holds only the mnemonic and its operands; labels and
        comments must already be stripped.

        Raises:
            InstructionLookupError: Unknown mnemonic
            ArgumentError: Wrong operand count or a non-register where a
                register is required
            OperandValueError: Operand out of range
        """
        contents = line.split()
        if not contents:
            raise InstructionLookupError("missing instruction")

        mnemonic, tokens = contents[0], contents[1:]
        instruction_type = lookup_by_name(mnemonic)
        if instruction_type is None:
            raise InstructionLookupError(f"unknown instruction '{mnemonic}'")

        expected = instruction_type.arity
        if len(tokens) > expected:
            raise ArgumentError(
                f"'{instruction_type.name}' takes {expected} argument(s), "
                f"got {len(tokens)}",
                kind=ErrorKind.TOO_MANY_ARGUMENTS,
            )
        if len(tokens) < expected:
            raise ArgumentError(
                f"'{instruction_type.name}' takes {expected} argument(s), "
                f"got {len(tokens)}",
                kind=ErrorKind.TOO_FEW_ARGUMENTS,
            )

        nibbles = list(word_to_nibbles(instruction_type.match_pattern))
        remaining = iter(tokens)
        for kind, slot in zip(instruction_type.operands, instruction_type.slots):
            token = next(remaining) if kind.consumes_token else ""
            field = encode_operand(kind, token)
            nibbles[slot:slot + len(field)] = field

        if len(tokens) == 2:
            text_form = " ".join(tokens)
        else:
            text_form = ", ".join(tokens)

        return cls(instruction_type, text_form, tuple(nibbles))

    @classmethod
    def from_binary(cls, line: str) -> "Instruction":
        """
        Decode a binary line such as ``"0110 0001 0010 0011"``.

        Raises:
            CorruptedBinaryError: Not exactly four 4-bit binary tokens
            InstructionLookupError: No table entry matches the word
        """
        tokens = line.split()
        if len(tokens) != WORD_NIBBLES:
            raise CorruptedBinaryError(
                f"expected {WORD_NIBBLES} nibbles, got {len(tokens)}"
            )
        for token in tokens:
            if not _NIBBLE.fullmatch(token):
                raise CorruptedBinaryError(f"'{token}' is not a 4-bit nibble")

        word = nibbles_to_word(tokens)
        instruction_type = lookup_by_pattern(word)
        if instruction_type is None:
            raise InstructionLookupError(
                f"no instruction matches {format_word(word)}"
            )

        args = [
            decode_operand(kind, tokens[slot:slot + kind.width])
            for kind, slot in zip(instruction_type.operands, instruction_type.slots)
            if kind.consumes_token
        ]
        return cls(instruction_type, ", ".join(args), tuple(tokens))

    @classmethod
    def from_word(cls, word: int) -> "Instruction":
        """Decode a 16-bit integer word."""
        return cls.from_binary(format_word(word))

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def word(self) -> int:
        """The instruction as a 16-bit integer."""
        return nibbles_to_word(self.binary_form)

    @property
    def mnemonic(self) -> str:
        """Canonical mnemonic of the instruction type."""
        return self.type.name

    @property
    def binary_text(self) -> str:
        """The word as written in binary files."""
        return " ".join(self.binary_form)

    @property
    def source_text(self) -> str:
        """Mnemonic and operands as written in source files."""
        if self.text_form:
            return f"{self.mnemonic} {self.text_form}"
        return self.mnemonic

    def __str__(self) -> str:
        return self.source_text
