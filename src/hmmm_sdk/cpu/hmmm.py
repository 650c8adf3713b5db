"""
HMMM Instruction Set Definition
===============================

This module defines the complete HMMM (Harvey Mudd Miniature Machine)
instruction set: every opcode pattern, the bits each pattern fixes, and
the operands that fill the remaining bits.

Instruction Word
----------------
Every HMMM instruction is one 16-bit word, written as four 4-bit nibbles
with the most significant nibble first:

    0001 0011 0000 0101     setn r3 5
    ^^^^ ^^^^ ^^^^^^^^^
    |    |    signed 8-bit value
    |    register
    opcode

Matching
--------
Each table entry has a match pattern and a significance mask. A word
belongs to an entry when it agrees with the pattern on every bit the mask
sets. Several entries share an opcode nibble with progressively looser
masks, for example:

    nop   0110 0000 0000 0000   mask 1111 1111 1111 1111
    copy  0110 XXXX YYYY 0000   mask 1111 0000 0000 1111
    add   0110 XXXX YYYY ZZZZ   mask 1111 0000 0000 0000

Decoding returns the FIRST entry in declaration order that matches, so
the more specific entries must come before the looser ones. The same
ordering rule covers neg/sub, jumpn/calln, and the opcode-0 entries ahead
of the ``data`` fallback. ``validate_table`` checks the structural
invariants when the module is imported.

Operand Kinds
-------------
REGISTER   1 nibble   r0 - r15
SIGNED8    2 nibbles  -128 - 127
UNSIGNED8  2 nibbles  0 - 255
IMM16      3 nibbles  hex or decimal, low 12 bits kept
SKIP4      1 nibble   no source token, always 0000

Reference
---------
- HMMM documentation: https://www.cs.hmc.edu/~cs5grad/cs5/hmmm/documentation/documentation.html
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from hmmm_sdk.errors import InstructionTableError

logger = logging.getLogger(__name__)


# =============================================================================
# Word Layout Constants
# =============================================================================

NIBBLE_BITS = 4
WORD_NIBBLES = 4
WORD_BITS = NIBBLE_BITS * WORD_NIBBLES
WORD_MASK = (1 << WORD_BITS) - 1
NIBBLE_MASK = (1 << NIBBLE_BITS) - 1

# The opcode lives in nibble 0; operands start after it.
FIRST_OPERAND_NIBBLE = 1


def parse_nibbles(text: str) -> int:
    """Parse a space-separated nibble string such as '0110 0000 0000 1111'."""
    return int(text.replace(" ", ""), 2)


def nibble_at(word: int, index: int) -> int:
    """Return nibble ``index`` of a word, counting from the most significant."""
    shift = (WORD_NIBBLES - 1 - index) * NIBBLE_BITS
    return (word >> shift) & NIBBLE_MASK


def word_to_nibbles(word: int) -> tuple[str, ...]:
    """Split a 16-bit word into four 4-character binary strings."""
    return tuple(f"{nibble_at(word, i):04b}" for i in range(WORD_NIBBLES))


def nibbles_to_word(nibbles: Iterable[str]) -> int:
    """Join four 4-character binary strings back into a 16-bit word."""
    word = 0
    for nibble in nibbles:
        word = (word << NIBBLE_BITS) | int(nibble, 2)
    return word


def format_word(word: int) -> str:
    """Format a word the way binary files store it: '0001 0000 0000 0101'."""
    return " ".join(word_to_nibbles(word))


# =============================================================================
# Operand Kind Enumeration
# =============================================================================

class OperandKind(Enum):
    """
    The closed set of operand kinds an instruction can take.
    """
    REGISTER = "register"
    SIGNED8 = "signed8"
    UNSIGNED8 = "unsigned8"
    IMM16 = "imm16"
    SKIP4 = "skip4"

    @property
    def width(self) -> int:
        """Number of nibbles this operand occupies in the word."""
        return _OPERAND_WIDTHS[self]

    @property
    def consumes_token(self) -> bool:
        """False for SKIP4, which fills its nibble without source text."""
        return self is not OperandKind.SKIP4

    def __str__(self) -> str:
        return self.value


_OPERAND_WIDTHS = {
    OperandKind.REGISTER: 1,
    OperandKind.SIGNED8: 2,
    OperandKind.UNSIGNED8: 2,
    OperandKind.IMM16: 3,
    OperandKind.SKIP4: 1,
}


# =============================================================================
# Instruction Type
# =============================================================================

@dataclass(frozen=True)
class InstructionType:
    """
    One entry of the instruction table.

    Instances are immutable (frozen) and built once at import time.

    Attributes:
        names: Accepted mnemonics; names[0] is canonical for output
        match_pattern: 16-bit pattern of the fixed bits
        significance_mask: 1 bits must equal match_pattern, 0 bits
            carry operands
        operands: Operand kinds in source order
        slots: First nibble index of each operand, derived from the mask
    """
    names: tuple[str, ...]
    match_pattern: int
    significance_mask: int
    operands: tuple[OperandKind, ...] = ()
    slots: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._check_mask()
        object.__setattr__(self, "slots", self._layout_operands())

    def _check_mask(self) -> None:
        mask = self.significance_mask
        if mask & ~WORD_MASK or self.match_pattern & ~WORD_MASK:
            raise InstructionTableError(f"'{self.name}': wider than 16 bits")

        for i in range(WORD_NIBBLES):
            if nibble_at(mask, i) not in (0, NIBBLE_MASK):
                raise InstructionTableError(
                    f"'{self.name}': mask nibble {i} is not all-or-nothing"
                )

        if nibble_at(mask, 0) != NIBBLE_MASK:
            raise InstructionTableError(
                f"'{self.name}': opcode nibble must be significant"
            )

    def _layout_operands(self) -> tuple[int, ...]:
        """
        Place each operand in the word, left to right after the opcode.

        Value-carrying operands must land on don't-care nibbles and
        together cover all of them. A SKIP4 operand lands on a
        significant nibble whose pattern is 0000.
        """
        free = {
            i for i in range(WORD_NIBBLES)
            if nibble_at(self.significance_mask, i) == 0
        }
        covered = set()
        slots = []
        cursor = FIRST_OPERAND_NIBBLE

        for kind in self.operands:
            span = range(cursor, cursor + kind.width)
            if span.stop > WORD_NIBBLES:
                raise InstructionTableError(
                    f"'{self.name}': operands overflow the instruction word"
                )
            if kind is OperandKind.SKIP4:
                if cursor in free or nibble_at(self.match_pattern, cursor) != 0:
                    raise InstructionTableError(
                        f"'{self.name}': skipped nibble {cursor} must be a "
                        f"significant 0000 field"
                    )
            else:
                if not free.issuperset(span):
                    raise InstructionTableError(
                        f"'{self.name}': {kind} operand at nibble {cursor} "
                        f"overlaps significant bits"
                    )
                covered.update(span)
            slots.append(cursor)
            cursor = span.stop

        if covered != free:
            raise InstructionTableError(
                f"'{self.name}': mask leaves {len(free)} operand nibbles but "
                f"operands fill {len(covered)}"
            )
        return tuple(slots)

    @property
    def name(self) -> str:
        """Canonical mnemonic."""
        return self.names[0] if self.names else "<unnamed>"

    @property
    def arity(self) -> int:
        """Number of operand tokens expected in source text."""
        return sum(1 for kind in self.operands if kind.consumes_token)

    def matches(self, word: int) -> bool:
        """True if ``word`` agrees with the pattern on every significant bit."""
        return (word ^ self.match_pattern) & self.significance_mask == 0

    def __str__(self) -> str:
        kinds = ", ".join(str(kind) for kind in self.operands)
        return f"{self.name}({kinds})"


# =============================================================================
# Instruction Table
# =============================================================================
# Declaration order is load-bearing: lookup_by_pattern returns the first
# match. Entries sharing an opcode are listed most specific first.
#
# Row: (names, match pattern, significance mask, operand kinds)
# =============================================================================

R = OperandKind.REGISTER
S8 = OperandKind.SIGNED8
U8 = OperandKind.UNSIGNED8
N16 = OperandKind.IMM16
Z = OperandKind.SKIP4

_TABLE_ROWS = (
    # System
    (("halt",),   "0000 0000 0000 0000", "1111 1111 1111 1111", ()),
    (("read",),   "0000 0000 0000 0001", "1111 0000 1111 1111", (R,)),
    (("write",),  "0000 0000 0000 0010", "1111 0000 1111 1111", (R,)),
    (("jumpr",),  "0000 0000 0000 0011", "1111 0000 1111 1111", (R,)),

    # Register setting and memory
    (("setn",),   "0001 0000 0000 0000", "1111 0000 0000 0000", (R, S8)),
    (("loadn",),  "0010 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),
    (("storen",), "0011 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),
    (("loadr",),  "0100 0000 0000 0000", "1111 0000 0000 1111", (R, R)),
    (("storer",), "0100 0000 0000 0001", "1111 0000 0000 1111", (R, R)),
    (("popr",),   "0100 0000 0000 0010", "1111 0000 0000 1111", (R, R)),
    (("pushr",),  "0100 0000 0000 0011", "1111 0000 0000 1111", (R, R)),

    # Arithmetic: nop and copy are add with fixed r0 fields
    (("addn",),   "0101 0000 0000 0000", "1111 0000 0000 0000", (R, S8)),
    (("nop",),    "0110 0000 0000 0000", "1111 1111 1111 1111", ()),
    (("copy",),   "0110 0000 0000 0000", "1111 0000 0000 1111", (R, R)),
    (("add",),    "0110 0000 0000 0000", "1111 0000 0000 0000", (R, R, R)),
    (("neg",),    "0111 0000 0000 0000", "1111 0000 1111 0000", (R, Z, R)),
    (("sub",),    "0111 0000 0000 0000", "1111 0000 0000 0000", (R, R, R)),
    (("mul",),    "1000 0000 0000 0000", "1111 0000 0000 0000", (R, R, R)),
    (("div",),    "1001 0000 0000 0000", "1111 0000 0000 0000", (R, R, R)),
    (("mod",),    "1010 0000 0000 0000", "1111 0000 0000 0000", (R, R, R)),

    # Jumps: jumpn is calln with r0
    (("jumpn",),  "1011 0000 0000 0000", "1111 1111 0000 0000", (Z, U8)),
    (("calln",),  "1011 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),
    (("jeqzn",),  "1100 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),
    (("jnezn",),  "1101 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),
    (("jgtzn",),  "1110 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),
    (("jltzn",),  "1111 0000 0000 0000", "1111 0000 0000 0000", (R, U8)),

    # Raw data word; catches opcode-0 words no system entry claims
    (("data",),   "0000 0000 0000 0000", "1111 0000 0000 0000", (N16,)),
)


def build_table(rows) -> tuple[InstructionType, ...]:
    """Build InstructionType entries from declarative table rows."""
    return tuple(
        InstructionType(
            names=tuple(names),
            match_pattern=parse_nibbles(pattern),
            significance_mask=parse_nibbles(mask),
            operands=tuple(operands),
        )
        for names, pattern, mask, operands in rows
    )


def validate_table(table: tuple[InstructionType, ...]) -> None:
    """
    Check the construction invariants of an instruction table.

    Operand layout is already checked per entry when it is built. This
    checks the properties that span the whole table.

    Raises:
        InstructionTableError: On the first violation found
    """
    seen_pairs: dict[tuple[int, int], str] = {}
    seen_names: dict[str, str] = {}

    for entry in table:
        if not entry.names:
            raise InstructionTableError("instruction type without a name")

        mask = entry.significance_mask
        if entry.match_pattern & ~mask:
            raise InstructionTableError(
                f"'{entry.name}': pattern sets bits outside its mask"
            )

        pair = (entry.match_pattern, mask)
        if pair in seen_pairs:
            raise InstructionTableError(
                f"'{entry.name}' has the same pattern and mask as "
                f"'{seen_pairs[pair]}'"
            )
        seen_pairs[pair] = entry.name

        for name in entry.names:
            key = name.lower()
            if key in seen_names:
                raise InstructionTableError(
                    f"mnemonic '{name}' declared by both "
                    f"'{seen_names[key]}' and '{entry.name}'"
                )
            seen_names[key] = entry.name

    logger.debug(f"Instruction table valid: {len(table)} entries")


INSTRUCTION_TABLE: tuple[InstructionType, ...] = build_table(_TABLE_ROWS)
validate_table(INSTRUCTION_TABLE)

_BY_NAME: dict[str, InstructionType] = {
    name.lower(): entry
    for entry in INSTRUCTION_TABLE
    for name in entry.names
}

# Set of all accepted mnemonics
MNEMONICS: frozenset[str] = frozenset(_BY_NAME)

# The all-zero word; fills unused memory
HALT_WORD = 0


# =============================================================================
# Lookup Functions
# =============================================================================

def lookup_by_name(mnemonic: str) -> Optional[InstructionType]:
    """
    Look up an instruction type by mnemonic, ignoring case.

    Returns:
        The entry declaring this mnemonic, or None
    """
    return _BY_NAME.get(mnemonic.lower())


def lookup_by_pattern(word: int) -> Optional[InstructionType]:
    """
    Find the instruction type of a 16-bit word.

    Returns the first entry in declaration order whose pattern matches
    the word on all significant bits, or None if nothing matches.
    """
    for entry in INSTRUCTION_TABLE:
        if entry.matches(word):
            return entry
    return None


def is_valid_instruction(mnemonic: str) -> bool:
    """Check if a mnemonic names an HMMM instruction."""
    return mnemonic.lower() in MNEMONICS
