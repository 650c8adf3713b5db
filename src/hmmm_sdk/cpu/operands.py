"""
HMMM Operand Codec
==================

Encodes a single operand token into the nibbles of its field, and decodes
those nibbles back into canonical operand text.

    >>> encode_operand(OperandKind.REGISTER, "r15")
    ('1111',)
    >>> encode_operand(OperandKind.SIGNED8, "-1")
    ('1111', '1111')
    >>> decode_operand(OperandKind.SIGNED8, ("1111", "1111"))
    '-1'

The functions here are pure: no logging, no table access, no state.
"""

import re
from typing import Sequence

from hmmm_sdk.cpu.hmmm import NIBBLE_BITS, OperandKind
from hmmm_sdk.errors import ArgumentError, ErrorKind, OperandValueError


REGISTER_COUNT = 16

SIGNED8_MIN, SIGNED8_MAX = -128, 127
UNSIGNED8_MAX = 255

# IMM16 accepts anything representable in 16 bits, signed or unsigned.
IMM16_MIN, IMM16_MAX = -(1 << 15), (1 << 16) - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DECIMAL = re.compile(r"\+?[0-9]+")
_HEX = re.compile(r"[+-]?(0[xX])?[0-9a-fA-F]+")


def _to_nibbles(value: int, width: int) -> tuple[str, ...]:
    """Split the low ``width`` nibbles of value into binary strings."""
    bits = width * NIBBLE_BITS
    text = format(value & ((1 << bits) - 1), f"0{bits}b")
    return tuple(text[i:i + NIBBLE_BITS] for i in range(0, bits, NIBBLE_BITS))


def _parse_register(token: str) -> int:
    if not token[:1].lower() == "r":
        raise ArgumentError(
            f"expected a register, got '{token}'",
            kind=ErrorKind.INVALID_ARGUMENT_TYPE,
            hint="registers are written r0 to r15",
        )
    digits = token[1:]
    # The number must first parse as a byte, then fit the 4-bit field.
    if not _UNSIGNED_DECIMAL.fullmatch(digits) or int(digits) > UNSIGNED8_MAX:
        raise OperandValueError(
            f"invalid register '{token}'",
            kind=ErrorKind.INVALID_REGISTER,
        )
    number = int(digits)
    if number >= REGISTER_COUNT:
        raise OperandValueError(
            f"register '{token}' is out of range",
            kind=ErrorKind.INVALID_REGISTER,
            hint="registers are r0 to r15",
        )
    return number


def _parse_signed8(token: str) -> int:
    if _DECIMAL.fullmatch(token):
        value = int(token)
        if SIGNED8_MIN <= value <= SIGNED8_MAX:
            return value
    raise OperandValueError(
        f"invalid signed 8-bit number '{token}'",
        kind=ErrorKind.INVALID_SIGNED_NUMBER,
        hint=f"signed values range from {SIGNED8_MIN} to {SIGNED8_MAX}",
    )


def _parse_unsigned8(token: str) -> int:
    if _UNSIGNED_DECIMAL.fullmatch(token):
        value = int(token)
        if value <= UNSIGNED8_MAX:
            return value
    raise OperandValueError(
        f"invalid unsigned 8-bit number '{token}'",
        kind=ErrorKind.INVALID_UNSIGNED_NUMBER,
        hint=f"unsigned values range from 0 to {UNSIGNED8_MAX}",
    )


def _parse_imm16(token: str) -> int:
    """
    Parse a data word.

    Hexadecimal is tried first, so '10' means 16. Signed decimal text
    such as '-5' is also valid hexadecimal and parses on the same path.
    """
    if _HEX.fullmatch(token):
        value = int(token, 16)
        if IMM16_MIN <= value <= IMM16_MAX:
            return value
    raise OperandValueError(
        f"invalid number '{token}'",
        kind=ErrorKind.INVALID_NUMBER,
        hint="data words are hexadecimal, optionally with a 0x prefix",
    )


def encode_operand(kind: OperandKind, token: str = "") -> tuple[str, ...]:
    """
    Encode one operand into ``kind.width`` nibble strings.

    Args:
        kind: The operand kind expected at this position
        token: The operand source text (ignored for SKIP4)

    Returns:
        Tuple of 4-character binary strings, most significant first

    Raises:
        ArgumentError: A register was expected but the token is not one
        OperandValueError: The token does not fit the operand's range
    """
    if kind is OperandKind.REGISTER:
        value = _parse_register(token)
    elif kind is OperandKind.SIGNED8:
        value = _parse_signed8(token)
    elif kind is OperandKind.UNSIGNED8:
        value = _parse_unsigned8(token)
    elif kind is OperandKind.IMM16:
        # Only the low 12 bits fit the three reserved nibbles.
        value = _parse_imm16(token)
    else:
        value = 0
    return _to_nibbles(value, kind.width)


def decode_operand(kind: OperandKind, nibbles: Sequence[str]) -> str:
    """
    Decode an operand's nibbles into canonical source text.

    Registers render as ``r<N>``, byte values as decimal, and data words
    as bare lowercase hexadecimal so the text encodes back to the same
    bits. SKIP4 has no text and decodes to an empty string.
    """
    if kind is OperandKind.SKIP4:
        return ""

    value = int("".join(nibbles), 2)

    if kind is OperandKind.REGISTER:
        return f"r{value}"
    if kind is OperandKind.SIGNED8:
        if value > SIGNED8_MAX:
            value -= 1 << 8
        return str(value)
    if kind is OperandKind.UNSIGNED8:
        return str(value)
    # Data words encode as hex first, so decimal text would not reassemble.
    return f"{value:x}"
