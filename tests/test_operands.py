"""
Unit Tests for the Operand Codec
================================

Range checks and nibble layout for each operand kind, and the canonical
text produced when decoding.
"""

import pytest

from hmmm_sdk.cpu import OperandKind, decode_operand, encode_operand
from hmmm_sdk.errors import ArgumentError, ErrorKind, OperandValueError


# =============================================================================
# Registers
# =============================================================================

class TestRegisterOperand:
    """Register tokens r0 - r15 fill one nibble."""

    def test_r0(self):
        assert encode_operand(OperandKind.REGISTER, "r0") == ("0000",)

    def test_r15(self):
        assert encode_operand(OperandKind.REGISTER, "r15") == ("1111",)

    def test_uppercase_prefix(self):
        assert encode_operand(OperandKind.REGISTER, "R7") == ("0111",)

    def test_r16_out_of_range(self):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.REGISTER, "r16")
        assert exc_info.value.kind == ErrorKind.INVALID_REGISTER
        assert exc_info.value.hint == "registers are r0 to r15"

    def test_r256_not_a_byte(self):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.REGISTER, "r256")
        assert exc_info.value.kind == ErrorKind.INVALID_REGISTER

    def test_register_without_number(self):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.REGISTER, "r")
        assert exc_info.value.kind == ErrorKind.INVALID_REGISTER

    def test_negative_register(self):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.REGISTER, "r-1")
        assert exc_info.value.kind == ErrorKind.INVALID_REGISTER

    def test_not_a_register(self):
        with pytest.raises(ArgumentError) as exc_info:
            encode_operand(OperandKind.REGISTER, "x1")
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT_TYPE

    def test_number_where_register_expected(self):
        with pytest.raises(ArgumentError) as exc_info:
            encode_operand(OperandKind.REGISTER, "5")
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT_TYPE

    def test_decode(self):
        assert decode_operand(OperandKind.REGISTER, ("1010",)) == "r10"


# =============================================================================
# Signed Bytes
# =============================================================================

class TestSigned8Operand:
    """Signed 8-bit values in two's complement across two nibbles."""

    def test_positive(self):
        assert encode_operand(OperandKind.SIGNED8, "5") == ("0000", "0101")

    def test_max(self):
        assert encode_operand(OperandKind.SIGNED8, "127") == ("0111", "1111")

    def test_min(self):
        assert encode_operand(OperandKind.SIGNED8, "-128") == ("1000", "0000")

    def test_minus_one(self):
        assert encode_operand(OperandKind.SIGNED8, "-1") == ("1111", "1111")

    def test_explicit_plus(self):
        assert encode_operand(OperandKind.SIGNED8, "+3") == ("0000", "0011")

    @pytest.mark.parametrize("token", ["128", "-129", "abc", "1.5", ""])
    def test_invalid(self, token):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.SIGNED8, token)
        assert exc_info.value.kind == ErrorKind.INVALID_SIGNED_NUMBER

    def test_decode_negative(self):
        assert decode_operand(OperandKind.SIGNED8, ("1101", "0110")) == "-42"

    def test_decode_positive(self):
        assert decode_operand(OperandKind.SIGNED8, ("0111", "1111")) == "127"


# =============================================================================
# Unsigned Bytes
# =============================================================================

class TestUnsigned8Operand:
    """Unsigned 8-bit values across two nibbles."""

    def test_zero(self):
        assert encode_operand(OperandKind.UNSIGNED8, "0") == ("0000", "0000")

    def test_max(self):
        assert encode_operand(OperandKind.UNSIGNED8, "255") == ("1111", "1111")

    @pytest.mark.parametrize("token", ["256", "-1", "r1", "0x10"])
    def test_invalid(self, token):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.UNSIGNED8, token)
        assert exc_info.value.kind == ErrorKind.INVALID_UNSIGNED_NUMBER

    def test_decode(self):
        assert decode_operand(OperandKind.UNSIGNED8, ("1100", "1000")) == "200"


# =============================================================================
# Data Words
# =============================================================================

class TestImm16Operand:
    """Hexadecimal data words; three nibbles are stored."""

    def test_hex_first(self):
        """'10' is hexadecimal, so it encodes 16."""
        assert encode_operand(OperandKind.IMM16, "10") == ("0000", "0001", "0000")

    def test_prefixed_hex(self):
        assert encode_operand(OperandKind.IMM16, "0xabc") == ("1010", "1011", "1100")

    def test_uppercase_hex(self):
        assert encode_operand(OperandKind.IMM16, "FF") == ("0000", "1111", "1111")

    def test_high_nibble_dropped(self):
        assert encode_operand(OperandKind.IMM16, "1234") == ("0010", "0011", "0100")

    def test_negative(self):
        assert encode_operand(OperandKind.IMM16, "-1") == ("1111", "1111", "1111")

    def test_max(self):
        assert encode_operand(OperandKind.IMM16, "ffff") == ("1111", "1111", "1111")

    @pytest.mark.parametrize("token", ["xyz", "10000", "-8001", "0x"])
    def test_invalid(self, token):
        with pytest.raises(OperandValueError) as exc_info:
            encode_operand(OperandKind.IMM16, token)
        assert exc_info.value.kind == ErrorKind.INVALID_NUMBER

    def test_decode_is_bare_hex(self):
        assert decode_operand(OperandKind.IMM16, ("0000", "0001", "0000")) == "10"
        assert decode_operand(OperandKind.IMM16, ("1010", "1011", "1100")) == "abc"


# =============================================================================
# Skipped Fields
# =============================================================================

class TestSkip4Operand:

    def test_encodes_zero_nibble(self):
        assert encode_operand(OperandKind.SKIP4) == ("0000",)

    def test_decodes_to_nothing(self):
        assert decode_operand(OperandKind.SKIP4, ("0000",)) == ""

    def test_width(self):
        assert OperandKind.SKIP4.width == 1
        assert not OperandKind.SKIP4.consumes_token
