"""
Unit Tests for the Instruction Codec
====================================

Text and binary construction of single instructions, including the error
kind raised for each kind of bad input.
"""

import pytest

from hmmm_sdk.cpu import INSTRUCTION_TABLE, Instruction, OperandKind, lookup_by_name
from hmmm_sdk.errors import (
    ArgumentError,
    CorruptedBinaryError,
    ErrorKind,
    InstructionLookupError,
    OperandValueError,
)

# Sample operand text for each kind, used to exercise every table entry
SAMPLE_TOKENS = {
    OperandKind.REGISTER: "r7",
    OperandKind.SIGNED8: "-42",
    OperandKind.UNSIGNED8: "200",
    OperandKind.IMM16: "abc",
}


def sample_line(entry) -> tuple[str, list[str]]:
    tokens = [SAMPLE_TOKENS[k] for k in entry.operands if k.consumes_token]
    return " ".join([entry.name] + tokens), tokens


# =============================================================================
# Text Path
# =============================================================================

class TestFromText:
    """Tests for Instruction.from_text()."""

    def test_setn(self):
        ins = Instruction.from_text("setn r0 5")
        assert ins.mnemonic == "setn"
        assert ins.binary_form == ("0001", "0000", "0000", "0101")
        assert ins.text_form == "r0 5"

    def test_setn_negative(self):
        ins = Instruction.from_text("setn r1 -3")
        assert ins.binary_text == "0001 0001 1111 1101"

    def test_add_three_operands(self):
        ins = Instruction.from_text("add r1 r2 r3")
        assert ins.binary_text == "0110 0001 0010 0011"
        assert ins.text_form == "r1, r2, r3"

    def test_single_operand_text(self):
        ins = Instruction.from_text("jumpr r4")
        assert ins.binary_text == "0000 0100 0000 0011"
        assert ins.text_form == "r4"

    def test_halt(self):
        ins = Instruction.from_text("halt")
        assert ins.binary_text == "0000 0000 0000 0000"
        assert ins.text_form == ""
        assert ins.source_text == "halt"

    def test_nop(self):
        assert Instruction.from_text("nop").binary_text == "0110 0000 0000 0000"

    def test_copy(self):
        assert Instruction.from_text("copy r1 r2").binary_text == "0110 0001 0010 0000"

    def test_neg_skips_middle_nibble(self):
        ins = Instruction.from_text("neg r1 r2")
        assert ins.binary_text == "0111 0001 0000 0010"
        assert ins.text_form == "r1 r2"

    def test_jumpn(self):
        ins = Instruction.from_text("jumpn 5")
        assert ins.binary_text == "1011 0000 0000 0101"
        assert ins.text_form == "5"

    def test_data(self):
        assert Instruction.from_text("data 10").binary_text == "0000 0000 0001 0000"

    def test_storer(self):
        assert Instruction.from_text("storer r1 r2").binary_text == "0100 0001 0010 0001"

    def test_mnemonic_case_insensitive(self):
        assert Instruction.from_text("ADD r1 r2 r3") == Instruction.from_text("add r1 r2 r3")

    def test_empty_line(self):
        with pytest.raises(InstructionLookupError) as exc_info:
            Instruction.from_text("   ")
        assert exc_info.value.kind == ErrorKind.INSTRUCTION_DOES_NOT_EXIST

    def test_unknown_mnemonic(self):
        with pytest.raises(InstructionLookupError) as exc_info:
            Instruction.from_text("jmp 5")
        assert exc_info.value.kind == ErrorKind.INSTRUCTION_DOES_NOT_EXIST

    def test_too_many_arguments(self):
        with pytest.raises(ArgumentError) as exc_info:
            Instruction.from_text("halt r0")
        assert exc_info.value.kind == ErrorKind.TOO_MANY_ARGUMENTS

    def test_too_few_arguments(self):
        with pytest.raises(ArgumentError) as exc_info:
            Instruction.from_text("add r1 r2")
        assert exc_info.value.kind == ErrorKind.TOO_FEW_ARGUMENTS

    def test_number_for_register(self):
        with pytest.raises(ArgumentError) as exc_info:
            Instruction.from_text("jumpr 5")
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT_TYPE

    def test_register_out_of_range(self):
        with pytest.raises(OperandValueError) as exc_info:
            Instruction.from_text("setn r16 0")
        assert exc_info.value.kind == ErrorKind.INVALID_REGISTER

    def test_signed_out_of_range(self):
        with pytest.raises(OperandValueError) as exc_info:
            Instruction.from_text("addn r1 128")
        assert exc_info.value.kind == ErrorKind.INVALID_SIGNED_NUMBER

    def test_unsigned_out_of_range(self):
        with pytest.raises(OperandValueError) as exc_info:
            Instruction.from_text("loadn r1 256")
        assert exc_info.value.kind == ErrorKind.INVALID_UNSIGNED_NUMBER


# =============================================================================
# Binary Path
# =============================================================================

class TestFromBinary:
    """Tests for Instruction.from_binary()."""

    def test_setn(self):
        ins = Instruction.from_binary("0001 0000 0000 0101")
        assert ins.mnemonic == "setn"
        assert ins.text_form == "r0, 5"

    def test_halt(self):
        ins = Instruction.from_binary("0000 0000 0000 0000")
        assert ins.mnemonic == "halt"
        assert ins.text_form == ""

    def test_signed_decoded(self):
        assert Instruction.from_binary("0101 0001 1111 1111").source_text == "addn r1, -1"

    def test_extra_whitespace(self):
        ins = Instruction.from_binary("  0110 0001\t0010 0011  ")
        assert ins.source_text == "add r1, r2, r3"

    def test_nop_and_copy_share_opcode(self):
        assert Instruction.from_binary("0110 0000 0000 0000").source_text == "nop"
        assert Instruction.from_binary("0110 0011 0100 0000").source_text == "copy r3, r4"

    def test_neg_hides_skipped_field(self):
        assert Instruction.from_binary("0111 0001 0000 0010").source_text == "neg r1, r2"

    def test_jumpn(self):
        assert Instruction.from_binary("1011 0000 0000 0101").source_text == "jumpn 5"

    def test_data_one_is_read(self):
        """The word 'data 1' produces is claimed by 'read r0' on decode."""
        word = Instruction.from_text("data 1").binary_text
        assert word == "0000 0000 0000 0001"
        assert Instruction.from_binary(word).source_text == "read r0"

    def test_data_fallback(self):
        assert Instruction.from_binary("0000 1010 1011 1100").source_text == "data abc"

    def test_no_matching_entry(self):
        with pytest.raises(InstructionLookupError) as exc_info:
            Instruction.from_binary("0100 0001 0010 0100")
        assert exc_info.value.kind == ErrorKind.INSTRUCTION_DOES_NOT_EXIST

    @pytest.mark.parametrize("line", [
        "0001 0010 0011",
        "0001 0010 0011 0100 0101",
        "0001 0010 0011 01x1",
        "0001 0010 0011 00111",
        "0001 0010 0011 012",
        "",
    ])
    def test_corrupted(self, line):
        with pytest.raises(CorruptedBinaryError) as exc_info:
            Instruction.from_binary(line)
        assert exc_info.value.kind == ErrorKind.CORRUPTED_BINARY

    def test_from_word(self):
        assert Instruction.from_word(0x1305).source_text == "setn r3, 5"


# =============================================================================
# Both Directions
# =============================================================================

class TestRoundTrip:
    """Every table entry survives text -> binary -> text."""

    @pytest.mark.parametrize("entry", INSTRUCTION_TABLE, ids=lambda e: e.name)
    def test_entry(self, entry):
        line, tokens = sample_line(entry)
        encoded = Instruction.from_text(line)
        decoded = Instruction.from_binary(encoded.binary_text)

        assert decoded.type is entry
        assert decoded.binary_form == encoded.binary_form
        assert decoded.text_form == ", ".join(tokens)

        again = Instruction.from_text(decoded.source_text.replace(",", ""))
        assert again.binary_form == encoded.binary_form


# =============================================================================
# Instruction Value
# =============================================================================

class TestInstructionValue:

    def test_word(self):
        assert Instruction.from_text("setn r3 5").word == 0x1305

    def test_str(self):
        assert str(Instruction.from_text("calln r14 3")) == "calln r14 3"

    def test_frozen(self):
        ins = Instruction.from_text("halt")
        with pytest.raises(AttributeError):
            ins.text_form = "r1"

    def test_word_must_match_type(self):
        with pytest.raises(ValueError, match="does not match"):
            Instruction(lookup_by_name("halt"), "", ("0001", "0000", "0000", "0000"))

    def test_word_needs_four_nibbles(self):
        with pytest.raises(ValueError, match="4 nibbles"):
            Instruction(lookup_by_name("halt"), "", ("0000",))
