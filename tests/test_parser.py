# =============================================================================
# test_parser.py - Instruction Line Parser Tests
# =============================================================================
# Tests for parse_line and the ParsedInstruction it produces.
#
# Test coverage includes:
#   - Each instruction category and its operand shapes
#   - Address / index range boundaries
#   - Fields (including L > R) and Argument trailing operands
#   - Jump condition mnemonics
#   - Malformed punctuation and misplaced trailing operands
#   - Canonical rendering and re-parsing
# =============================================================================

import pytest

from mixparse.parser import (
    Address,
    Argument,
    Fields,
    Index,
    ParsedInstruction,
    parse_line,
    render_instruction,
)
from mixparse.isa import OPCODE_TABLE, Category
from mixparse.errors import (
    ParseError,
    LexError,
    UnknownMnemonic,
    MalformedOperand,
    UnexpectedTrailingOperand,
    OperandRangeError,
)


# =============================================================================
# Only-Name Instructions
# =============================================================================

class TestOnlyName:
    """NOP, HALT, NUM and CHAR take nothing."""

    @pytest.mark.parametrize("name", ["NOP", "HALT", "NUM", "CHAR"])
    def test_bare_mnemonic(self, name):
        instr = parse_line(name)
        assert instr.name == name
        assert instr.category is Category.ONLY_NAME
        assert instr.address is None
        assert instr.index is None
        assert instr.trailing is None
        assert instr.operands == []

    @pytest.mark.parametrize("name", ["NOP", "HALT", "NUM", "CHAR"])
    @pytest.mark.parametrize("suffix", [" 10,1", " 0", "(0:5)", " (3)", " X"])
    def test_operands_rejected(self, name, suffix):
        with pytest.raises(UnexpectedTrailingOperand):
            parse_line(name + suffix)

    def test_surrounding_spaces_ignored(self):
        assert parse_line("   HALT   ").name == "HALT"


# =============================================================================
# Field Instructions
# =============================================================================

class TestFieldInstructions:
    """ADDRESS,INDEX with optional (L:R)."""

    @pytest.mark.parametrize("address", [0, 1, 999, 2000, 3998, 3999])
    @pytest.mark.parametrize("index", [1, 2, 3, 4, 5])
    def test_load_index_register(self, address, index):
        instr = parse_line(f"LD1 {address},{index}")
        assert instr.address == Address(address)
        assert instr.index == Index(index)
        assert instr.register == "1"
        assert instr.negated is False
        assert instr.trailing is None

    def test_load_negative(self):
        instr = parse_line("LDAN 100,2")
        assert instr.register == "A"
        assert instr.negated is True

    def test_fields(self):
        instr = parse_line("ADD 2000,3(0:5)")
        assert instr.fields == Fields(0, 5)
        assert instr.argument is None

    def test_reversed_fields_accepted(self):
        """L > R is unusual but not forbidden by the grammar."""
        instr = parse_line("ADD 2000,3(5:0)")
        assert instr.fields == Fields(5, 0)
        assert instr.fields.is_reversed

    def test_omitted_fields_stay_default(self):
        """No field spec is invented when none is written."""
        instr = parse_line("STA 2000,1")
        assert instr.fields is None

    def test_store_jump_register(self):
        instr = parse_line("STJ 3000,5(0:2)")
        assert instr.register == "J"
        assert instr.fields == Fields(0, 2)

    def test_argument_on_field_instruction(self):
        with pytest.raises(UnexpectedTrailingOperand) as exc_info:
            parse_line("LDA 2000,1(5)")
        assert exc_info.value.location.column == 11
        assert "(L:R)" in exc_info.value.hint

    def test_multiple_spaces_after_mnemonic(self):
        assert parse_line("CMPX    10,4").address == Address(10)

    def test_leading_zeros(self):
        instr = parse_line("LDA 0010,01(00:05)")
        assert instr.address == Address(10)
        assert instr.index == Index(1)
        assert instr.fields == Fields(0, 5)


# =============================================================================
# Non-Field Instructions
# =============================================================================

class TestNonFieldInstructions:
    """ADDRESS,INDEX only."""

    @pytest.mark.parametrize("name", ["JL", "JLE", "JG", "JGE", "JE", "JNE"])
    def test_comparison_jumps(self, name):
        instr = parse_line(f"{name} 10,1")
        assert instr.category is Category.NON_FIELD
        assert instr.condition == name[1:]

    def test_register_jump(self):
        instr = parse_line("JXNZ 10,1")
        assert instr.register == "X"
        assert instr.condition == "NZ"

    def test_invalid_jump_code(self):
        with pytest.raises(UnknownMnemonic) as exc_info:
            parse_line("JX 10,1")
        assert exc_info.value.location.column == 1

    def test_enter(self):
        instr = parse_line("ENT1 0,1")
        assert instr.register == "1"
        assert instr.negated is False
        assert parse_line("ENNA 5,2").negated is True

    @pytest.mark.parametrize("line", ["JMP 10,1(0:5)", "INCA 1,1(2)", "SLA 3,1(1:1)"])
    def test_trailing_rejected(self, line):
        with pytest.raises(UnexpectedTrailingOperand):
            parse_line(line)


# =============================================================================
# Arg Instructions
# =============================================================================

class TestArgInstructions:
    """ADDRESS,INDEX with optional (n)."""

    def test_argument(self):
        instr = parse_line("OUT 1000,1(18)")
        assert instr.argument == Argument(18)
        assert instr.fields is None

    def test_argument_omitted(self):
        assert parse_line("IN 1000,2").argument is None

    def test_move(self):
        assert parse_line("MOVE 100,1(3)").argument == Argument(3)

    def test_fields_on_arg_instruction(self):
        with pytest.raises(UnexpectedTrailingOperand):
            parse_line("IOC 0,1(0:5)")


# =============================================================================
# Range Checks
# =============================================================================

class TestRanges:
    """Address 0..3999, Index 1..5."""

    def test_address_too_large(self):
        with pytest.raises(OperandRangeError) as exc_info:
            parse_line("LD1 4000,1")
        error = exc_info.value
        assert error.operand == "address"
        assert error.value == 4000
        assert (error.minimum, error.maximum) == (0, 3999)
        assert error.location.column == 5

    @pytest.mark.parametrize("index", [0, 6, 99])
    def test_index_out_of_range(self, index):
        with pytest.raises(OperandRangeError) as exc_info:
            parse_line(f"LD1 10,{index}")
        assert exc_info.value.operand == "index"
        assert exc_info.value.value == index

    def test_large_fields_allowed(self):
        """Fields and Argument carry no declared bound."""
        assert parse_line("ADD 1,1(9:12)").fields == Fields(9, 12)
        assert parse_line("OUT 1,1(250)").argument == Argument(250)

    def test_huge_address_is_parse_error(self):
        with pytest.raises(LexError) as exc_info:
            parse_line("LDA " + "9" * 5000 + ",1")
        assert isinstance(exc_info.value, ParseError)
        assert exc_info.value.location.column == 5

    def test_huge_fields(self):
        big = "9" * 4300
        instruction = parse_line(f"ADD 1,1({big}:0)")
        assert instruction.fields == Fields(int(big), 0)
        assert parse_line(str(instruction)) == instruction
        with pytest.raises(LexError):
            parse_line("ADD 1,1(" + "9" * 5000 + ":0)")


# =============================================================================
# Malformed Lines
# =============================================================================

class TestMalformed:
    """Wrong punctuation and shapes."""

    @pytest.mark.parametrize("line", [
        "LDA",
        "LDA 2000",
        "LDA 2000,",
        "LDA 2000 1",
        "LDA ,1",
        "LDA 2000,1,2",
        "LDA 2000, 1",
        "LDA 2000 ,1",
        "LDA 2000,1 (0:5)",
        "LDA 2000,1(0:5",
        "LDA 2000,1(0:)",
        "LDA 2000,1()",
        "LDA 2000,1(0:5)(1:2)",
        "LDA 2000,1)",
        "LDA(0:5)",
        "2000,1",
        "",
        "   ",
    ])
    def test_malformed(self, line):
        with pytest.raises(MalformedOperand):
            parse_line(line)

    def test_unknown_mnemonic_hint(self):
        with pytest.raises(UnknownMnemonic) as exc_info:
            parse_line("LDAX 10,1")
        assert "did you mean" in exc_info.value.hint

    def test_lex_error_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_line("LDA 10,1 ; comment")
        with pytest.raises(LexError):
            parse_line("LDA 10,1 ; comment")

    def test_location_uses_filename_and_line(self):
        with pytest.raises(OperandRangeError) as exc_info:
            parse_line("JMP 5000,1", line=42, filename="prog.mix")
        assert str(exc_info.value.location) == "prog.mix:42:5"

    def test_line_terminator_dropped(self):
        assert parse_line("JMP 10,1\r\n").name == "JMP"


# =============================================================================
# Data Model
# =============================================================================

class TestParsedInstruction:
    """Invariants of the value type."""

    def test_immutable(self):
        instr = parse_line("LDA 10,1")
        with pytest.raises(AttributeError):
            instr.address = Address(11)

    def test_location_not_part_of_equality(self):
        assert parse_line("LDA 10,1", line=1) == parse_line("LDA 10,1", line=9)

    def test_location_recorded(self):
        instr = parse_line("  LDA 10,1", line=3, filename="a.mix")
        assert instr.line == 3
        assert instr.location.column == 3

    def test_operands_in_order(self):
        instr = parse_line("ADD 7,2(1:3)")
        assert instr.operands == [Address(7), Index(2), Fields(1, 3)]

    def test_direct_construction_checks_category(self):
        with pytest.raises(ValueError):
            ParsedInstruction(OPCODE_TABLE["JMP"], Address(1), Index(1), Fields(0, 5))
        with pytest.raises(ValueError):
            ParsedInstruction(OPCODE_TABLE["ADD"], Address(1), Index(1), Argument(5))
        with pytest.raises(ValueError):
            ParsedInstruction(OPCODE_TABLE["HALT"], Address(1), Index(1))
        with pytest.raises(ValueError):
            ParsedInstruction(OPCODE_TABLE["ADD"])

    def test_operand_bounds_on_construction(self):
        with pytest.raises(ValueError):
            Address(4000)
        with pytest.raises(ValueError):
            Index(0)

    def test_to_dict(self):
        d = parse_line("LD2N 100,3(1:5)", line=7).to_dict()
        assert d["line"] == 7
        assert d["mnemonic"] == "LD2N"
        assert d["category"] == "field"
        assert d["base"] == "LD"
        assert d["register"] == "2"
        assert d["negated"] is True
        assert d["address"] == 100
        assert d["index"] == 3
        assert d["fields"] == [1, 5]
        assert d["argument"] is None


# =============================================================================
# Canonical Rendering
# =============================================================================

class TestRendering:
    """Rendering then re-parsing yields the same instruction."""

    @pytest.mark.parametrize("line, canonical", [
        ("HALT", "HALT"),
        ("  NOP ", "NOP"),
        ("LDA 2000,1", "LDA 2000,1"),
        ("LDA   0100,02(00:5)", "LDA 100,2(0:5)"),
        ("ADD 2000,3(5:0)", "ADD 2000,3(5:0)"),
        ("JLE 10,1", "JLE 10,1"),
        ("OUT 1000,1(018)", "OUT 1000,1(18)"),
        ("J3NP 0,5", "J3NP 0,5"),
    ])
    def test_canonical_text(self, line, canonical):
        assert str(parse_line(line)) == canonical

    @pytest.mark.parametrize("line", [
        "CHAR",
        "LD5N 3999,5(0:0)",
        "STZ 1,1",
        "MOVE 0,1(7)",
        "DEC4 12,4",
        "CMP1 0007,3(4:4)",
    ])
    def test_round_trip(self, line):
        first = parse_line(line)
        second = parse_line(render_instruction(first))
        assert second == first
        assert render_instruction(second) == render_instruction(first)
