"""Tests for edit transitions."""

from base_converter.fields import FIELD_SPECS, SourceField
from base_converter.reporter import READY, Severity
from base_converter.synchronizer import (
    SetByteCount,
    SetCharCount,
    SetFieldInvalid,
    SetFieldText,
    SetStatus,
    UIState,
    clear_transition,
    transition,
)


def _hello_state():
    return transition(SourceField.TEXT, "Hello").state


class TestSuccessfulEdit:
    def test_renders_other_fields(self):
        result = transition(SourceField.TEXT, "Hello")
        state = result.state
        assert state.text_of("decimal") == "72 101 108 108 111"
        assert state.text_of("hex") == "48 65 6C 6C 6F"
        assert state.text_of("binary") == "01001000 01100101 01101100 01101100 01101111"
        assert state.text_of("octal") == "110 145 154 154 157"
        assert state.byte_count == 5
        assert state.char_count == 5
        assert state.status.message == "Updated from Text"
        assert state.status.severity is Severity.SUCCESS

    def test_one_write_per_other_field(self):
        result = transition(SourceField.HEX, "0x48 0x69")
        written = [effect.field for effect in result.writes()]
        assert written == [field for field in FIELD_SPECS if field is not SourceField.HEX]

    def test_source_keeps_literal_text(self):
        result = transition(SourceField.HEX, "0x48,0x69", _hello_state())
        assert result.state.text_of("hex") == "0x48,0x69"
        assert result.state.text_of("text") == "Hi"

    def test_char_count_reads_text_field(self):
        result = transition(SourceField.DECIMAL, "233 97")
        assert result.state.char_count == 2
        assert result.state.byte_count == 2

    def test_invalid_markers_reset(self):
        failed = transition(SourceField.OCTAL, "9").state
        assert failed.invalid == {SourceField.OCTAL}
        fixed = transition(SourceField.OCTAL, "7", failed).state
        assert fixed.invalid == frozenset()

    def test_whitespace_text_is_not_a_clear(self):
        result = transition(SourceField.TEXT, "  ")
        assert result.state.text_of("decimal") == "32 32"
        assert result.state.status.message == "Updated from Text"

    def test_non_ascii_flag(self):
        status = transition(SourceField.TEXT, "é").state.status
        assert "Non-ASCII values" in status.message
        assert status.severity is Severity.WARNING


class TestFailedEdit:
    def test_invalid_hex_leaves_texts(self):
        before = _hello_state()
        result = transition(SourceField.HEX, "12G", before)
        assert result.failed
        assert result.writes() == ()
        for field in FIELD_SPECS:
            if field is not SourceField.HEX:
                assert result.state.text_of(field) == before.text_of(field)
        assert result.state.invalid == {SourceField.HEX}
        assert result.state.status.severity is Severity.ERROR
        assert result.state.status.message == 'Invalid hexadecimal value: "12G"'

    def test_counts_on_failure(self):
        result = transition(SourceField.BINARY, "2", _hello_state())
        assert result.state.byte_count == 0
        assert result.state.char_count == 5

    def test_effect_order(self):
        effects = transition(SourceField.DECIMAL, "abc").effects
        resets = [SetFieldInvalid(field, False) for field in FIELD_SPECS]
        assert list(effects[:5]) == resets
        assert effects[5] == SetFieldInvalid(SourceField.DECIMAL, True)
        assert effects[6] == SetStatus('Invalid decimal value: "abc"', Severity.ERROR)
        assert effects[7] == SetByteCount(0)
        assert isinstance(effects[8], SetCharCount)


class TestEmptyEdit:
    def test_clearing_decimal_empties_everything(self):
        result = transition(SourceField.DECIMAL, "", _hello_state())
        assert all(text == "" for text in result.state.texts.values())
        assert result.state.status == READY
        assert [effect for effect in result.effects if isinstance(effect, SetFieldText)] == [
            SetFieldText(field, "") for field in FIELD_SPECS
        ]

    def test_whitespace_numeric_clears(self):
        result = transition(SourceField.HEX, "   ", _hello_state())
        assert result.state.text_of("text") == ""
        assert result.state.byte_count == 0

    def test_clear_transition(self):
        result = clear_transition(_hello_state())
        assert all(text == "" for text in result.state.texts.values())
        assert result.state.status.message == "Ready"
        assert result.state.char_count == 0


class TestIdempotence:
    def test_rerun_from_rendered_field(self):
        first = transition(SourceField.TEXT, "Hi there")
        for field in FIELD_SPECS:
            if field is SourceField.TEXT:
                continue
            again = transition(field, first.state.text_of(field), first.state)
            assert again.outcome.values == first.outcome.values


class TestUIState:
    def test_from_texts_fills_missing(self):
        state = UIState.from_texts({"hex": "41", "text": None})
        assert state.text_of("decimal") == ""
        assert state.text_of("text") == ""
        assert state.text_of(SourceField.HEX) == "41"

    def test_apply_is_not_in_place(self):
        state = UIState.empty()
        updated = state.apply([SetFieldText(SourceField.TEXT, "x")])
        assert state.text_of("text") == ""
        assert updated.text_of("text") == "x"
