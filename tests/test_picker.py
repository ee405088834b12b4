"""Tests for the interactive prompt picker."""

import io

import pytest

from kubejax.picker import PromptPicker, is_int_within_range
from kubejax.protocols import Picker
from kubejax.search import matches_filter

ITEMS = ["dev-east (dev.yaml)", "dev-west (dev.yaml)", "prod-east (prod.yaml) 🔴"]


def scripted(*answers):
    """Build an input function that replays ``answers``, then hits EOF."""
    remaining = list(answers)

    def _input(prompt):
        if not remaining:
            raise EOFError
        answer = remaining.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    return _input


def make_picker(*answers, page_size=15):
    out = io.StringIO()
    return PromptPicker(input_func=scripted(*answers), out=out, page_size=page_size), out


class TestIsIntWithinRange:
    """Test is_int_within_range()."""

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("3", True), ("0", False), ("4", False), ("x", False), ("", False)])
    def test_range(self, value, expected):
        """Test bounds are inclusive and non-numbers rejected."""
        assert is_int_within_range(value, 1, 3) is expected


class TestPromptPicker:
    """Tests for PromptPicker.pick()."""

    def test_implements_protocol(self):
        """Test structural conformance with Picker."""
        assert isinstance(PromptPicker(), Picker)

    def test_select_by_number(self):
        """Test choosing the second item."""
        picker, out = make_picker("2")

        assert picker.pick("Select context", ITEMS, matches_filter) == "dev-west (dev.yaml)"
        assert "(1)   dev-east (dev.yaml)" in out.getvalue()

    def test_filter_then_select(self):
        """Test that typed text narrows the list and numbers refer to the filtered list."""
        picker, out = make_picker("east", "2")

        assert picker.pick("Select context", ITEMS, matches_filter) == "prod-east (prod.yaml) 🔴"
        assert "[filter: east]" in out.getvalue()

    def test_enter_selects_single_match(self):
        """Test that Enter picks the only remaining item."""
        picker, _ = make_picker("prod", "")

        assert picker.pick("Select context", ITEMS, matches_filter) == "prod-east (prod.yaml) 🔴"

    def test_enter_clears_filter(self):
        """Test that Enter with several matches resets the filter."""
        picker, _ = make_picker("dev", "", "3")

        assert picker.pick("Select context", ITEMS, matches_filter) == "prod-east (prod.yaml) 🔴"

    def test_no_matches_resets(self):
        """Test that a filter matching nothing is reported and dropped."""
        picker, out = make_picker("zzz", "1")

        assert picker.pick("Select context", ITEMS, matches_filter) == "dev-east (dev.yaml)"
        assert "No matches for 'zzz'" in out.getvalue()

    def test_out_of_range_number_is_a_filter(self):
        """Test that a number outside the visible range is treated as text."""
        picker, out = make_picker("9", "1")

        assert picker.pick("Select context", ITEMS, matches_filter) == "dev-east (dev.yaml)"
        assert "No matches for '9'" in out.getvalue()

    def test_eof_cancels(self):
        """Test that Ctrl-D returns None."""
        picker, _ = make_picker()

        assert picker.pick("Select context", ITEMS, matches_filter) is None

    def test_interrupt_cancels(self):
        """Test that Ctrl-C returns None."""
        picker, _ = make_picker(KeyboardInterrupt())

        assert picker.pick("Select context", ITEMS, matches_filter) is None

    def test_empty_items(self):
        """Test that nothing to choose from returns None without prompting."""
        picker, out = make_picker("1")

        assert picker.pick("Select context", [], matches_filter) is None
        assert out.getvalue() == ""

    def test_page_size_limits_display(self):
        """Test that only one page is shown and the rest is summarized."""
        items = [f"ns-{i:02d}" for i in range(20)]
        picker, out = make_picker("5")

        assert picker.pick("Select namespace", items, matches_filter) == "ns-04"
        assert "ns-05" in out.getvalue()
        assert "ns-19" not in out.getvalue()
        assert "... 5 more, type to filter" in out.getvalue()
