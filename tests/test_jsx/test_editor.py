"""Tests for SourceEditor span rewriting."""

import pytest

from vibeflow.jsx import SourceEditor


class TestSourceEditor:
    def test_no_edits_returns_source(self):
        editor = SourceEditor("const a = 1;")
        assert editor.apply() == "const a = 1;"
        assert editor.changed is False

    def test_replace(self):
        editor = SourceEditor("hello world")
        editor.replace(6, 11, "there")
        assert editor.apply() == "hello there"
        assert editor.changed is True

    def test_edits_applied_in_offset_order(self):
        editor = SourceEditor("abcdef")
        editor.replace(4, 5, "E")
        editor.replace(0, 1, "A")
        assert editor.apply() == "AbcdEf"

    def test_insertions_keep_call_order(self):
        editor = SourceEditor("xy")
        editor.insert(1, "1")
        editor.insert(1, "2")
        assert editor.apply() == "x12y"

    def test_insert_next_to_replacement(self):
        editor = SourceEditor("abc")
        editor.replace(1, 2, "B")
        editor.insert(1, "^")
        assert editor.apply() == "a^Bc"

    def test_overlap_rejected(self):
        editor = SourceEditor("abcdef")
        editor.replace(1, 4, "x")
        with pytest.raises(ValueError, match="overlaps"):
            editor.replace(3, 5, "y")

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="outside"):
            SourceEditor("abc").replace(2, 9, "x")
