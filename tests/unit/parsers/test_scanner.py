#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_scanner.py
"""Unit tests for the shared scanning primitives."""

import pytest

from emlc.parsers._scanner import Scanner, is_ident_part, is_ident_start, is_whitespace, strip_whitespace


@pytest.mark.unit
class TestCharacterClasses:
    """Tests for the character predicates."""

    @pytest.mark.parametrize("char", ["a", "Z", "_"])
    def test_ident_start_accepts(self, char: str) -> None:
        assert is_ident_start(char)

    @pytest.mark.parametrize("char", ["1", "-", ".", ":", " ", "", "<"])
    def test_ident_start_rejects(self, char: str) -> None:
        assert not is_ident_start(char)

    @pytest.mark.parametrize("char", ["a", "9", "-", "_", ".", ":"])
    def test_ident_part_accepts(self, char: str) -> None:
        assert is_ident_part(char)

    @pytest.mark.parametrize("char", [" ", "(", "{", "=", ""])
    def test_ident_part_rejects(self, char: str) -> None:
        assert not is_ident_part(char)

    def test_whitespace(self) -> None:
        assert all(is_whitespace(c) for c in " \t\n\r")
        assert not is_whitespace("")
        assert not is_whitespace("x")

    def test_strip_whitespace(self) -> None:
        assert strip_whitespace("\n\t x y \r\n") == "x y"


@pytest.mark.unit
class TestScanner:
    """Tests for the bounded cursor."""

    def test_peek_past_end_is_empty(self) -> None:
        scanner = Scanner("ab")
        assert scanner.peek() == "a"
        assert scanner.peek(1) == "b"
        assert scanner.peek(2) == ""
        assert scanner.peek(-5) == ""

    def test_advance_is_bounded(self) -> None:
        scanner = Scanner("abc")
        assert scanner.advance(10) == "abc"
        assert scanner.eof()
        assert scanner.advance() == ""
        assert scanner.pos == 3

    def test_initial_position_is_clamped(self) -> None:
        assert Scanner("abc", pos=99).pos == 3
        assert Scanner("abc", pos=-1).pos == 0

    def test_read_while_and_whitespace(self) -> None:
        scanner = Scanner("div  \n (id=x)")
        assert scanner.read_while(is_ident_part) == "div"
        assert scanner.read_whitespace() == "  \n "
        assert scanner.peek() == "("

    def test_skip_whitespace_counts(self) -> None:
        scanner = Scanner("   x")
        assert scanner.skip_whitespace() == 3
        assert scanner.skip_whitespace() == 0

    def test_startswith_variants(self) -> None:
        scanner = Scanner("<SCRIPT>")
        assert scanner.startswith("<S")
        assert not scanner.startswith("<s")
        assert scanner.startswith_ignorecase("<script")

    def test_read_until_found(self) -> None:
        scanner = Scanner(" hi -->rest")
        assert scanner.read_until("-->") == (" hi ", True)
        assert scanner.rest() == "rest"

    def test_read_until_missing_consumes_everything(self) -> None:
        scanner = Scanner(" hi")
        assert scanner.read_until("-->") == (" hi", False)
        assert scanner.eof()

    def test_find_from_cursor(self) -> None:
        scanner = Scanner("a;b;c")
        scanner.advance(2)
        assert scanner.find(";") == 3
        assert scanner.find(";", 0) == 1
        assert scanner.find("?") == -1

    def test_slice_is_clamped(self) -> None:
        scanner = Scanner("abcdef")
        assert scanner.slice(2, 4) == "cd"
        assert scanner.slice(4, 2) == ""
        assert scanner.slice(-3, 100) == "abcdef"
        assert scanner.slice(3) == "def"
