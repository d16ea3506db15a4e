"""Tests for the tokenizer and token classification predicates."""

import pytest

from mathruntime.parser.tokenizer import (
    END,
    Tokenizer,
    is_alpha,
    is_identifier,
    is_imaginary,
    is_integer,
    is_real,
)


def tokenize(source: str) -> list[str]:
    return Tokenizer().tokenize(source)


class TestTokenizer:
    """Test scanning of raw input."""

    def test_empty_input(self):
        """Test that empty input yields only the end sentinel."""
        assert tokenize("") == [END]

    def test_whitespace_only(self):
        """Test that whitespace is discarded."""
        assert tokenize(" \t\n ") == [END]

    def test_sentinel_is_last(self):
        """Test that the sentinel terminates every stream."""
        tokens = tokenize("1 + 2")
        assert tokens == ["1", "+", "2", END]

    def test_whitespace_separates_tokens(self):
        """Test that whitespace splits accumulated tokens."""
        assert tokenize("3 x\ty\nz") == ["3", "x", "y", "z", END]

    def test_accumulates_identifiers_and_numbers(self):
        """Test multi-character tokens."""
        assert tokenize("sin(3.14)") == ["sin", "(", "3.14", ")", END]

    def test_no_validation_at_scan_time(self):
        """Test that the lexer accepts any character."""
        assert tokenize("3x#y") == ["3x#y", END]

    @pytest.mark.parametrize(
        "delimiter", list("+-*/()^{},|[]<>=!&@")
    )
    def test_single_character_delimiters(self, delimiter):
        """Test that each delimiter is emitted on its own."""
        assert tokenize(f"a{delimiter}b") == ["a", delimiter, "b", END]

    @pytest.mark.parametrize("operator", ["&&", "||", ">=", "<=", "==", "!=", "@@"])
    def test_compound_operators(self, operator):
        """Test that two-character operators are merged."""
        assert tokenize(f"a{operator}b") == ["a", operator, "b", END]

    def test_compound_operator_lookahead_is_one_character(self):
        """Test that '===' is '==' followed by '='."""
        assert tokenize("a===b") == ["a", "==", "=", "b", END]

    def test_delimiter_pairs_that_do_not_merge(self):
        """Test that '=<' stays two tokens."""
        assert tokenize("a=<b") == ["a", "=", "<", "b", END]

    def test_randomized_group(self):
        """Test scanning of a randomized operator group."""
        assert tokenize("1{+|-}2") == ["1", "{", "+", "|", "-", "}", "2", END]

    def test_dimension_list(self):
        """Test scanning of a function call with dimensions."""
        assert tokenize("zeros<2,3>()") == [
            "zeros", "<", "2", ",", "3", ">", "(", ")", END,
        ]


class TestPredicates:
    """Test token classification."""

    @pytest.mark.parametrize("token", ["0", "1", "7", "42", "1000", "9876543210"])
    def test_integers(self, token):
        assert is_integer(token)

    @pytest.mark.parametrize("token", ["", "01", "007", "1.0", "x", "-1", "1e3"])
    def test_not_integers(self, token):
        assert not is_integer(token)

    @pytest.mark.parametrize("token", ["0.5", "3.14", "10.", "0.0"])
    def test_reals(self, token):
        assert is_real(token)

    @pytest.mark.parametrize("token", ["3", ".5", "01.5", "1.2.3", "1.x", "pi"])
    def test_not_reals(self, token):
        assert not is_real(token)

    @pytest.mark.parametrize("token", ["i", "2i", "0i", "3.5i", "10.i"])
    def test_imaginary(self, token):
        assert is_imaginary(token)

    @pytest.mark.parametrize("token", ["pi", "xi", "02i", "1", "ii", ".5i"])
    def test_not_imaginary(self, token):
        assert not is_imaginary(token)

    @pytest.mark.parametrize("token", ["x", "xy", "x1", "is_zero", "Alpha", "a2b"])
    def test_identifiers(self, token):
        assert is_identifier(token)

    @pytest.mark.parametrize("token", ["", "1x", "x-y", "x.y", "+", END])
    def test_not_identifiers(self, token):
        assert not is_identifier(token)

    def test_alpha(self):
        """Test that only ASCII letters and underscore are alphabetic."""
        assert is_alpha("a")
        assert is_alpha("Z")
        assert is_alpha("_")
        assert not is_alpha("1")
        assert not is_alpha("ä")
        assert not is_alpha("ab")
