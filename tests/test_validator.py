"""Tests for aether.utils.validator.validate_instruction."""

import pytest

from aether.utils.validator import validate_instruction


class TestValidateInstruction:
    def test_valid_string_returns_stripped(self):
        assert validate_instruction("Make a pricing card") == "Make a pricing card"

    def test_leading_trailing_whitespace_stripped(self):
        assert validate_instruction("  make it blue \n") == "make it blue"

    def test_empty_string_raises(self):
        with pytest.raises(ValueError):
            validate_instruction("")

    def test_whitespace_only_raises(self):
        with pytest.raises(ValueError):
            validate_instruction("   ")

    def test_none_raises(self):
        with pytest.raises(ValueError):
            validate_instruction(None)

    def test_non_string_raises(self):
        with pytest.raises(ValueError):
            validate_instruction(["make it blue"])
