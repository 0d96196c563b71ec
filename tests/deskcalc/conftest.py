"""Shared fixtures and utilities for desk calculator tests."""

import io
import math
from typing import List

import pytest

from deskcalc import (
    DeskCalc, DeskCalcConfig, DeskCalcToken, DeskCalcTokenizer, DeskCalcTokenStream, DeskCalcTokenType
)


@pytest.fixture
def calc():
    """Create a fresh desk calculator session for each test."""
    return DeskCalc()


@pytest.fixture
def calc_custom():
    """Factory for desk calculator sessions with custom configuration."""
    def _create_calc(**settings) -> DeskCalc:
        return DeskCalc(DeskCalcConfig(**settings))
    return _create_calc


@pytest.fixture
def make_stream():
    """Factory for token streams that own a string source."""
    def _make_stream(text: str) -> DeskCalcTokenStream:
        return DeskCalcTokenStream.owning(io.StringIO(text))
    return _make_stream


class DeskCalcTestHelpers:
    """Helper utilities for desk calculator testing."""

    @staticmethod
    def tokenize_all(text: str) -> List[DeskCalcToken]:
        """Read every token from text, including the final END token."""
        tokenizer = DeskCalcTokenizer(io.StringIO(text))
        tokens = [tokenizer.next_token()]
        while tokens[-1].type != DeskCalcTokenType.END:
            tokens.append(tokenizer.next_token())

        return tokens

    @staticmethod
    def assert_evaluates_to(calc: DeskCalc, text: str, expected: List[float]) -> None:
        """Assert that statements evaluate to the expected values."""
        result = calc.evaluate(text)
        assert len(result) == len(expected), f"Expected {len(expected)} results, got {result!r}"
        for actual, wanted in zip(result, expected):
            assert math.isclose(actual, wanted, rel_tol=1e-12, abs_tol=1e-12), \
                f"Expected {wanted!r}, got {actual!r}"

    @staticmethod
    def build_nested_expression(depth: int, base_value: str = "1") -> str:
        """Build an expression wrapped in depth pairs of parentheses."""
        return "(" * depth + base_value + ")" * depth


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return DeskCalcTestHelpers
