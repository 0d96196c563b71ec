"""Token types and token representation for desk calculator input."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DeskCalcTokenType(Enum):
    """Token types for desk calculator statements."""
    NAME = "NAME"
    NUMBER = "NUMBER"
    END = "END"
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    ASSIGN = "="
    PRINT = ";"
    LPAREN = "("
    RPAREN = ")"


# Single character operators, keyed by the character that produces them
OPERATOR_TOKEN_TYPES = {
    token_type.value: token_type
    for token_type in DeskCalcTokenType
    if token_type not in (DeskCalcTokenType.NAME, DeskCalcTokenType.NUMBER, DeskCalcTokenType.END)
}


@dataclass(frozen=True)
class DeskCalcToken:
    """Represents a single token read from a desk calculator input source."""
    type: DeskCalcTokenType
    value: Any = None
    line: int = 1
    column: int = 1

    def __post_init__(self) -> None:
        """Check the value matches the token type."""
        if self.type == DeskCalcTokenType.NUMBER:
            valid = isinstance(self.value, float)

        elif self.type == DeskCalcTokenType.NAME:
            valid = isinstance(self.value, str) and self.value != ""

        elif self.type == DeskCalcTokenType.END:
            valid = self.value is None

        else:
            valid = self.value == self.type.value

        if not valid:
            raise ValueError(f"Invalid value for {self.type.name} token: {self.value!r}")

    def __repr__(self) -> str:
        return f"DeskCalcToken({self.type.name}, {self.value!r}, line={self.line}, col={self.column})"

    def describe(self) -> str:
        """Describe the token for use in error messages."""
        if self.type == DeskCalcTokenType.END:
            return "end of input"

        if self.type == DeskCalcTokenType.NUMBER:
            return f"number {self.value:g}"

        if self.type == DeskCalcTokenType.NAME:
            return f"name '{self.value}'"

        return f"'{self.value}'"
