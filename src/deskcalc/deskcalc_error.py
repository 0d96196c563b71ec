"""Exception classes for the desk calculator with detailed context."""

from typing import Optional


class DeskCalcError(Exception):
    """Base exception for desk calculator errors with detailed context information."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        received: Optional[str] = None,
        expected: Optional[str] = None,
        suggestion: Optional[str] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            line: Line number where the error occurred (1-indexed)
            column: Column number where the error occurred (1-indexed)
            received: What was actually received
            expected: What was expected
            suggestion: Suggestion for fixing the error
        """
        self.message = message
        self.line = line
        self.column = column
        self.received = received
        self.expected = expected
        self.suggestion = suggestion

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None and self.column is not None:
            parts.append(f"Position: line {self.line}, column {self.column}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class DeskCalcLexError(DeskCalcError):
    """Bad characters or malformed numeric literals."""


class DeskCalcSyntaxError(DeskCalcError):
    """Grammar violations such as a missing ')' or a missing primary."""


class DeskCalcDivideByZeroError(DeskCalcError):
    """Division where the right operand is exactly zero."""


class DeskCalcStreamError(DeskCalcError):
    """
    Failure reading the underlying character source.

    Unlike the other errors this one is never recovered from: it ends the session.
    """
