"""Tokenizer for desk calculator input with detailed error messages."""

from typing import List, TextIO

from deskcalc.deskcalc_error import DeskCalcLexError, DeskCalcStreamError
from deskcalc.deskcalc_token import DeskCalcToken, DeskCalcTokenType, OPERATOR_TOKEN_TYPES


DIGITS = frozenset("0123456789")
EXPONENT_MARKERS = frozenset("eE")
EXPONENT_SIGNS = frozenset("+-")


class DeskCalcTokenizer:
    """
    Scans characters from a text source and produces tokens on demand.

    The tokenizer knows nothing about the grammar.  Each call to next_token() reads
    just enough characters to produce one token, keeping a single character of
    lookahead so that the character ending a number or name is not lost.
    """

    def __init__(self, source: TextIO) -> None:
        """
        Initialize the tokenizer.

        Args:
            source: Text source to read characters from
        """
        self._source = source
        self._lookahead: List[str] = []
        self._at_end = False
        self._line = 1
        self._column = 1

    @property
    def line(self) -> int:
        """Line number of the next unread character (1-indexed)."""
        return self._line

    @property
    def column(self) -> int:
        """Column number of the next unread character (1-indexed)."""
        return self._column

    def next_token(self) -> DeskCalcToken:
        """
        Read the next token from the source.

        Once the end of the source is reached every further call returns an END token.

        Returns:
            The token that was read

        Raises:
            DeskCalcLexError: If an unrecognized character or malformed number is found
            DeskCalcStreamError: If reading the source fails
        """
        char = self._peek_char()
        while char.isspace():
            self._next_char()
            char = self._peek_char()

        line = self._line
        column = self._column

        if not char:
            return DeskCalcToken(DeskCalcTokenType.END, None, line, column)

        if char in DIGITS or char == '.':
            return self._read_number(line, column)

        if char.isalpha():
            return self._read_name(line, column)

        self._next_char()
        token_type = OPERATOR_TOKEN_TYPES.get(char)
        if token_type is None:
            raise DeskCalcLexError(
                message="bad token",
                line=line,
                column=column,
                received=f"Character: {char!r}",
                expected="Number, name, or one of + - * / = ; ( )",
                suggestion="Remove the character or replace it with a supported operator"
            )

        return DeskCalcToken(token_type, char, line, column)

    def _peek_char(self) -> str:
        """
        Return the next character without consuming it.

        Returns:
            The next character, or an empty string at the end of the source

        Raises:
            DeskCalcStreamError: If reading the source fails
        """
        if self._lookahead:
            return self._lookahead[0]

        if self._at_end:
            return ""

        try:
            char = self._source.read(1)

        except (OSError, ValueError) as e:
            raise DeskCalcStreamError(
                message=f"Failed to read input: {e}",
                line=self._line,
                column=self._column
            ) from e

        if not char:
            self._at_end = True
            return ""

        self._lookahead.append(char)
        return char

    def _next_char(self) -> str:
        """Consume and return the next character, tracking line and column."""
        char = self._peek_char()
        if not char:
            return ""

        self._lookahead.pop()
        if char == '\n':
            self._line += 1
            self._column = 1

        else:
            self._column += 1

        return char

    def _read_number(self, line: int, column: int) -> DeskCalcToken:
        """
        Read a numeric literal: digits with at most one decimal point and an optional exponent.

        Raises:
            DeskCalcLexError: If the literal is malformed
        """
        chars: List[str] = []
        char = self._peek_char()
        while char in DIGITS or char == '.':
            chars.append(self._next_char())
            char = self._peek_char()

        mantissa = "".join(chars)
        if mantissa.count('.') > 1 or not any(c in DIGITS for c in mantissa):
            raise DeskCalcLexError(
                message=f"malformed number: {mantissa}",
                line=line,
                column=column,
                received=f"Number literal: {mantissa}",
                expected="Digits with at most one decimal point",
                suggestion="Valid numbers look like 42, 3.14, .5 or 1e-3"
            )

        if char in EXPONENT_MARKERS:
            chars.append(self._next_char())
            char = self._peek_char()
            if char in EXPONENT_SIGNS:
                chars.append(self._next_char())
                char = self._peek_char()

            # The character after a bad exponent stays unread so a following ';' still ends the statement
            if char not in DIGITS:
                literal = "".join(chars)
                raise DeskCalcLexError(
                    message=f"malformed number: {literal}",
                    line=line,
                    column=column,
                    received=f"Number literal: {literal}",
                    expected="Digits after the exponent marker",
                    suggestion="Write exponents like 1e10 or 2.5E-3"
                )

            while char in DIGITS:
                chars.append(self._next_char())
                char = self._peek_char()

        return DeskCalcToken(DeskCalcTokenType.NUMBER, float("".join(chars)), line, column)

    def _read_name(self, line: int, column: int) -> DeskCalcToken:
        """Read a name: a letter followed by letters and digits."""
        chars: List[str] = []
        char = self._peek_char()
        while char.isalnum():
            chars.append(self._next_char())
            char = self._peek_char()

        return DeskCalcToken(DeskCalcTokenType.NAME, "".join(chars), line, column)
