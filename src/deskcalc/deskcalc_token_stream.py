"""Token stream that tracks the current token and manages its character source."""

import logging
from types import TracebackType
from typing import TextIO

from deskcalc.deskcalc_token import DeskCalcToken, DeskCalcTokenType
from deskcalc.deskcalc_tokenizer import DeskCalcTokenizer


class DeskCalcTokenStream:
    """
    Supplies tokens to the evaluator and remembers the most recently read one.

    A stream either borrows its source, in which case the caller remains responsible
    for closing it, or owns it, in which case the stream closes the source when the
    stream is closed or given a new input.  Use borrowing() and owning() to make the
    choice explicit.
    """

    def __init__(self, source: TextIO, *, owns: bool = False) -> None:
        """
        Initialize the token stream.

        Args:
            source: Text source to read from
            owns: True if the stream takes ownership of the source
        """
        self._logger = logging.getLogger("DeskCalcTokenStream")
        self._source: TextIO | None = source
        self._owns = owns
        self._tokenizer = DeskCalcTokenizer(source)
        self._current = DeskCalcToken(DeskCalcTokenType.END)

    @classmethod
    def borrowing(cls, source: TextIO) -> 'DeskCalcTokenStream':
        """Create a stream that reads from a source owned by someone else."""
        return cls(source, owns=False)

    @classmethod
    def owning(cls, source: TextIO) -> 'DeskCalcTokenStream':
        """Create a stream that takes ownership of its source and closes it when done."""
        return cls(source, owns=True)

    def __enter__(self) -> 'DeskCalcTokenStream':
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None
    ) -> None:
        self.close()

    @property
    def current(self) -> DeskCalcToken:
        """The most recently read token (END before anything has been read)."""
        return self._current

    @property
    def owns_source(self) -> bool:
        """True if the stream will close its source."""
        return self._owns

    @property
    def closed(self) -> bool:
        """True once the stream has released its source."""
        return self._source is None

    def get(self) -> DeskCalcToken:
        """
        Read the next token and make it the current token.

        If reading fails the current token is left unchanged.

        Returns:
            The new current token

        Raises:
            DeskCalcLexError: If the input contains a bad character or malformed number
            DeskCalcStreamError: If reading the source fails
        """
        if self._source is None:
            self._current = DeskCalcToken(DeskCalcTokenType.END, None, self._tokenizer.line, self._tokenizer.column)
            return self._current

        self._current = self._tokenizer.next_token()
        return self._current

    def set_input_borrowing(self, source: TextIO) -> None:
        """Switch to a source owned by someone else, releasing the old one if the stream owned it."""
        self.set_input(source, owns=False)

    def set_input_owning(self, source: TextIO) -> None:
        """Switch to a source the stream takes ownership of, releasing the old one if the stream owned it."""
        self.set_input(source, owns=True)

    def set_input(self, source: TextIO, *, owns: bool) -> None:
        """
        Switch to a new source, releasing the old one if the stream owned it.

        Args:
            source: New text source to read from
            owns: True if the stream takes ownership of the new source
        """
        self.close()
        self._source = source
        self._owns = owns
        self._tokenizer = DeskCalcTokenizer(source)

    def close(self) -> None:
        """Release the source.  Owned sources are closed, borrowed ones are left open."""
        if self._source is None:
            return

        if self._owns:
            self._logger.debug("Closing owned input source")
            self._source.close()

        self._source = None
        self._owns = False
