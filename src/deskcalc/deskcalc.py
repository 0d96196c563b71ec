"""Main desk calculator class: runs statements through a session with shared symbols."""

import io
import logging
from dataclasses import dataclass
from typing import Iterator, List, TextIO

from deskcalc.deskcalc_config import DeskCalcConfig
from deskcalc.deskcalc_error import DeskCalcError, DeskCalcLexError, DeskCalcStreamError, DeskCalcSyntaxError
from deskcalc.deskcalc_evaluator import DeskCalcEvaluator
from deskcalc.deskcalc_symbol_table import DeskCalcSymbolTable
from deskcalc.deskcalc_token import DeskCalcTokenType
from deskcalc.deskcalc_token_stream import DeskCalcTokenStream


@dataclass(frozen=True)
class DeskCalcStatementResult:
    """Outcome of one statement: either a value or the error that stopped it."""
    value: float | None = None
    error: DeskCalcError | None = None

    @property
    def ok(self) -> bool:
        """True if the statement produced a value."""
        return self.error is None


class DeskCalc:
    """
    Desk calculator session.

    A session owns one symbol table, shared by every statement it evaluates, so an
    assignment made by one statement is visible to all later ones.  Statements are
    expressions terminated by ';'.  Errors in a statement are reported and the session
    carries on from the next ';'.  Only a failure to read the input ends it early.
    """

    def __init__(self, config: DeskCalcConfig | None = None) -> None:
        """
        Initialize a session.

        Args:
            config: Session configuration; defaults are used if not provided
        """
        self._logger = logging.getLogger("DeskCalc")
        self.config = config if config is not None else DeskCalcConfig.create_default()
        self._symbols = DeskCalcSymbolTable(self.config.constants)
        self._error_count = 0

    @property
    def symbols(self) -> DeskCalcSymbolTable:
        """The session's symbol table."""
        return self._symbols

    @property
    def error_count(self) -> int:
        """Number of statement errors reported so far in this session."""
        return self._error_count

    def calculate(self, stream: DeskCalcTokenStream) -> Iterator[DeskCalcStatementResult]:
        """
        Evaluate every statement from a token stream.

        Args:
            stream: Token stream to read statements from

        Yields:
            One result per non-empty statement

        Raises:
            DeskCalcStreamError: If reading the input fails
        """
        evaluator = DeskCalcEvaluator(stream, self._symbols, self.config.max_depth)

        while True:
            try:
                token = stream.get()
                if token.type == DeskCalcTokenType.END:
                    return

                if token.type == DeskCalcTokenType.PRINT:
                    continue

                value = evaluator.expression(False)

                terminator = stream.current
                if terminator.type != DeskCalcTokenType.PRINT:
                    raise DeskCalcSyntaxError(
                        message="';' expected",
                        line=terminator.line,
                        column=terminator.column,
                        received=f"Found: {terminator.describe()}",
                        expected="';' at the end of the statement",
                        suggestion="Terminate each statement with ';'"
                    )

            except DeskCalcStreamError:
                raise

            except DeskCalcError as e:
                self._error_count += 1
                self._logger.debug("Statement failed: %s", e.message)
                self._resynchronize(stream, isinstance(e, DeskCalcLexError))
                yield DeskCalcStatementResult(error=e)
                continue

            yield DeskCalcStatementResult(value=value)

    def _resynchronize(self, stream: DeskCalcTokenStream, after_lex_error: bool) -> None:
        """
        Discard tokens up to the next ';' or the end of the input.

        After a lexical error the stream's current token still predates the bad input,
        so at least one token has to be read before checking it.
        """
        need_token = after_lex_error
        while need_token or stream.current.type not in (DeskCalcTokenType.PRINT, DeskCalcTokenType.END):
            need_token = False
            try:
                stream.get()

            except DeskCalcLexError as e:
                self._logger.debug("Discarding bad input while recovering: %s", e.message)
                need_token = True

    def run(self, stream: DeskCalcTokenStream, output: TextIO, errors: TextIO) -> int:
        """
        Evaluate every statement from a stream, printing values and diagnostics.

        Args:
            stream: Token stream to read statements from
            output: Where values are written, one per line
            errors: Where diagnostics are written

        Returns:
            The number of statement errors reported during this run

        Raises:
            DeskCalcStreamError: If reading the input fails
        """
        start_count = self._error_count
        for result in self.calculate(stream):
            if result.error is not None:
                print(str(result.error), file=errors)
                continue

            assert result.value is not None
            print(self.format_value(result.value), file=output)

        failures = self._error_count - start_count
        self._logger.info("Run complete, %d error(s)", failures)
        return failures

    def evaluate(self, text: str) -> List[float]:
        """
        Evaluate all the statements in a string.

        Args:
            text: Statements to evaluate, each terminated by ';'

        Returns:
            The value of each statement, in order

        Raises:
            DeskCalcLexError: If the text contains a bad character or malformed number
            DeskCalcSyntaxError: If a statement is not grammatical
            DeskCalcDivideByZeroError: If a statement divides by zero
        """
        values: List[float] = []
        with DeskCalcTokenStream.owning(io.StringIO(text)) as stream:
            for result in self.calculate(stream):
                if result.error is not None:
                    raise result.error

                assert result.value is not None
                values.append(result.value)

        return values

    def evaluate_and_format(self, text: str) -> str:
        """
        Evaluate all the statements in a string and format the results.

        Args:
            text: Statements to evaluate, each terminated by ';'

        Returns:
            One formatted value per line

        Raises:
            DeskCalcError: As for evaluate()
        """
        return "\n".join(self.format_value(value) for value in self.evaluate(text))

    def format_value(self, value: float) -> str:
        """Format a value using the configured number of significant digits."""
        return f"{value:.{self.config.precision}g}"
