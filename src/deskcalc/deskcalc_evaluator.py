"""Recursive-descent evaluator for desk calculator expressions."""

import logging

from deskcalc.deskcalc_error import DeskCalcDivideByZeroError, DeskCalcSyntaxError
from deskcalc.deskcalc_symbol_table import DeskCalcSymbolTable
from deskcalc.deskcalc_token import DeskCalcTokenType
from deskcalc.deskcalc_token_stream import DeskCalcTokenStream


class DeskCalcEvaluator:
    """
    Evaluates expressions directly from a token stream.

    The grammar is:

        expression: term { ('+' | '-') term }
        term:       primary { ('*' | '/') primary }
        primary:    NUMBER | NAME [ '=' expression ] | '-' primary | '(' expression ')'

    Each method takes an advance flag saying whether to read a new token before
    looking at the current one.  Every method returns with the first token it did
    not use as the stream's current token.
    """

    def __init__(self, stream: DeskCalcTokenStream, symbols: DeskCalcSymbolTable, max_depth: int = 200) -> None:
        """
        Initialize evaluator.

        Args:
            stream: Token stream to read from
            symbols: Symbol table used for name lookups and assignments
            max_depth: Maximum nesting of parentheses, unary minus and assignments
        """
        self._logger = logging.getLogger("DeskCalcEvaluator")
        self._stream = stream
        self._symbols = symbols
        self.max_depth = max_depth
        self._depth = 0

    def expression(self, advance: bool) -> float:
        """Evaluate a chain of terms joined by '+' and '-'."""
        left = self.term(advance)

        while True:
            token_type = self._stream.current.type
            if token_type == DeskCalcTokenType.PLUS:
                left += self.term(True)

            elif token_type == DeskCalcTokenType.MINUS:
                left -= self.term(True)

            else:
                return left

    def term(self, advance: bool) -> float:
        """
        Evaluate a chain of primaries joined by '*' and '/', left to right.

        Raises:
            DeskCalcDivideByZeroError: If the right operand of '/' is zero
        """
        left = self.primary(advance)

        while True:
            token = self._stream.current
            if token.type == DeskCalcTokenType.MUL:
                left *= self.primary(True)

            elif token.type == DeskCalcTokenType.DIV:
                divisor = self.primary(True)
                if divisor == 0.0:
                    raise DeskCalcDivideByZeroError(
                        message="divide by 0",
                        line=token.line,
                        column=token.column,
                        received=f"Dividing {left:g} by zero",
                        suggestion="Check the right operand of '/'"
                    )

                left /= divisor

            else:
                return left

    def primary(self, advance: bool) -> float:
        """
        Evaluate a number, a name (with optional assignment), a unary minus or a parenthesized expression.

        Raises:
            DeskCalcSyntaxError: If no primary is found, a ')' is missing, or nesting is too deep
        """
        if advance:
            self._stream.get()

        token = self._stream.current
        if self._depth >= self.max_depth:
            raise DeskCalcSyntaxError(
                message="expression nested too deeply",
                line=token.line,
                column=token.column,
                received=f"More than {self.max_depth} nested levels",
                suggestion="Simplify the expression or increase max_depth"
            )

        self._depth += 1
        try:
            return self._evaluate_primary()

        except RecursionError as e:
            # Only the outermost primary converts the error, once the stack has unwound
            if self._depth > 1:
                raise

            self._logger.debug("Interpreter stack exhausted before max_depth (%d)", self.max_depth)
            raise DeskCalcSyntaxError(
                message="expression nested too deeply",
                line=token.line,
                column=token.column,
                received="More nesting than the interpreter stack allows",
                suggestion="Simplify the expression or reduce max_depth"
            ) from e

        finally:
            self._depth -= 1

    def _evaluate_primary(self) -> float:
        token = self._stream.current

        if token.type == DeskCalcTokenType.NUMBER:
            self._stream.get()
            return token.value

        if token.type == DeskCalcTokenType.NAME:
            value = self._symbols.get_or_create(token.value)
            if self._stream.get().type == DeskCalcTokenType.ASSIGN:
                value = self.expression(True)
                self._symbols.set(token.value, value)

            return value

        if token.type == DeskCalcTokenType.MINUS:
            return -self.primary(True)

        if token.type == DeskCalcTokenType.LPAREN:
            value = self.expression(True)
            closing = self._stream.current
            if closing.type != DeskCalcTokenType.RPAREN:
                raise DeskCalcSyntaxError(
                    message="')' expected",
                    line=closing.line,
                    column=closing.column,
                    received=f"Found: {closing.describe()}",
                    expected="')' to close the '(' at "
                        f"line {token.line}, column {token.column}",
                    suggestion="Add the missing ')'"
                )

            self._stream.get()
            return value

        raise DeskCalcSyntaxError(
            message="primary expected",
            line=token.line,
            column=token.column,
            received=f"Found: {token.describe()}",
            expected="Number, name, '-' or '('"
        )
