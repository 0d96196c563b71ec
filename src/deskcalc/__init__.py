"""Desk calculator: an arithmetic expression evaluator with named variables."""

# Main API
from deskcalc.deskcalc import DeskCalc, DeskCalcStatementResult
from deskcalc.deskcalc_config import DeskCalcConfig

# Exceptions (for error handling)
from deskcalc.deskcalc_error import (
    DeskCalcError, DeskCalcLexError, DeskCalcSyntaxError, DeskCalcDivideByZeroError, DeskCalcStreamError
)

# Lower-level components (for advanced usage)
from deskcalc.deskcalc_token import DeskCalcToken, DeskCalcTokenType
from deskcalc.deskcalc_tokenizer import DeskCalcTokenizer
from deskcalc.deskcalc_token_stream import DeskCalcTokenStream
from deskcalc.deskcalc_symbol_table import DeskCalcSymbolTable
from deskcalc.deskcalc_evaluator import DeskCalcEvaluator


__all__ = [
    # Main API
    "DeskCalc", "DeskCalcStatementResult", "DeskCalcConfig",

    # Exceptions
    "DeskCalcError", "DeskCalcLexError", "DeskCalcSyntaxError", "DeskCalcDivideByZeroError", "DeskCalcStreamError",

    # Lower-level components
    "DeskCalcToken", "DeskCalcTokenType", "DeskCalcTokenizer", "DeskCalcTokenStream", "DeskCalcSymbolTable",
    "DeskCalcEvaluator"
]
