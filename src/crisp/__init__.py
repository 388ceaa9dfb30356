"""Crisp: a small Lisp with a flat global namespace and positional currying."""

# Main API
from crisp.crisp import Crisp

# Exceptions
from crisp.crisp_error import (
    CrispError, CrispTokenError, CrispParseError, CrispEvalError,
    CrispTypeError, CrispUnboundVariableError, CrispArityError,
    CrispSubstitutionIndexError, CrispNoBranchTakenError, CrispArithmeticError
)

# Expression model
from crisp.crisp_expr import (
    CrispAtom, CrispNumber, CrispSymbol, CrispBuiltIn, CrispOperator,
    CrispExpr, CrispConstant, CrispNil, CrispQuote, CrispLet, CrispIf, CrispCall, CrispFunction, NIL
)

# Lower-level components
from crisp.crisp_coercion import expr_to_number, expr_to_boolean, number_to_expr, boolean_to_expr, numbers, booleans
from crisp.crisp_curry import curry
from crisp.crisp_environment import CrispEnvironment
from crisp.crisp_evaluator import CrispEvaluator
from crisp.crisp_builtins import CrispBuiltins
from crisp.crisp_formatter import CrispFormatter
from crisp.crisp_token import CrispToken, CrispTokenType
from crisp.crisp_tokenizer import CrispTokenizer
from crisp.crisp_parser import CrispParser
from crisp.crisp_trace import CrispTraceWatcher, CrispStdoutTraceWatcher, CrispBufferingTraceWatcher


__all__ = [
    # Main API
    "Crisp",

    # Exceptions
    "CrispError", "CrispTokenError", "CrispParseError", "CrispEvalError",
    "CrispTypeError", "CrispUnboundVariableError", "CrispArityError",
    "CrispSubstitutionIndexError", "CrispNoBranchTakenError", "CrispArithmeticError",

    # Expression model
    "CrispAtom", "CrispNumber", "CrispSymbol", "CrispBuiltIn", "CrispOperator",
    "CrispExpr", "CrispConstant", "CrispNil", "CrispQuote", "CrispLet", "CrispIf", "CrispCall", "CrispFunction",
    "NIL",

    # Lower-level components
    "expr_to_number", "expr_to_boolean", "number_to_expr", "boolean_to_expr", "numbers", "booleans",
    "curry", "CrispEnvironment", "CrispEvaluator", "CrispBuiltins", "CrispFormatter",
    "CrispToken", "CrispTokenType", "CrispTokenizer", "CrispParser",
    "CrispTraceWatcher", "CrispStdoutTraceWatcher", "CrispBufferingTraceWatcher"
]
