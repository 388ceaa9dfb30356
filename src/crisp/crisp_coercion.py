"""Conversions between Crisp expressions and Python numbers and booleans."""

from typing import Iterable, List

from crisp.crisp_error import CrispTypeError
from crisp.crisp_expr import (
    CrispExpr, CrispConstant, CrispNumber, CrispSymbol, CrispNil, CrispQuote, NIL, TRUE_SYMBOL
)
from crisp.crisp_formatter import CrispFormatter


def expr_to_number(expr: CrispExpr) -> int:
    """
    Extract the integer from a number constant.

    Args:
        expr: Expression to coerce

    Returns:
        The integer value

    Raises:
        CrispTypeError: If the expression is not a number constant
    """
    if isinstance(expr, CrispConstant) and isinstance(expr.atom, CrispNumber):
        return expr.atom.value

    raise CrispTypeError(
        message=f"Invalid number passed: {CrispFormatter.format(expr)}",
        received=f"{CrispFormatter.format(expr)} ({expr.type_name()})",
        expected="A number",
        example="(+ 1 2)"
    )


def expr_to_boolean(expr: CrispExpr) -> bool:
    """Nil and the empty quote are false; everything else, including 0, is true."""
    if isinstance(expr, CrispNil):
        return False

    if isinstance(expr, CrispQuote) and expr.is_empty():
        return False

    return True


def number_to_expr(value: int) -> CrispExpr:
    return CrispConstant(CrispNumber(value))


def boolean_to_expr(value: bool) -> CrispExpr:
    """True is the symbol T, false is nil."""
    if value:
        return CrispConstant(CrispSymbol(TRUE_SYMBOL))

    return NIL


def numbers(exprs: Iterable[CrispExpr]) -> List[int]:
    """Coerce every expression to a number, failing on the first that is not one."""
    return [expr_to_number(expr) for expr in exprs]


def booleans(exprs: Iterable[CrispExpr]) -> List[bool]:
    return [expr_to_boolean(expr) for expr in exprs]
