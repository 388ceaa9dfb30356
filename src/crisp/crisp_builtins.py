"""Built-in operator table for Crisp.

Every operator receives its arguments already evaluated and returns a final
value; none of them re-enter the evaluation loop.
"""

import operator as pyop
from typing import Callable, Dict, List

from crisp.crisp_coercion import boolean_to_expr, booleans, expr_to_boolean, number_to_expr, numbers
from crisp.crisp_error import CrispArithmeticError, CrispArityError, ErrorMessageBuilder
from crisp.crisp_expr import INT32_MIN, INT32_MAX, CrispConstant, CrispExpr, CrispNumber, CrispOperator


CrispOperatorImpl = Callable[[List[CrispExpr]], CrispExpr]


class CrispBuiltins:
    """
    Table-driven dispatch for the built-in operators.

    The table is built once per instance and must cover every CrispOperator.
    """

    def __init__(self) -> None:
        self._table: Dict[CrispOperator, CrispOperatorImpl] = self._build_table()

        missing = [op.value for op in CrispOperator if op not in self._table]
        if missing:
            raise RuntimeError(f"Built-in operators not implemented: {', '.join(missing)}")

    def _build_table(self) -> Dict[CrispOperator, CrispOperatorImpl]:
        return {
            CrispOperator.PLUS: self._builtin_plus,
            CrispOperator.MINUS: self._builtin_minus,
            CrispOperator.TIMES: self._builtin_times,
            CrispOperator.DIVIDE: self._builtin_divide,
            CrispOperator.EQUAL: self._builtin_equal,
            CrispOperator.NOT_EQUAL: self._builtin_not_equal,
            CrispOperator.LESS: self._make_numeric_relation(pyop.lt),
            CrispOperator.GREATER: self._make_numeric_relation(pyop.gt),
            CrispOperator.LESS_EQUAL: self._make_numeric_relation(pyop.le),
            CrispOperator.GREATER_EQUAL: self._make_numeric_relation(pyop.ge),
            CrispOperator.AND: self._builtin_and,
            CrispOperator.OR: self._builtin_or,
            CrispOperator.NOT: self._builtin_not,
        }

    def apply(self, op: CrispOperator, args: List[CrispExpr]) -> CrispExpr:
        """
        Apply a built-in operator to evaluated arguments.

        Args:
            op: Operator to apply
            args: Already-evaluated argument expressions

        Returns:
            Result expression

        Raises:
            CrispTypeError: If an argument has the wrong shape
            CrispArityError: If the argument count is not accepted
            CrispArithmeticError: On division by zero or 32-bit overflow
        """
        return self._table[op](args)

    def _check_range(self, value: int, op: CrispOperator) -> int:
        if value < INT32_MIN or value > INT32_MAX:
            raise CrispArithmeticError(
                message=f"Integer overflow in '{op.value}'",
                received=f"Result: {value}",
                expected=f"A result between {INT32_MIN} and {INT32_MAX}",
                context="Crisp numbers are signed 32-bit integers"
            )

        return value

    def _require_seed(self, args: List[CrispExpr], op: CrispOperator) -> None:
        if not args:
            raise CrispArityError(
                message=f"{op.value} expects one or more parameters, found 0",
                expected="At least 1 argument",
                example=ErrorMessageBuilder.create_operator_example(op.value)
            )

    def _builtin_plus(self, args: List[CrispExpr]) -> CrispExpr:
        total = 0
        for value in numbers(args):
            total = self._check_range(total + value, CrispOperator.PLUS)

        return number_to_expr(total)

    def _builtin_times(self, args: List[CrispExpr]) -> CrispExpr:
        product = 1
        for value in numbers(args):
            product = self._check_range(product * value, CrispOperator.TIMES)

        return number_to_expr(product)

    def _builtin_minus(self, args: List[CrispExpr]) -> CrispExpr:
        """Fold subtraction left from the first argument; a single argument is returned as is."""
        self._require_seed(args, CrispOperator.MINUS)
        values = numbers(args)
        result = values[0]
        for value in values[1:]:
            result = self._check_range(result - value, CrispOperator.MINUS)

        return number_to_expr(result)

    def _builtin_divide(self, args: List[CrispExpr]) -> CrispExpr:
        """Fold integer division left from the first argument, truncating toward zero."""
        self._require_seed(args, CrispOperator.DIVIDE)
        values = numbers(args)
        result = values[0]
        for divisor in values[1:]:
            if divisor == 0:
                raise CrispArithmeticError(
                    message="Division by zero",
                    received=f"(/ {result} 0)",
                    suggestion="Check the divisor before dividing"
                )

            quotient = abs(result) // abs(divisor)
            if (result < 0) != (divisor < 0):
                quotient = -quotient

            result = self._check_range(quotient, CrispOperator.DIVIDE)

        return number_to_expr(result)

    def _builtin_equal(self, args: List[CrispExpr]) -> CrispExpr:
        return boolean_to_expr(all(a == b for a, b in zip(args, args[1:])))

    def _builtin_not_equal(self, args: List[CrispExpr]) -> CrispExpr:
        return boolean_to_expr(all(a != b for a, b in zip(args, args[1:])))

    def _make_numeric_relation(self, relation: Callable[[int, int], bool]) -> CrispOperatorImpl:
        """
        Build a chained numeric comparison.

        Every adjacent pair must be two number constants satisfying the relation.
        A pair that is not two numbers makes the whole chain false rather than
        raising an error.
        """
        def compare(args: List[CrispExpr]) -> CrispExpr:
            for a, b in zip(args, args[1:]):
                if not (isinstance(a, CrispConstant) and isinstance(a.atom, CrispNumber)):
                    return boolean_to_expr(False)

                if not (isinstance(b, CrispConstant) and isinstance(b.atom, CrispNumber)):
                    return boolean_to_expr(False)

                if not relation(a.atom.value, b.atom.value):
                    return boolean_to_expr(False)

            return boolean_to_expr(True)

        return compare

    def _builtin_and(self, args: List[CrispExpr]) -> CrispExpr:
        return boolean_to_expr(all(booleans(args)))

    def _builtin_or(self, args: List[CrispExpr]) -> CrispExpr:
        return boolean_to_expr(any(booleans(args)))

    def _builtin_not(self, args: List[CrispExpr]) -> CrispExpr:
        if len(args) != 1:
            raise CrispArityError(
                message=f"not expects 1 parameter, got {len(args)}",
                expected="Exactly 1 argument",
                example=ErrorMessageBuilder.create_operator_example("not")
            )

        return boolean_to_expr(not expr_to_boolean(args[0]))
