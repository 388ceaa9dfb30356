"""Evaluator for Crisp expression trees."""

import logging
from typing import List, Optional

from crisp.crisp_builtins import CrispBuiltins
from crisp.crisp_coercion import expr_to_boolean
from crisp.crisp_curry import curry
from crisp.crisp_environment import CrispEnvironment
from crisp.crisp_error import (
    CrispError, CrispEvalError, CrispTypeError, CrispNoBranchTakenError, CrispSubstitutionIndexError,
    ErrorMessageBuilder
)
from crisp.crisp_expr import (
    CrispExpr, CrispConstant, CrispSymbol, CrispBuiltIn, CrispQuote,
    CrispLet, CrispIf, CrispCall, CrispFunction, NIL
)
from crisp.crisp_formatter import CrispFormatter
from crisp.crisp_trace import CrispTraceWatcher


class CrispEvaluator:
    """
    Reduces Crisp expressions to values against one global environment.

    Evaluation is a loop over a single working expression.  The chosen branch of
    an if and the substituted body of a saturated call replace the working
    expression and the loop continues, so those tail positions never grow the
    Python stack.  Everything else (predicates, call heads and arguments, let
    values) is evaluated recursively and counts against ``max_depth``.
    """

    def __init__(
        self,
        environment: CrispEnvironment | None = None,
        max_depth: int = 250,
        swallow_else_substitution_errors: bool = True,
        call_non_callable_returns_callee: bool = True,
        strict_substitution: bool = False,
        trace_watcher: Optional[CrispTraceWatcher] = None
    ):
        """
        Initialize evaluator.

        Args:
            environment: Environment to bind into; a fresh one is created if omitted
            max_depth: Maximum depth of non-tail evaluation
            swallow_else_substitution_errors: If True, a parameter in an else branch with no
                matching argument is left unsubstituted instead of failing the call
            call_non_callable_returns_callee: If True, calling a value that is not a function
                or built-in returns that value; if False it raises CrispTypeError
            strict_substitution: If True, calling a function without an argument for a parameter
                its body references raises CrispSubstitutionIndexError instead of returning a
                partial application
            trace_watcher: Optional watcher that receives each reduction step
        """
        self.environment = environment if environment is not None else CrispEnvironment()
        self.max_depth = max_depth
        self.swallow_else_substitution_errors = swallow_else_substitution_errors
        self.call_non_callable_returns_callee = call_non_callable_returns_callee
        self.strict_substitution = strict_substitution
        self.trace_watcher = trace_watcher
        self.builtins = CrispBuiltins()
        self._logger = logging.getLogger("CrispEvaluator")

    def set_trace_watcher(self, watcher: Optional[CrispTraceWatcher]) -> None:
        """
        Set the trace watcher (replaces any existing watcher).

        Args:
            watcher: CrispTraceWatcher instance or None to disable tracing
        """
        self.trace_watcher = watcher

    def evaluate(self, expr: CrispExpr) -> CrispExpr:
        """
        Evaluate one top-level expression.

        Bindings made by let forms are committed to the environment as they
        happen and are kept even if a later part of the expression fails.

        Args:
            expr: Expression to evaluate

        Returns:
            The irreducible result

        Raises:
            CrispEvalError: If evaluation fails
        """
        try:
            return self._evaluate(expr, 0)

        except CrispError as e:
            self._logger.debug("Evaluation failed: %s", e.message)
            raise

        except RecursionError as e:
            raise CrispEvalError(
                message="Expression too deeply nested for the Python stack",
                context=f"Maximum configured depth is {self.max_depth}",
                suggestion="Reduce nesting depth or lower max_depth"
            ) from e

        except Exception as e:
            self._logger.exception("Unexpected error during evaluation")
            raise CrispEvalError(
                message=f"Unexpected error during evaluation: {e}",
                suggestion="This is an internal error - please report this issue"
            ) from e

    def _emit_trace(self, expr: CrispExpr, depth: int) -> None:
        if self.trace_watcher is None:
            return

        self.trace_watcher.on_trace(f"{'  ' * depth}{CrispFormatter.format(expr)}")

    def _evaluate(self, expr: CrispExpr, depth: int) -> CrispExpr:
        """Reduce an expression until it reaches an irreducible shape."""
        if depth > self.max_depth:
            raise CrispEvalError(
                message=f"Expression too deeply nested (max depth: {self.max_depth})",
                suggestion="Reduce nesting depth or increase max_depth limit",
                example="Move intermediate results into let bindings: (let (x (+ 1 2))) (+ x 3)"
            )

        while True:
            self._emit_trace(expr, depth)

            if isinstance(expr, CrispConstant):
                if isinstance(expr.atom, CrispSymbol):
                    return self.environment.lookup(expr.atom.name)

                return expr

            if isinstance(expr, CrispQuote):
                return expr

            if isinstance(expr, CrispLet):
                return self._evaluate_let(expr, depth)

            if isinstance(expr, CrispIf):
                predicate = self._evaluate(expr.predicate, depth + 1)
                if expr_to_boolean(predicate):
                    expr = expr.then
                    continue

                if expr.otherwise is not None:
                    expr = expr.otherwise
                    continue

                raise CrispNoBranchTakenError(
                    message=f"No branches of predicate ran: {CrispFormatter.format(predicate)}",
                    received=f"Predicate {CrispFormatter.format(expr.predicate)} was false",
                    suggestion="Add an else branch: (if predicate then otherwise)",
                    example=ErrorMessageBuilder.create_operator_example("if")
                )

            if isinstance(expr, CrispCall):
                head = self._evaluate(expr.head, depth + 1)
                args = [self._evaluate(arg, depth + 1) for arg in expr.args]

                if isinstance(head, CrispFunction):
                    # A partial application yields a function, which the next pass returns as is.
                    expr = self._apply_function(head, args)
                    continue

                if isinstance(head, CrispConstant) and isinstance(head.atom, CrispBuiltIn):
                    return self.builtins.apply(head.atom.operator, args)

                if not self.call_non_callable_returns_callee:
                    raise CrispTypeError(
                        message=f"Value is not callable: {CrispFormatter.format(head)}",
                        received=f"{CrispFormatter.format(head)} ({head.type_name()})",
                        expected="A function or built-in operator",
                        example=ErrorMessageBuilder.create_operator_example("lambda")
                    )

                return head

            # Functions, nil and any other shape are already values.
            return expr

    def _evaluate_let(self, let_expr: CrispLet, depth: int) -> CrispExpr:
        """
        Evaluate and bind each (name value) pair in order.

        Args:
            let_expr: Let expression
            depth: Current recursion depth

        Returns:
            Nil

        Raises:
            CrispTypeError: If a binding name is not a symbol
        """
        for name, value_expr in let_expr.bindings:
            if not isinstance(name, CrispSymbol):
                raise CrispTypeError(
                    message=f"Expected symbol, found following: {CrispFormatter.format_atom(name)}",
                    received=f"{CrispFormatter.format_atom(name)} ({name.type_name()})",
                    expected="A symbol to bind",
                    example=ErrorMessageBuilder.create_operator_example("let")
                )

            value = self._evaluate(value_expr, depth + 1)
            self.environment.define(name.name, value)
            self._logger.debug("Bound '%s' to %s", name.name, type(value).__name__)

        return NIL

    def _apply_function(self, function: CrispFunction, args: List[CrispExpr]) -> CrispExpr:
        """
        Substitute arguments into a function body.

        Args:
            function: Function being called
            args: Evaluated arguments

        Returns:
            The substituted body if every parameter was consumed, otherwise a new
            function over the parameters that were not

        Raises:
            CrispSubstitutionIndexError: If a referenced parameter has no argument and
                strict_substitution is set
        """
        marks = [False] * len(function.params)
        try:
            body = curry(function.body, function.params, args, marks, self.swallow_else_substitution_errors)

        except CrispSubstitutionIndexError:
            if self.strict_substitution:
                raise

            # Parameters without an argument stay behind as parameters of the result.
            marks = [False] * len(function.params)
            body = curry(
                function.body, function.params, args, marks, self.swallow_else_substitution_errors, keep_missing=True
            )

        residual = tuple(param for param, marked in zip(function.params, marks) if not marked)

        if not residual:
            return body

        self._logger.debug(
            "Partial application: %d of %d parameters remain", len(residual), len(function.params)
        )
        return CrispFunction(residual, body)
