"""Main Crisp class: one long-lived evaluation context."""

from typing import List, Optional

from crisp.crisp_environment import CrispEnvironment
from crisp.crisp_evaluator import CrispEvaluator
from crisp.crisp_expr import CrispExpr
from crisp.crisp_formatter import CrispFormatter
from crisp.crisp_parser import CrispParser
from crisp.crisp_tokenizer import CrispTokenizer
from crisp.crisp_trace import CrispTraceWatcher


class Crisp:
    """
    Crisp evaluation context.

    Every call to ``evaluate`` runs against the same global environment, so a
    binding made by one call is visible to the next.  Callers that need
    independent sessions should create one instance per session.
    """

    def __init__(
        self,
        max_depth: int = 250,
        swallow_else_substitution_errors: bool = True,
        call_non_callable_returns_callee: bool = True,
        strict_substitution: bool = False,
        trace_watcher: Optional[CrispTraceWatcher] = None
    ):
        """
        Initialize a Crisp context.

        Args:
            max_depth: Maximum depth of non-tail evaluation
            swallow_else_substitution_errors: Keep the lenient handling of unsubstituted
                parameters in else branches
            call_non_callable_returns_callee: Keep returning the callee when a non-callable
                value is called
            strict_substitution: Raise instead of partially applying when a referenced
                parameter has no argument
            trace_watcher: Optional watcher that receives each reduction step
        """
        self.max_depth = max_depth
        self.swallow_else_substitution_errors = swallow_else_substitution_errors
        self.call_non_callable_returns_callee = call_non_callable_returns_callee
        self.strict_substitution = strict_substitution
        self.environment = CrispEnvironment()
        self.evaluator = CrispEvaluator(
            environment=self.environment,
            max_depth=max_depth,
            swallow_else_substitution_errors=swallow_else_substitution_errors,
            call_non_callable_returns_callee=call_non_callable_returns_callee,
            strict_substitution=strict_substitution,
            trace_watcher=trace_watcher
        )

    def parse(self, source: str) -> List[CrispExpr]:
        """
        Parse source text into top-level expressions.

        Args:
            source: Crisp source text

        Returns:
            Expressions in source order

        Raises:
            CrispTokenError: If tokenization fails
            CrispParseError: If parsing fails
        """
        tokens = CrispTokenizer().tokenize(source)
        return CrispParser(tokens, source).parse()

    def evaluate_expr(self, expr: CrispExpr) -> CrispExpr:
        """
        Evaluate one already-parsed expression.

        Raises:
            CrispEvalError: If evaluation fails
        """
        return self.evaluator.evaluate(expr)

    def evaluate(self, source: str) -> List[CrispExpr]:
        """
        Parse and evaluate every top-level expression in the source.

        Evaluation stops at the first failing expression; bindings made by the
        expressions before it are kept.

        Args:
            source: Crisp source text

        Returns:
            One result per top-level expression

        Raises:
            CrispTokenError: If tokenization fails
            CrispParseError: If parsing fails
            CrispEvalError: If evaluation fails
        """
        return [self.evaluator.evaluate(expr) for expr in self.parse(source)]

    def evaluate_and_format(self, source: str) -> str:
        """
        Evaluate source text and format the result of the last expression.

        Args:
            source: Crisp source text

        Returns:
            Formatted result of the final expression, or an empty string if the
            source held no expressions
        """
        results = self.evaluate(source)
        if not results:
            return ""

        return CrispFormatter.format(results[-1])

    def format(self, expr: CrispExpr) -> str:
        return CrispFormatter.format(expr)
