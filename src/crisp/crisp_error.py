"""Exception classes for Crisp with detailed context."""

from typing import List, Optional
import difflib


class CrispError(Exception):
    """Base exception for Crisp errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        position: Optional[int] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            position: Character position where error occurred
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.position = position

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.position is not None:
            parts.append(f"Position: {self.position}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class CrispTokenError(CrispError):
    """Tokenization errors with detailed context."""


class CrispParseError(CrispError):
    """Parsing errors with detailed context."""


class CrispEvalError(CrispError):
    """Evaluation errors with detailed context."""


class CrispTypeError(CrispEvalError):
    """A value of the wrong shape was coerced (expected number, expected symbol, not callable)."""


class CrispUnboundVariableError(CrispEvalError):
    """A symbol was looked up but has no binding in the environment."""

    def __init__(self, name: str, **kwargs: Optional[str]):
        self.name = name
        super().__init__(f"Unbound variable: '{name}'", **kwargs)


class CrispArityError(CrispEvalError):
    """A built-in operator received an argument count it does not accept."""


class CrispSubstitutionIndexError(CrispEvalError):
    """A function body referenced a parameter position with no supplied argument."""


class CrispNoBranchTakenError(CrispEvalError):
    """An if without an else branch had a false predicate."""


class CrispArithmeticError(CrispEvalError):
    """Division by zero, or an integer result outside the signed 32-bit range."""


class ErrorMessageBuilder:
    """Helper class for building detailed error messages."""

    @staticmethod
    def suggest_similar_names(target: str, available_names: List[str], max_suggestions: int = 3) -> List[str]:
        """Suggest similar binding names using fuzzy matching."""
        if not target or not available_names:
            return []

        return difflib.get_close_matches(target, available_names, n=max_suggestions, cutoff=0.6)

    @staticmethod
    def create_operator_example(operator_name: str) -> str:
        """Create usage example for a built-in operator."""
        examples = {
            '+': "(+ 1 2 3) → 6",
            '-': "(- 10 3) → 7",
            '*': "(* 2 3 4) → 24",
            '/': "(/ 12 3) → 4",
            '=': "(= 1 1 1) → T",
            '!=': "(!= 1 2) → T",
            '<': "(< 1 2 3) → T",
            '>': "(> 3 2 1) → T",
            '<=': "(<= 1 1 2) → T",
            '>=': "(>= 3 2 2) → T",
            'and': "(and 1 '(2)) → T",
            'or': "(or nil 1) → T",
            'not': "(not nil) → T",
            'if': "(if (> 5 3) 1 2) → 1",
            'let': "(let (x 5) (y 10)) → nil",
            'lambda': "((lambda (x) (* x x)) 5) → 25",
        }

        return examples.get(operator_name, f"({operator_name} ...)")
