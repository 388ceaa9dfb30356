"""Global environment for Crisp variable bindings."""

from typing import Dict, List

from crisp.crisp_error import CrispUnboundVariableError, ErrorMessageBuilder
from crisp.crisp_expr import CrispExpr


class CrispEnvironment:
    """
    Single flat, mutable namespace shared by every evaluation in a context.

    There is no nesting: a binding made anywhere is visible everywhere, and
    rebinding a name overwrites the previous value.
    """

    def __init__(self, name: str = "global") -> None:
        self.name = name
        self._bindings: Dict[str, CrispExpr] = {}

    def define(self, name: str, value: CrispExpr) -> None:
        """
        Bind a name, replacing any existing binding.

        Args:
            name: Variable name
            value: Evaluated expression to store
        """
        self._bindings[name] = value

    def lookup(self, name: str) -> CrispExpr:
        """
        Look up a variable.

        Args:
            name: Variable name to look up

        Returns:
            The bound expression

        Raises:
            CrispUnboundVariableError: If the name has no binding
        """
        if name in self._bindings:
            return self._bindings[name]

        available = self.get_available_bindings()
        similar = ErrorMessageBuilder.suggest_similar_names(name, available)

        suggestion = f"Define it first: (let ({name} some-value))"
        if similar:
            suggestion = f"Did you mean: {', '.join(similar)}?"

        context = "No bindings defined yet"
        if available:
            shown = sorted(available)[:10]
            context = f"Defined names: {', '.join(shown)}{'...' if len(available) > 10 else ''}"

        raise CrispUnboundVariableError(name, context=context, suggestion=suggestion)

    def has_binding(self, name: str) -> bool:
        return name in self._bindings

    def get_available_bindings(self) -> List[str]:
        """Get all bound names."""
        return list(self._bindings.keys())

    def get_bindings(self) -> Dict[str, CrispExpr]:
        """
        Get a snapshot of all bindings.

        Returns:
            Copy of the name to value mapping
        """
        return self._bindings.copy()

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"CrispEnvironment({self.name}: {list(self._bindings.keys())})"
