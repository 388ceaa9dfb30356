"""Formats Crisp expressions back into s-expression source text."""

from crisp.crisp_expr import (
    CrispAtom, CrispNumber, CrispSymbol, CrispBuiltIn,
    CrispExpr, CrispConstant, CrispNil, CrispQuote, CrispLet, CrispIf, CrispCall, CrispFunction
)


class CrispFormatter:
    """Renders expressions using the same syntax the parser accepts."""

    @staticmethod
    def format_atom(atom: CrispAtom) -> str:
        """
        Format a single atom.

        Args:
            atom: Atom to format

        Returns:
            Source text for the atom
        """
        if isinstance(atom, CrispNumber):
            return str(atom.value)

        if isinstance(atom, CrispSymbol):
            return atom.name

        if isinstance(atom, CrispBuiltIn):
            return atom.operator.value

        raise TypeError(f"Unknown atom type: {type(atom).__name__}")

    @staticmethod
    def format(expr: CrispExpr) -> str:
        """
        Format an expression tree.

        Args:
            expr: Expression to format

        Returns:
            Source text for the expression
        """
        fmt = CrispFormatter.format

        if isinstance(expr, CrispConstant):
            return CrispFormatter.format_atom(expr.atom)

        if isinstance(expr, CrispNil):
            return "nil"

        if isinstance(expr, CrispQuote):
            return "'(" + " ".join(fmt(item) for item in expr.items) + ")"

        if isinstance(expr, CrispLet):
            bindings = " ".join(
                f"({CrispFormatter.format_atom(name)} {fmt(value)})" for name, value in expr.bindings
            )
            return f"(let {bindings})" if bindings else "(let)"

        if isinstance(expr, CrispIf):
            if expr.otherwise is None:
                return f"(if {fmt(expr.predicate)} {fmt(expr.then)})"

            return f"(if {fmt(expr.predicate)} {fmt(expr.then)} {fmt(expr.otherwise)})"

        if isinstance(expr, CrispCall):
            parts = [fmt(expr.head)] + [fmt(arg) for arg in expr.args]
            return "(" + " ".join(parts) + ")"

        if isinstance(expr, CrispFunction):
            params = " ".join(fmt(param) for param in expr.params)
            return f"(lambda ({params}) {fmt(expr.body)})"

        raise TypeError(f"Unknown expression type: {type(expr).__name__}")
