"""Positional parameter substitution used to apply and curry Crisp functions."""

from typing import List, Sequence

from crisp.crisp_error import CrispSubstitutionIndexError
from crisp.crisp_expr import CrispExpr, CrispCall, CrispIf
from crisp.crisp_formatter import CrispFormatter


def curry(
    body: CrispExpr,
    params: Sequence[CrispExpr],
    args: Sequence[CrispExpr],
    marks: List[bool],
    swallow_else_errors: bool = True,
    keep_missing: bool = False
) -> CrispExpr:
    """
    Substitute arguments for parameter occurrences in a function body.

    Any node equal to ``params[i]`` is replaced with ``args[i]`` and ``marks[i]`` is
    set, so the caller can tell which parameters were consumed.  Substitution
    descends through calls and conditionals only: quotes, lets and nested
    functions are left untouched.  The input tree is never modified; a new tree
    is returned.

    Args:
        body: Expression to rewrite
        params: Formal parameters, matched by value
        args: Actual arguments, matched to parameters by position
        marks: One flag per parameter, set when that parameter is substituted
        swallow_else_errors: If True, a failed substitution inside an else branch
            leaves that branch unchanged instead of failing the whole substitution
        keep_missing: If True, a parameter with no argument at its position is left in
            place and unmarked instead of raising, so it stays a parameter of the result

    Returns:
        The rewritten body

    Raises:
        CrispSubstitutionIndexError: If a parameter occurs in the body but no argument
            was supplied for its position, and keep_missing is False
    """
    for index, param in enumerate(params):
        if body == param:
            if index >= len(args) and keep_missing:
                return body

            marks[index] = True
            if index >= len(args):
                raise CrispSubstitutionIndexError(
                    message="Index out of bounds",
                    received=f"Parameter {CrispFormatter.format(param)} at position {index}, "
                        f"but only {len(args)} argument(s) supplied",
                    context="Arguments are matched to parameters by position, so a parameter can only be "
                        "substituted if every parameter before it also received an argument",
                    suggestion="Supply arguments for the leading parameters first"
                )

            return args[index]

    if isinstance(body, CrispCall):
        head = curry(body.head, params, args, marks, swallow_else_errors, keep_missing)
        tail = tuple(curry(arg, params, args, marks, swallow_else_errors, keep_missing) for arg in body.args)
        return CrispCall(head, tail)

    if isinstance(body, CrispIf):
        predicate = curry(body.predicate, params, args, marks, swallow_else_errors, keep_missing)
        then = curry(body.then, params, args, marks, swallow_else_errors, keep_missing)
        otherwise = body.otherwise
        if otherwise is not None:
            try:
                otherwise = curry(otherwise, params, args, marks, swallow_else_errors, keep_missing)

            except CrispSubstitutionIndexError:
                if not swallow_else_errors:
                    raise

                # Marks set before the failure stay set.
                otherwise = body.otherwise

        return CrispIf(predicate, then, otherwise)

    return body
