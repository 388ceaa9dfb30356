"""Crisp expression model - immutable atom and expression types.

Every Crisp program and every Crisp value is a tree built from these types.
Atoms are the irreducible leaves; expressions are the closed set of tree
shapes the evaluator dispatches on.  All nodes are frozen dataclasses, so two
trees compare equal exactly when they have the same shape and the same atoms,
and no node is ever mutated once built.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CrispOperator(Enum):
    """Built-in operators, valued by their canonical source name."""
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    EQUAL = "="
    NOT_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    AND = "and"
    OR = "or"
    NOT = "not"


class CrispAtom(ABC):
    """Abstract base class for all Crisp atoms."""

    @abstractmethod
    def type_name(self) -> str:
        """Return Crisp type name for error messages."""


@dataclass(frozen=True)
class CrispNumber(CrispAtom):
    """Signed 32-bit integer atom."""
    value: int

    def type_name(self) -> str:
        return "number"


@dataclass(frozen=True)
class CrispSymbol(CrispAtom):
    """Identifier atom, resolved through the environment when evaluated."""
    name: str

    def type_name(self) -> str:
        return "symbol"


@dataclass(frozen=True)
class CrispBuiltIn(CrispAtom):
    """Atom naming one of the built-in operators."""
    operator: CrispOperator

    def type_name(self) -> str:
        return "builtin"


class CrispExpr(ABC):
    """
    Abstract base class for all Crisp expressions.

    The set of subclasses is closed: constant, nil, quote, let, if, call and function.
    """

    @abstractmethod
    def type_name(self) -> str:
        """Return Crisp type name for error messages."""


@dataclass(frozen=True)
class CrispConstant(CrispExpr):
    """An atom appearing as an expression: a literal, a symbol reference or an operator."""
    atom: CrispAtom

    def type_name(self) -> str:
        return self.atom.type_name()


@dataclass(frozen=True)
class CrispNil(CrispExpr):
    """The canonical false/empty value."""

    def type_name(self) -> str:
        return "nil"


@dataclass(frozen=True)
class CrispQuote(CrispExpr):
    """A literal list that is never evaluated."""
    items: Tuple[CrispExpr, ...] = ()

    def type_name(self) -> str:
        return "quote"

    def is_empty(self) -> bool:
        """Check if the quoted list is empty."""
        return len(self.items) == 0


@dataclass(frozen=True)
class CrispLet(CrispExpr):
    """Binding form: each (atom, expr) pair binds a global name when evaluated."""
    bindings: Tuple[Tuple[CrispAtom, CrispExpr], ...] = ()

    def type_name(self) -> str:
        return "let"


@dataclass(frozen=True)
class CrispIf(CrispExpr):
    """Conditional with an optional else branch."""
    predicate: CrispExpr
    then: CrispExpr
    otherwise: CrispExpr | None = None

    def type_name(self) -> str:
        return "if"


@dataclass(frozen=True)
class CrispCall(CrispExpr):
    """Application of a head expression to argument expressions."""
    head: CrispExpr
    args: Tuple[CrispExpr, ...] = ()

    def type_name(self) -> str:
        return "call"


@dataclass(frozen=True)
class CrispFunction(CrispExpr):
    """
    A callable value.

    Parameters are expressions, normally symbol constants, matched positionally
    against the body when the function is called.
    """
    params: Tuple[CrispExpr, ...]
    body: CrispExpr

    def type_name(self) -> str:
        return "function"


NIL = CrispNil()
TRUE_SYMBOL = "T"

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


def symbol(name: str) -> CrispConstant:
    """Build a symbol constant expression."""
    return CrispConstant(CrispSymbol(name))


def number(value: int) -> CrispConstant:
    """Build a number constant expression."""
    return CrispConstant(CrispNumber(value))


def builtin(operator: CrispOperator) -> CrispConstant:
    """Build a built-in operator constant expression."""
    return CrispConstant(CrispBuiltIn(operator))
