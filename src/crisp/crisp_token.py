"""Token types and token representation for Crisp source text."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CrispTokenType(Enum):
    """Token types for Crisp source text."""
    LPAREN = "("
    RPAREN = ")"
    QUOTE = "'"
    SYMBOL = "SYMBOL"
    NUMBER = "NUMBER"


@dataclass
class CrispToken:
    """Represents a single token in Crisp source text."""
    type: CrispTokenType
    value: Any
    position: int
    length: int = 1

    def __repr__(self) -> str:
        return f"CrispToken({self.type.name}, {self.value!r}, pos={self.position})"
