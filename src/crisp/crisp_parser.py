"""Parser for Crisp source text with detailed error messages."""

from dataclasses import dataclass
from typing import List

from crisp.crisp_error import CrispParseError, ErrorMessageBuilder
from crisp.crisp_expr import (
    CrispAtom, CrispNumber, CrispSymbol, CrispBuiltIn, CrispOperator,
    CrispExpr, CrispConstant, CrispQuote, CrispLet, CrispIf, CrispCall, CrispFunction, NIL
)
from crisp.crisp_token import CrispToken, CrispTokenType


@dataclass
class ParenStackFrame:
    """Represents an unclosed opening parenthesis with context."""
    position: int
    context_snippet: str


class CrispParser:
    """Parses tokens into an ordered sequence of Crisp expressions."""

    OPERATOR_NAMES = {
        **{op.value: op for op in CrispOperator},
        '≠': CrispOperator.NOT_EQUAL,
        '≤': CrispOperator.LESS_EQUAL,
        '≥': CrispOperator.GREATER_EQUAL,
    }

    def __init__(self, tokens: List[CrispToken], expression: str = ""):
        """
        Initialize parser with tokens and original source text.

        Args:
            tokens: List of tokens to parse
            expression: Original source text for error context
        """
        self.tokens = tokens
        self.pos = 0
        self.current_token: CrispToken | None = tokens[0] if tokens else None
        self.expression = expression
        self.paren_stack: List[ParenStackFrame] = []

    def parse(self) -> List[CrispExpr]:
        """
        Parse every top-level expression.

        Returns:
            Parsed expressions in source order (empty if the source holds no tokens)

        Raises:
            CrispParseError: If parsing fails with detailed context
        """
        exprs = []
        while self.current_token is not None:
            start_pos = self.current_token.position
            try:
                exprs.append(self._parse_expression())

            except RecursionError as e:
                raise CrispParseError(
                    message="Expression too deeply nested to parse",
                    position=start_pos,
                    context=f"{len(self.paren_stack)} lists were open when the Python stack ran out",
                    suggestion="Reduce nesting depth, for example by moving parts into let bindings"
                ) from e

        return exprs

    def _parse_expression(self) -> CrispExpr:
        """Parse a single expression."""
        assert self.current_token is not None, "Current token must not be None here"
        token = self.current_token

        if token.type == CrispTokenType.LPAREN:
            return self._parse_list()

        if token.type == CrispTokenType.QUOTE:
            return self._parse_quote()

        if token.type == CrispTokenType.SYMBOL:
            self._advance()
            if token.value == "nil":
                return NIL

            return CrispConstant(self._symbol_atom(token.value))

        if token.type == CrispTokenType.NUMBER:
            self._advance()
            return CrispConstant(CrispNumber(token.value))

        assert token.type == CrispTokenType.RPAREN, f"Unexpected token type ({token.type}) encountered"
        raise CrispParseError(
            message="Unexpected closing parenthesis",
            position=token.position,
            received="Token: )",
            expected="Number, symbol, '(' or '",
            suggestion="Remove the extra ')' or add the matching '('"
        )

    def _symbol_atom(self, name: str) -> CrispAtom:
        """Operators become built-in atoms, anything else a symbol."""
        if name in self.OPERATOR_NAMES:
            return CrispBuiltIn(self.OPERATOR_NAMES[name])

        return CrispSymbol(name)

    def _parse_list(self) -> CrispExpr:
        """Parse a parenthesised form: if, let, lambda or a call."""
        assert self.current_token is not None
        start_pos = self.current_token.position
        self._push_paren_frame(start_pos)
        self._advance()  # consume '('

        head = self.current_token
        if head is not None and head.type == CrispTokenType.SYMBOL:
            if head.value == "if":
                self._advance()
                return self._parse_if(start_pos)

            if head.value == "let":
                self._advance()
                return self._parse_let(start_pos)

            if head.value == "lambda":
                self._advance()
                return self._parse_lambda(start_pos)

        elements = self._parse_elements(start_pos)
        if not elements:
            raise CrispParseError(
                message="Empty application",
                position=start_pos,
                received="()",
                expected="A function or operator followed by its arguments",
                example=ErrorMessageBuilder.create_operator_example("+"),
                suggestion="Use nil or '() for an empty value"
            )

        return CrispCall(elements[0], tuple(elements[1:]))

    def _parse_elements(self, start_pos: int) -> List[CrispExpr]:
        """Parse expressions up to and including the closing parenthesis."""
        elements = []
        while self.current_token is not None and self.current_token.type != CrispTokenType.RPAREN:
            elements.append(self._parse_expression())

        if self.current_token is None:
            raise self._create_unterminated_error(start_pos)

        self._pop_paren_frame()
        self._advance()  # consume ')'
        return elements

    def _parse_if(self, start_pos: int) -> CrispIf:
        elements = self._parse_elements(start_pos)
        if len(elements) not in (2, 3):
            raise CrispParseError(
                message="If expression has wrong number of arguments",
                position=start_pos,
                received=f"Got {len(elements)} arguments",
                expected="A predicate, a then branch and an optional else branch",
                example=ErrorMessageBuilder.create_operator_example("if")
            )

        otherwise = elements[2] if len(elements) == 3 else None
        return CrispIf(elements[0], elements[1], otherwise)

    def _parse_let(self, start_pos: int) -> CrispLet:
        """
        Parse (let (name value) ...).

        Binding names must be atoms; whether they are symbols is checked when the
        let is evaluated.
        """
        bindings = []
        for i, binding in enumerate(self._parse_elements(start_pos)):
            if not isinstance(binding, CrispCall) or len(binding.args) != 1:
                raise CrispParseError(
                    message=f"Let binding {i + 1} must be a (name value) pair",
                    position=start_pos,
                    expected="Each binding needs exactly 2 elements: (name value)",
                    example=ErrorMessageBuilder.create_operator_example("let")
                )

            if not isinstance(binding.head, CrispConstant):
                raise CrispParseError(
                    message=f"Let binding {i + 1} name must be an atom",
                    position=start_pos,
                    expected="A symbol name",
                    example=ErrorMessageBuilder.create_operator_example("let")
                )

            bindings.append((binding.head.atom, binding.args[0]))

        return CrispLet(tuple(bindings))

    def _parse_lambda(self, start_pos: int) -> CrispFunction:
        """Parse (lambda (params...) body)."""
        if self.current_token is None or self.current_token.type != CrispTokenType.LPAREN:
            if self.current_token is None:
                raise self._create_unterminated_error(start_pos)

            raise CrispParseError(
                message="Lambda parameters must be a parenthesised list",
                position=self.current_token.position,
                received=f"Found: {self.current_token.value}",
                expected="(lambda (param1 param2 ...) body)",
                example=ErrorMessageBuilder.create_operator_example("lambda")
            )

        params_pos = self.current_token.position
        self._push_paren_frame(params_pos)
        self._advance()  # consume '('
        params = self._parse_elements(params_pos)

        elements = self._parse_elements(start_pos)
        if len(elements) != 1:
            raise CrispParseError(
                message="Lambda expression needs exactly one body expression",
                position=start_pos,
                received=f"Got {len(elements)} body expressions",
                expected="(lambda (param1 param2 ...) body)",
                example=ErrorMessageBuilder.create_operator_example("lambda")
            )

        return CrispFunction(tuple(params), elements[0])

    def _parse_quote(self) -> CrispQuote:
        """Parse '( items... ); only a parenthesised list may be quoted."""
        assert self.current_token is not None
        quote_pos = self.current_token.position
        self._advance()  # consume quote

        if self.current_token is None or self.current_token.type != CrispTokenType.LPAREN:
            raise CrispParseError(
                message="Quote must be followed by a list",
                position=quote_pos,
                received="Nothing to quote" if self.current_token is None else f"Found: {self.current_token.value}",
                expected="'( ... )",
                example="'(1 2 3)"
            )

        list_pos = self.current_token.position
        self._push_paren_frame(list_pos)
        self._advance()  # consume '('
        return CrispQuote(tuple(self._parse_elements(list_pos)))

    def _push_paren_frame(self, position: int) -> None:
        self.paren_stack.append(ParenStackFrame(position, self._get_context_snippet(position)))

    def _pop_paren_frame(self) -> None:
        assert self.paren_stack, "Paren stack underflow - trying to pop from empty stack"
        self.paren_stack.pop()

    def _get_context_snippet(self, position: int, length: int = 30) -> str:
        """
        Get a snippet of source starting at position for error display.

        Args:
            position: Starting character position
            length: Maximum length of snippet

        Returns:
            Formatted context snippet with ellipsis if truncated
        """
        end = min(position + length, len(self.expression))
        snippet = ' '.join(self.expression[position:end].split())
        if end < len(self.expression):
            snippet += "..."

        return snippet

    def _create_unterminated_error(self, start_pos: int) -> CrispParseError:
        """
        Create an error listing every expression still open at end of input.

        Args:
            start_pos: Position where the innermost unterminated list started

        Returns:
            CrispParseError with the unclosed expressions as context
        """
        depth = len(self.paren_stack)
        stack_lines = [
            f"  {i}. at position {frame.position}: {frame.context_snippet}"
            for i, frame in enumerate(self.paren_stack, 1)
        ]
        paren_word = "parenthesis" if depth == 1 else "parentheses"

        return CrispParseError(
            message=f"Unterminated list - missing {depth} closing {paren_word}",
            position=start_pos,
            expected=f"Add {depth} closing {paren_word}",
            example="Correct: (+ 1 2)\nIncorrect: (+ 1 2",
            context="Unclosed expressions:\n" + "\n".join(stack_lines)
        )

    def _advance(self) -> None:
        """Move to the next token."""
        self.pos += 1
        if self.pos < len(self.tokens):
            self.current_token = self.tokens[self.pos]

        else:
            self.current_token = None
