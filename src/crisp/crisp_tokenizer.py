"""Tokenizer for Crisp source text with detailed error messages."""

from typing import List

from crisp.crisp_error import CrispTokenError
from crisp.crisp_expr import INT32_MIN, INT32_MAX
from crisp.crisp_token import CrispToken, CrispTokenType


class CrispTokenizer:
    """Tokenizes Crisp source text into tokens with detailed error messages."""

    # Characters that may appear in symbols besides letters and digits
    SYMBOL_CHARS = '+-*/<>=!?_≠≤≥'

    def tokenize(self, expression: str) -> List[CrispToken]:
        """
        Tokenize Crisp source text with detailed error reporting.

        Args:
            expression: The source text to tokenize

        Returns:
            List of tokens

        Raises:
            CrispTokenError: If tokenization fails with detailed context
        """
        tokens = []
        i = 0

        while i < len(expression):
            char = expression[i]

            if char.isspace():
                i += 1
                continue

            # Comments - skip from ';' to end of line
            if char == ';':
                while i < len(expression) and expression[i] != '\n':
                    i += 1

                continue

            if char == '(':
                tokens.append(CrispToken(CrispTokenType.LPAREN, '(', i))
                i += 1
                continue

            if char == ')':
                tokens.append(CrispToken(CrispTokenType.RPAREN, ')', i))
                i += 1
                continue

            if char == "'":
                tokens.append(CrispToken(CrispTokenType.QUOTE, "'", i))
                i += 1
                continue

            # Check numbers before symbols so that -5 is a number and - a symbol
            if self._is_number_start(expression, i):
                value, length = self._read_number(expression, i)
                tokens.append(CrispToken(CrispTokenType.NUMBER, value, i, length))
                i += length
                continue

            if self._is_symbol_start(char):
                symbol, length = self._read_symbol(expression, i)
                tokens.append(CrispToken(CrispTokenType.SYMBOL, symbol, i, length))
                i += length
                continue

            char_code = ord(char)
            if char_code < 32:
                char_display = f"\\u{char_code:04x}"
                raise CrispTokenError(
                    message=f"Invalid control character in source code: {char_display}",
                    position=i,
                    received=f"Control character: {char_display} (code {char_code})",
                    suggestion="Remove the control character",
                    context="Control characters are not allowed in source code"
                )

            suggestions = {
                '"': "Crisp has no strings - use numbers, symbols or quoted lists",
                '#': "Crisp has no #t/#f literals - use T for true and nil for false",
                '&': "Use 'and' for boolean operations, not &",
                '|': "Use 'or' for boolean operations, not |",
                '[': "Use parentheses ( ) for lists, not brackets [ ]",
                ']': "Use parentheses ( ) for lists, not brackets [ ]",
                '{': "Use parentheses ( ) for all grouping, not braces { }",
                '}': "Use parentheses ( ) for all grouping, not braces { }",
            }

            raise CrispTokenError(
                message=f"Invalid character: {char}",
                position=i,
                received=f"Character: {char} (code {char_code})",
                expected="Letters, digits, parentheses, ' or one of " + self.SYMBOL_CHARS,
                example="Valid: (+ 1 2), my-var, '(1 2)\\nInvalid: @var, [list]",
                suggestion=suggestions.get(char, f"'{char}' is not a valid character in Crisp")
            )

        return tokens

    def _is_number_start(self, expression: str, pos: int) -> bool:
        """Check if position starts a number literal."""
        char = expression[pos]
        if char.isdigit():
            return True

        return char == '-' and pos + 1 < len(expression) and expression[pos + 1].isdigit()

    def _is_delimiter(self, char: str) -> bool:
        """Check if character is a token delimiter."""
        return char.isspace() or char in "()';"

    def _read_number(self, expression: str, start: int) -> tuple[int, int]:
        """
        Read an integer literal.

        Returns:
            Tuple of (number_value, length_consumed)

        Raises:
            CrispTokenError: If the token is not a valid 32-bit integer
        """
        i = start
        while i < len(expression) and not self._is_delimiter(expression[i]):
            i += 1

        token = expression[start:i]
        digits = token[1:] if token.startswith('-') else token
        if not digits.isascii() or not digits.isdigit():
            raise CrispTokenError(
                message=f"Invalid number format: {token}",
                position=start,
                received=f"Malformed number token: {token}",
                expected="Decimal integer",
                example="Valid: 42, -7, 0",
                context="Token appears to be a number but contains invalid characters"
            )

        value = int(token)
        if value < INT32_MIN or value > INT32_MAX:
            raise CrispTokenError(
                message=f"Number out of range: {token}",
                position=start,
                received=f"Number: {token}",
                expected=f"Integer between {INT32_MIN} and {INT32_MAX}",
                context="Crisp numbers are signed 32-bit integers"
            )

        return value, len(token)

    def _is_symbol_start(self, char: str) -> bool:
        return char.isalpha() or char in self.SYMBOL_CHARS

    def _read_symbol(self, expression: str, start: int) -> tuple[str, int]:
        """
        Read a symbol.

        Returns:
            Tuple of (symbol_string, length_consumed)
        """
        i = start
        while i < len(expression):
            char = expression[i]
            if char.isalnum() or char in self.SYMBOL_CHARS:
                i += 1
                continue

            break

        return expression[start:i], i - start
