"""Tests for the parser and formatter."""

import pytest

from crisp import (
    CrispCall, CrispFormatter, CrispFunction, CrispIf, CrispLet, CrispParseError, CrispParser,
    CrispQuote, CrispSymbol, CrispTokenizer, CrispOperator, NIL
)
from crisp.crisp_expr import builtin, number, symbol


def parse(source):
    return CrispParser(CrispTokenizer().tokenize(source), source).parse()


class TestParser:
    """Test parsing source into expression trees."""

    def test_atoms(self):
        """Numbers, symbols, operators and nil."""
        assert parse("1 x + nil") == [number(1), symbol("x"), builtin(CrispOperator.PLUS), NIL]

    @pytest.mark.parametrize("alias,op", [
        ("≠", CrispOperator.NOT_EQUAL),
        ("≤", CrispOperator.LESS_EQUAL),
        ("≥", CrispOperator.GREATER_EQUAL),
        ("and", CrispOperator.AND),
        ("not", CrispOperator.NOT),
    ])
    def test_operator_names(self, alias, op):
        """Operator names and their aliases become built-ins."""
        assert parse(alias) == [builtin(op)]

    def test_call(self):
        """A parenthesised list is a call."""
        assert parse("(+ 1 x)") == [CrispCall(builtin(CrispOperator.PLUS), (number(1), symbol("x")))]

    def test_quote(self):
        """Quoted list contents are parsed but not evaluated."""
        assert parse("'(1 (f 2))") == [CrispQuote((number(1), CrispCall(symbol("f"), (number(2),))))]
        assert parse("'()") == [CrispQuote(())]

    def test_if(self):
        """If takes two or three parts."""
        assert parse("(if x 1)") == [CrispIf(symbol("x"), number(1))]
        assert parse("(if x 1 2)") == [CrispIf(symbol("x"), number(1), number(2))]

    def test_let(self):
        """Let takes (name value) pairs."""
        assert parse("(let (x 1) (y x))") == [
            CrispLet(((CrispSymbol("x"), number(1)), (CrispSymbol("y"), symbol("x"))))
        ]

    def test_lambda(self):
        """Lambda takes a parameter list and one body."""
        assert parse("(lambda (x y) (+ x y))") == [
            CrispFunction(
                (symbol("x"), symbol("y")),
                CrispCall(builtin(CrispOperator.PLUS), (symbol("x"), symbol("y")))
            )
        ]
        assert parse("(lambda () 1)") == [CrispFunction((), number(1))]

    def test_multiple_top_level_expressions(self):
        """Source may hold several expressions."""
        assert len(parse("(let (x 1)) x (+ x 1)")) == 3

    def test_empty_source(self):
        """No tokens means no expressions."""
        assert parse("") == []

    @pytest.mark.parametrize("source,message", [
        ("()", "Empty application"),
        (")", "Unexpected closing parenthesis"),
        ("(+ 1", "missing 1 closing parenthesis"),
        ("(+ 1 (* 2", "missing 2 closing parentheses"),
        ("(if x)", "If expression has wrong number of arguments"),
        ("(if a b c d)", "If expression has wrong number of arguments"),
        ("(let x)", "must be a \\(name value\\) pair"),
        ("(let (x 1 2))", "must be a \\(name value\\) pair"),
        ("(let ((f) 1))", "name must be an atom"),
        ("(lambda x x)", "parenthesised list"),
        ("(lambda (x))", "exactly one body"),
        ("(lambda (x) x x)", "exactly one body"),
        ("'x", "Quote must be followed by a list"),
        ("'", "Quote must be followed by a list"),
    ])
    def test_parse_errors(self, source, message):
        """Malformed source fails with a descriptive message."""
        with pytest.raises(CrispParseError, match=message):
            parse(source)

    def test_unterminated_error_lists_open_expressions(self):
        """The error shows where each unclosed list began."""
        with pytest.raises(CrispParseError) as exc_info:
            parse("(let (f (lambda (x) x)")

        assert "Unclosed expressions" in exc_info.value.context
        assert "at position 0" in exc_info.value.context

    def test_parse_error_has_position(self):
        """Parse errors point into the source."""
        with pytest.raises(CrispParseError) as exc_info:
            parse("(+ 1 2) ()")

        assert exc_info.value.position == 8


class TestFormatter:
    """Test formatting expressions back to source."""

    @pytest.mark.parametrize("source", [
        "42",
        "-3",
        "x",
        "nil",
        "'()",
        "'(1 x '(2))",
        "(+ 1 2)",
        "(f)",
        "(if x 1)",
        "(if x 1 2)",
        "(let (x 1) (y 2))",
        "(let)",
        "(lambda (x y) (+ x y))",
        "(lambda () 1)",
        "(<= 1 2)",
    ])
    def test_formats_parsed_source(self, source):
        """Formatting a parsed expression gives back canonical source."""
        assert CrispFormatter.format(parse(source)[0]) == source

    def test_aliases_format_canonically(self):
        """Aliases are printed with their ASCII names."""
        assert CrispFormatter.format(parse("(≥ 2 1)")[0]) == "(>= 2 1)"

    def test_unknown_expression_type(self):
        """Formatting something that is not an expression fails."""
        with pytest.raises(TypeError, match="Unknown expression type"):
            CrispFormatter.format(object())  # type: ignore[arg-type]


class TestParserLimits:
    """Test input nested deeper than the parser can recurse."""

    @pytest.mark.parametrize("source", [
        "(+ 1 " * 5000 + "1" + ")" * 5000,
        "'(" * 5000 + ")" * 5000,
    ])
    def test_too_deeply_nested(self, source):
        """Deep nesting raises a positioned parse error."""
        with pytest.raises(CrispParseError, match="too deeply nested") as exc_info:
            parse(source)

        assert exc_info.value.position == 0

    def test_position_is_of_failing_expression(self):
        """The error points at the top-level expression that failed."""
        source = "(+ 1 2) " + "'(" * 5000 + ")" * 5000
        with pytest.raises(CrispParseError, match="too deeply nested") as exc_info:
            parse(source)

        assert exc_info.value.position == 8
