"""
Tests for the restricted arithmetic evaluator
"""
import pytest

from evaluator import (
    ExpressionEvaluator,
    MalformedExpression,
    NonFiniteResult,
    evaluate,
    to_canonical,
    tokenize,
)


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2 + 3 * 4", "14"),
        ("2 ^ 10", "1024"),
        ("sqrt(16)", "4"),
        ("10 - 4 - 3", "3"),
        ("100 / 10 / 2", "5"),
        ("(2 + 3) * 4", "20"),
        ("((2))", "2"),
        ("2 × 3 ÷ 4", "1.5"),
        ("0.1 + 0.2", "0.3"),
        ("1 / 3", "0.3333333333"),
    ],
)
def test_arithmetic_and_precedence(expression, expected):
    assert evaluate(expression) == expected


def test_power_is_right_associative():
    assert evaluate("2 ^ 3 ^ 2") == "512"


def test_unary_minus_binds_tighter_than_power():
    assert evaluate("-3 ^ 2") == "9"
    assert evaluate("2 ^ -1") == "0.5"
    assert evaluate("5 - -2") == "7"


def test_remainder():
    assert evaluate("10 % 3") == "1"
    assert evaluate("-7 % 3") == "-1"
    assert evaluate("7 % -3") == "1"
    assert evaluate("5.5 % 2") == "1.5"
    assert evaluate("50 + 10 % 3") == "51"
    assert evaluate("2 * 10 % 3") == "2"


def test_remainder_by_zero_is_not_finite():
    with pytest.raises(NonFiniteResult):
        evaluate("5 % 0")


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("log(1000)", "3"),
        ("ln(E)", "1"),
        ("sin(0)", "0"),
        ("sin(PI)", "0"),
        ("cos(PI)", "-1"),
        ("tan(0)", "0"),
        ("PI", "3.1415926536"),
        ("2 * sqrt(9) + 1", "7"),
    ],
)
def test_functions_and_constants(expression, expected):
    assert evaluate(expression) == expected


@pytest.mark.parametrize("expression", ["1 / 0", "0 / 0", "sqrt(-1)", "log(0)", "ln(0)", "10 ^ 400", "0 ^ -1"])
def test_non_finite_results(expression):
    with pytest.raises(NonFiniteResult):
        evaluate(expression)


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "   ",
        "2 +",
        "(2 + 3",
        "2 + 3)",
        "2 3",
        "foo(2)",
        "sin 2",
        "2 $ 3",
        "Error",
        "__import__('os').system('echo hi')",
    ],
)
def test_malformed_expressions(expression):
    with pytest.raises(MalformedExpression):
        evaluate(expression)


def test_tokenize_rewrites_glyphs():
    assert tokenize("7 × 2 ÷ 1") == [
        ("number", "7"), ("op", "*"), ("number", "2"), ("op", "/"), ("number", "1"),
    ]


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, "0"),
        (-0.0, "0"),
        (2.5, "2.5"),
        (1234567.0, "1234567"),
        (-42.0, "-42"),
        (0.00001, "0.00001"),
        (1e21, "1e+21"),
        (1e-12, "0"),
        (2.00000000004, "2"),
    ],
)
def test_canonical_strings(value, expected):
    assert to_canonical(value) == expected


def test_evaluator_object_delegates():
    assert ExpressionEvaluator().evaluate("6 × 7") == "42"
