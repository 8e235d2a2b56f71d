"""
Expression Evaluator for PocketCalc
Evaluates calculator expression text with a restricted arithmetic grammar.

Only numbers, the operators + - * / ^ % and parentheses, the functions
sin, cos, tan, log (base 10), ln and sqrt, and the constants PI and E are
accepted. The text is interpreted while it is parsed; nothing is ever handed
to eval().
"""
import logging
import math
import re

import config

logger = logging.getLogger(__name__)


class EvalError(Exception):
    """Raised when an expression cannot produce a displayable result"""


class MalformedExpression(EvalError):
    """The text is not a valid arithmetic expression"""


class NonFiniteResult(EvalError):
    """The expression evaluates to an infinite or undefined value"""


FUNCTIONS = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "log": math.log10,
    "ln": math.log,
    "sqrt": math.sqrt,
}

CONSTANTS = {
    "PI": math.pi,
    "E": math.e,
}

# Display glyphs and their arithmetic operators
GLYPHS = (
    ("×", "*"),
    ("÷", "/"),
)

_TOKEN_RE = re.compile(r"""
    \s*(?:
        (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
      | (?P<name>[A-Za-z]+)
      | (?P<op>[-+*/^%()])
    )
""", re.VERBOSE)


def tokenize(text):
    """Split expression text into (kind, value) tokens"""
    for glyph, symbol in GLYPHS:
        text = text.replace(glyph, symbol)
    text = text.strip()

    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise MalformedExpression(f"Unexpected character {text[pos]!r} at {pos}")
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


def to_canonical(value):
    """Round to the result precision and render the shortest plain text"""
    value = round(value, config.RESULT_PRECISION)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e-" in text:
        text = f"{value:.{config.RESULT_PRECISION}f}".rstrip("0").rstrip(".")
    return text


class _Parser:
    """Recursive-descent evaluator over a token list.

    Binding, loosest first: + -, * / %, ^ (right associative), unary sign.
    """

    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0

    def peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return (None, None)

    def advance(self):
        token = self.peek()
        self.pos += 1
        return token

    def expect(self, value):
        kind, found = self.advance()
        if kind != "op" or found != value:
            raise MalformedExpression(f"Expected {value!r}, found {found!r}")

    def parse(self):
        value = self.expression()
        kind, found = self.peek()
        if kind is not None:
            raise MalformedExpression(f"Unexpected token {found!r}")
        return value

    def expression(self):
        value = self.term()
        while self.peek() in (("op", "+"), ("op", "-")):
            _, op = self.advance()
            right = self.term()
            value = value + right if op == "+" else value - right
        return value

    def term(self):
        value = self.power()
        while self.peek() in (("op", "*"), ("op", "/"), ("op", "%")):
            _, op = self.advance()
            right = self.power()
            if op == "*":
                value = value * right
            elif op == "/":
                value = value / right
            else:
                # remainder takes the sign of the dividend: -7 % 3 == -1
                value = math.fmod(value, right)
        return value

    def power(self):
        base = self.unary()
        if self.peek() == ("op", "^"):
            self.advance()
            return math.pow(base, self.power())
        return base

    def unary(self):
        if self.peek() == ("op", "-"):
            self.advance()
            return -self.unary()
        if self.peek() == ("op", "+"):
            self.advance()
            return self.unary()
        return self.primary()

    def primary(self):
        kind, value = self.advance()
        if kind == "number":
            return float(value)
        if kind == "name":
            if value in FUNCTIONS:
                self.expect("(")
                argument = self.expression()
                self.expect(")")
                return FUNCTIONS[value](argument)
            if value in CONSTANTS:
                return CONSTANTS[value]
            raise MalformedExpression(f"Unknown name {value!r}")
        if (kind, value) == ("op", "("):
            inner = self.expression()
            self.expect(")")
            return inner
        if kind is None:
            raise MalformedExpression("Unexpected end of expression")
        raise MalformedExpression(f"Unexpected token {value!r}")


def evaluate(text):
    """Evaluate calculator expression text and return the canonical result.

    Raises MalformedExpression for text outside the grammar and
    NonFiniteResult when the value is infinite or undefined.
    """
    tokens = tokenize(text)
    if not tokens:
        raise MalformedExpression("Empty expression")

    try:
        value = _Parser(tokens).parse()
    except ZeroDivisionError:
        raise NonFiniteResult("Division by zero")
    except (ValueError, OverflowError) as e:
        # math domain errors (sqrt(-1), log(0)) and float overflow
        raise NonFiniteResult(str(e))
    except RecursionError:
        raise MalformedExpression("Expression nested too deeply")

    if not math.isfinite(value):
        raise NonFiniteResult(f"Result is not finite: {value}")

    result = to_canonical(value)
    logger.debug("Evaluated %r -> %s", text, result)
    return result


class ExpressionEvaluator:
    """Evaluator object handed to the engine; wraps the module functions"""

    def evaluate(self, text):
        return evaluate(text)
