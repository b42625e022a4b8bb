import logging
import math
import operator
import re
from decimal import Decimal
from typing import List, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

# Parenthesised groups deeper than this are rejected instead of recursing further.
MAX_NESTING = 64


class EvalError(Exception):
    pass


class ParseError(EvalError):
    """The expression is not well formed."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position


class MathError(EvalError):
    """The expression parsed but its value cannot be computed (e.g. x/0)."""


# -------------------------
# Tokens and expression nodes
# -------------------------
class Token(NamedTuple):
    kind: str   # "number", "op", "(", ")", "end"
    text: str
    pos: int


class Number(NamedTuple):
    value: float


class Negate(NamedTuple):
    operand: "Node"


class BinOp(NamedTuple):
    op: str
    left: "Node"
    right: "Node"


Node = Union[Number, Negate, BinOp]


_TOKEN_RE = re.compile(
    r"""
    (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
    | (?P<op>[-+*/])
    | (?P<paren>[()])
    | (?P<space>\s+)
    """,
    re.VERBOSE,
)


def tokenize(expression: str) -> List[Token]:
    """Split an expression into tokens, ending with an "end" token."""
    tokens = []
    pos = 0
    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise ParseError(f"Unexpected character {expression[pos]!r}", pos)
        kind = match.lastgroup
        text = match.group()
        if kind == "number":
            # "1.5.2" or "3e5e" would otherwise split into two adjacent numbers
            if match.end() < len(expression) and expression[match.end()] in ".eE":
                raise ParseError(f"Malformed number {expression[pos:match.end() + 1]!r}", pos)
            tokens.append(Token("number", text, pos))
        elif kind == "op":
            tokens.append(Token("op", text, pos))
        elif kind == "paren":
            tokens.append(Token(text, text, pos))
        pos = match.end()
    tokens.append(Token("end", "", len(expression)))
    return tokens


class Parser:
    """
    Recursive-descent parser for the four-function grammar:

        expression := term (('+' | '-') term)*
        term       := unary (('*' | '/') unary)*
        unary      := '-' primary | primary
        primary    := NUMBER | '(' expression ')'

    Only one unary minus may precede a primary, so "2*-3" and "2--3" parse
    while "--3" and "+3" do not.
    """

    def __init__(self, tokens: List[Token], max_nesting: int = MAX_NESTING):
        self.tokens = tokens
        self.max_nesting = max_nesting
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ParseError("Empty expression")
        node = self._expression()
        if self.current.kind != "end":
            raise ParseError(f"Unexpected {self.current.text!r}", self.current.pos)
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self.current.kind == "op" and self.current.text in "+-":
            op = self._advance().text
            node = BinOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self.current.kind == "op" and self.current.text in "*/":
            op = self._advance().text
            node = BinOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        if self.current.kind == "op" and self.current.text == "-":
            self._advance()
            return Negate(self._primary())
        return self._primary()

    def _primary(self) -> Node:
        token = self.current
        if token.kind == "number":
            self._advance()
            return Number(float(token.text))
        if token.kind == "(":
            if self.depth >= self.max_nesting:
                raise ParseError("Parentheses nested too deeply", token.pos)
            self._advance()
            self.depth += 1
            node = self._expression()
            self.depth -= 1
            if self.current.kind != ")":
                raise ParseError("Expected ')'", self.current.pos)
            self._advance()
            return node
        if token.kind == "end":
            raise ParseError("Unexpected end of expression", token.pos)
        raise ParseError(f"Unexpected {token.text!r}", token.pos)


class ArithmeticEvaluator:
    """Computes the value of a parsed expression tree."""

    ops = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": operator.truediv,
    }

    def visit(self, node: Node) -> float:
        method = "visit_" + node.__class__.__name__
        visitor = getattr(self, method, self.generic_visit)
        return visitor(node)

    def visit_Number(self, node: Number) -> float:
        if not math.isfinite(node.value):
            raise MathError("Number out of range")
        return node.value

    def visit_Negate(self, node: Negate) -> float:
        return -self.visit(node.operand)

    def visit_BinOp(self, node: BinOp) -> float:
        left = self.visit(node.left)
        right = self.visit(node.right)
        try:
            result = self.ops[node.op](left, right)
        except ZeroDivisionError:
            raise MathError("Division by zero")
        if not math.isfinite(result):
            raise MathError("Result out of range")
        return result

    def generic_visit(self, node):
        raise EvalError(f"Unsupported expression: {node.__class__.__name__}")


def format_number(value: float) -> str:
    """
    Render a float with its shortest round-tripping digits.

    Fixed notation is used while the decimal exponent lies in [-6, 21),
    scientific notation ("1.5e+21", "1e-7") outside it. The output is itself
    a valid expression, so a result can be fed back into the calculator.
    """
    if not math.isfinite(value):
        raise MathError(f"Cannot display {value!r}")
    if value == 0:
        return "0"

    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    prefix = "-" if value < 0 else ""

    k = len(digits)
    n = k + exponent  # position of the decimal point relative to the digits
    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{prefix}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


class Evaluation(NamedTuple):
    """Outcome of evaluating an expression: either text/value or an error."""

    text: Optional[str] = None
    value: Optional[float] = None
    error: Optional[EvalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CalculatorEngine:
    def __init__(self, max_nesting: int = MAX_NESTING):
        self.max_nesting = max_nesting

    def _parse(self, expression: str) -> Node:
        if not isinstance(expression, str):
            raise ParseError("Expression must be a string")
        return Parser(tokenize(expression), self.max_nesting).parse()

    def calculate(self, expression: str) -> float:
        """
        Calculate an expression string and return its numeric value.
        Raises ParseError for malformed input and MathError for x/0 or overflow.
        """
        node = self._parse(expression)
        return ArithmeticEvaluator().visit(node)

    def evaluate(self, expression: str) -> Evaluation:
        """Evaluate an expression, reporting failures in the result instead of raising."""
        try:
            value = self.calculate(expression)
            text = format_number(value)
        except EvalError as e:
            logger.debug("Rejected expression %r: %s", expression, e)
            return Evaluation(error=e)
        logger.debug("Evaluated %r -> %s", expression, text)
        return Evaluation(text=text, value=value)


_default_engine = CalculatorEngine()


def evaluate(expression: str) -> Evaluation:
    return _default_engine.evaluate(expression)


def calculate(expression: str) -> float:
    return _default_engine.calculate(expression)
