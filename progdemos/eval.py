"""Arithmetic expressions: parsing, static checking, evaluation and formatting."""

from __future__ import annotations

import math
import string
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, MutableSet
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, auto

Env = Mapping[str, float]

_PARAM_COUNTS = {"pow": 2, "sin": 1, "sqrt": 1}


class ExprError(Exception):
    """Raised for malformed or ill-typed expressions."""


class Expr(ABC):
    """An arithmetic expression."""

    @abstractmethod
    def eval(self, env: Env | None = None) -> float:
        """Return the value of this expression in the environment ``env``."""

    @abstractmethod
    def check(self, vars: MutableSet[str]) -> None:
        """Raise ExprError if the expression is malformed; add its variables to ``vars``."""

    def __str__(self) -> str:
        return format_expr(self)


@dataclass(frozen=True)
class Var(Expr):
    """A variable reference, e.g. ``x``."""

    name: str

    def eval(self, env: Env | None = None) -> float:
        if env is None:
            return 0.0
        return float(env.get(self.name, 0.0))

    def check(self, vars: MutableSet[str]) -> None:
        vars.add(self.name)


@dataclass(frozen=True)
class Literal(Expr):
    """A numeric constant, e.g. ``3.141``."""

    value: float

    def eval(self, env: Env | None = None) -> float:
        return float(self.value)

    def check(self, vars: MutableSet[str]) -> None:
        return None


@dataclass(frozen=True)
class Unary(Expr):
    """A unary operator expression, e.g. ``-x``."""

    op: str
    x: Expr

    def eval(self, env: Env | None = None) -> float:
        if self.op == "+":
            return +self.x.eval(env)
        if self.op == "-":
            return -self.x.eval(env)
        raise ExprError(f"unsupported unary operator: {_quote_rune(self.op)}")

    def check(self, vars: MutableSet[str]) -> None:
        if self.op not in ("+", "-"):
            raise ExprError(f"unexpected unary op {_quote_rune(self.op)}")
        self.x.check(vars)


@dataclass(frozen=True)
class Binary(Expr):
    """A binary operator expression, e.g. ``x + y``."""

    op: str
    x: Expr
    y: Expr

    def eval(self, env: Env | None = None) -> float:
        if self.op == "+":
            return self.x.eval(env) + self.y.eval(env)
        if self.op == "-":
            return self.x.eval(env) - self.y.eval(env)
        if self.op == "*":
            return self.x.eval(env) * self.y.eval(env)
        if self.op == "/":
            return _divide(self.x.eval(env), self.y.eval(env))
        raise ExprError(f"unsupported binary operator: {_quote_rune(self.op)}")

    def check(self, vars: MutableSet[str]) -> None:
        if self.op not in ("+", "-", "*", "/"):
            raise ExprError(f"unexpected binary op {_quote_rune(self.op)}")
        self.x.check(vars)
        self.y.check(vars)


@dataclass(frozen=True)
class Call(Expr):
    """A function call expression, e.g. ``sin(x)``."""

    fn: str
    args: tuple[Expr, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def eval(self, env: Env | None = None) -> float:
        if self.fn == "pow":
            return _pow(self.args[0].eval(env), self.args[1].eval(env))
        if self.fn == "sin":
            return _sin(self.args[0].eval(env))
        if self.fn == "sqrt":
            return _sqrt(self.args[0].eval(env))
        raise ExprError(f"unsupported function call: {self.fn}")

    def check(self, vars: MutableSet[str]) -> None:
        arity = _PARAM_COUNTS.get(self.fn)
        if arity is None:
            raise ExprError(f'unknown function "{self.fn}"')
        if len(self.args) != arity:
            raise ExprError(
                f"call to {self.fn} has {len(self.args)} args, want {arity}"
            )
        for arg in self.args:
            arg.check(vars)


# ---- IEEE-style arithmetic helpers ----


def _divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y.is_integer() and y % 2 == 1


def _pow(x: float, y: float) -> float:
    if x == 0 and y < 0:
        if math.copysign(1.0, x) < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        return math.nan


def _sin(x: float) -> float:
    if math.isinf(x):
        return math.nan
    return math.sin(x)


def _sqrt(x: float) -> float:
    if x < 0:
        return math.nan
    return math.sqrt(x)


# ---- quoting ----

_RUNE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    "'": "\\'",
}


def _quote_rune(c: str) -> str:
    if c in _RUNE_ESCAPES:
        body = _RUNE_ESCAPES[c]
    elif c.isprintable():
        body = c
    else:
        code = ord(c)
        if code < 0x80:
            body = f"\\x{code:02x}"
        elif code < 0x10000:
            body = f"\\u{code:04x}"
        else:
            body = f"\\U{code:08x}"
    return f"'{body}'"


# ---- lexer ----


class _Kind(Enum):
    EOF = auto()
    IDENT = auto()
    INT = auto()
    FLOAT = auto()
    CHAR = auto()


@dataclass(frozen=True)
class _Token:
    kind: _Kind
    text: str


_WHITESPACE = " \t\n\r"


def _is_ident_start(c: str) -> bool:
    return c == "_" or c.isalpha()


def _is_ident_part(c: str) -> bool:
    return c == "_" or c.isalpha() or c.isdigit()


def _skip_digits(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in string.digits:
        pos += 1
    return pos


def _tokenize(text: str) -> Iterator[_Token]:
    pos, end = 0, len(text)
    while True:
        while pos < end and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= end:
            yield _Token(_Kind.EOF, "")
            return
        c = text[pos]
        if _is_ident_start(c):
            stop = pos + 1
            while stop < end and _is_ident_part(text[stop]):
                stop += 1
            yield _Token(_Kind.IDENT, text[pos:stop])
            pos = stop
        elif c in string.digits or (
            c == "." and pos + 1 < end and text[pos + 1] in string.digits
        ):
            kind = _Kind.INT
            stop = _skip_digits(text, pos)
            if stop < end and text[stop] == ".":
                kind = _Kind.FLOAT
                stop = _skip_digits(text, stop + 1)
            if stop < end and text[stop] in "eE":
                kind = _Kind.FLOAT
                stop += 1
                if stop < end and text[stop] in "+-":
                    stop += 1
                stop = _skip_digits(text, stop)
            yield _Token(kind, text[pos:stop])
            pos = stop
        else:
            yield _Token(_Kind.CHAR, c)
            pos += 1


class _Lexer:
    def __init__(self, text: str) -> None:
        self._tokens = _tokenize(text)
        self.token = next(self._tokens)

    def next(self) -> None:
        if self.token.kind is not _Kind.EOF:
            self.token = next(self._tokens)

    def is_char(self, c: str) -> bool:
        return self.token.kind is _Kind.CHAR and self.token.text == c

    def describe(self) -> str:
        kind = self.token.kind
        if kind is _Kind.EOF:
            return "end of file"
        if kind is _Kind.IDENT:
            return f"identifier {self.token.text}"
        if kind in (_Kind.INT, _Kind.FLOAT):
            return f"number {self.token.text}"
        return _quote_rune(self.token.text)

    def precedence(self) -> int:
        if self.token.kind is not _Kind.CHAR:
            return 0
        if self.token.text in "*/":
            return 2
        if self.token.text in "+-":
            return 1
        return 0


# ---- parser ----


def parse(text: str) -> Expr:
    """Parse ``text`` as an arithmetic expression.

    Raises ExprError on a syntax error.
    """
    lex = _Lexer(text)
    expr = _parse_expr(lex)
    if lex.token.kind is not _Kind.EOF:
        raise ExprError(f"unexpected {lex.describe()}")
    return expr


def _parse_expr(lex: _Lexer) -> Expr:
    return _parse_binary(lex, 1)


def _parse_binary(lex: _Lexer, min_prec: int) -> Expr:
    lhs = _parse_unary(lex)
    prec = lex.precedence()
    while prec >= min_prec:
        while lex.precedence() == prec:
            op = lex.token.text
            lex.next()
            rhs = _parse_binary(lex, prec + 1)
            lhs = Binary(op, lhs, rhs)
        prec -= 1
    return lhs


def _parse_unary(lex: _Lexer) -> Expr:
    if lex.is_char("+") or lex.is_char("-"):
        op = lex.token.text
        lex.next()
        return Unary(op, _parse_unary(lex))
    return _parse_primary(lex)


def _expect_close(lex: _Lexer) -> None:
    if not lex.is_char(")"):
        raise ExprError(f"got {lex.describe()}, want ')'")
    lex.next()


def _parse_primary(lex: _Lexer) -> Expr:
    token = lex.token
    if token.kind is _Kind.IDENT:
        lex.next()
        if not lex.is_char("("):
            return Var(token.text)
        lex.next()
        args: list[Expr] = []
        if not lex.is_char(")"):
            while True:
                args.append(_parse_expr(lex))
                if not lex.is_char(","):
                    break
                lex.next()
        _expect_close(lex)
        return Call(token.text, tuple(args))

    if token.kind in (_Kind.INT, _Kind.FLOAT):
        try:
            value = float(token.text)
        except ValueError:
            raise ExprError(f'invalid number "{token.text}"') from None
        lex.next()
        return Literal(value)

    if lex.is_char("("):
        lex.next()
        expr = _parse_expr(lex)
        _expect_close(lex)
        return expr

    raise ExprError(f"unexpected {lex.describe()}")


# ---- printing ----


def _format_float(value: float) -> str:
    """Format a float in the shortest %g style, exponent from 1e+06 upward."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    ndigits = len(digits)
    point = ndigits + exponent
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if ndigits > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= ndigits:
        return sign + digits + "0" * (point - ndigits)
    return f"{sign}{digits[:point]}.{digits[point:]}"


def format_expr(expr: Expr) -> str:
    """Format an expression as a fully parenthesised string."""
    match expr:
        case Literal(value):
            return _format_float(value)
        case Var(name):
            return name
        case Unary(op, x):
            return f"({op}{format_expr(x)})"
        case Binary(op, x, y):
            return f"({format_expr(x)} {op} {format_expr(y)})"
        case Call(fn, args):
            return f"{fn}({', '.join(format_expr(arg) for arg in args)})"
    raise TypeError(f"unknown Expr: {type(expr).__name__}")