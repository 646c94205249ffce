
import math
import re
from typing import Iterable, Mapping, Optional, Union

from .errors import (
    DivisionByZeroError, NegativeFactorialError, ResultTooLargeError, UnknownVariableError,
)
from .nodes import LETTERS, Binary, Literal, Node, Parenthesis, Unary, Variable, iter_postorder

BINDING = re.compile(r"([A-Za-z])=([+-]?[0-9]+)")

# larger results are refused; 8192 bits also stays under the int-to-str digit limit
MAX_RESULT_BITS = 1 << 13


def _div(a: int, b: int) -> int:
    # C semantics: quotient truncated toward zero
    if b == 0:
        raise DivisionByZeroError(f"Division by zero in {a} / {b}")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _mod(a: int, b: int) -> int:
    # sign follows the dividend, matching _div
    if b == 0:
        raise DivisionByZeroError(f"Division by zero in {a} % {b}")
    return a - b * _div(a, b)


def _pow(base: int, exp: int) -> int:
    if exp < 0:
        # truncation of base ** exp toward zero
        if base == 0:
            raise DivisionByZeroError(f"Zero raised to negative power {exp}")
        if base == 1:
            return 1
        if base == -1:
            return 1 if exp % 2 == 0 else -1
        return 0
    if (abs(base).bit_length() - 1) * exp > MAX_RESULT_BITS:
        raise ResultTooLargeError("^", MAX_RESULT_BITS)
    result = 1
    while exp:
        if exp & 1:
            result *= base
        base *= base
        exp >>= 1
    return result


def factorial(x: int) -> int:
    if x < 0:
        raise NegativeFactorialError(x)
    # x! > 2^x for x >= 4; otherwise estimate log2(x!) via lgamma
    if x > MAX_RESULT_BITS or (x > 1 and math.lgamma(x + 1) / math.log(2) > MAX_RESULT_BITS):
        raise ResultTooLargeError("!", MAX_RESULT_BITS)
    return math.factorial(x)


OPS = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _div,
    '%': _mod,
    '^': _pow,
}

UNARY_OPS = {
    '!': factorial,
}


class Context:
    """Variable bindings for one evaluation."""

    def __init__(self, variables: Optional[Mapping[str, int]] = None):
        self.variables = dict(variables or {})
        for name, value in self.variables.items():
            if name not in LETTERS:
                raise ValueError(f"Variable name must be a single letter, got {name!r}")
            if not isinstance(value, int):
                raise ValueError(f"Value of '{name}' must be an integer, got {value!r}")

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "Context":
        """Build a context from `name=value` tokens such as ``["a=2", "b=-3"]``."""
        variables = {}
        for tok in tokens:
            m = BINDING.fullmatch(tok)
            if not m:
                raise ValueError(f"Malformed binding {tok!r}")
            name, value = m.group(1), int(m.group(2))
            if name in variables:
                raise ValueError(f"Variable '{name}' bound twice")
            variables[name] = value
        return cls(variables)

    def lookup(self, name: str) -> int:
        if name not in self.variables:
            raise UnknownVariableError(name)
        return self.variables[name]

    def __repr__(self):
        return f"Context({self.variables!r})"


def evaluate(node: Node, ctx: Union[Context, Mapping[str, int], None] = None) -> int:
    if not isinstance(ctx, Context):
        ctx = Context(ctx)
    return _eval(node, ctx)


def _eval(tree: Node, ctx: Context) -> int:
    # children are evaluated before their parent, so operands sit on top of the stack
    values = []
    for node in iter_postorder(tree):
        if isinstance(node, Literal):
            values.append(node.value)
        elif isinstance(node, Variable):
            values.append(ctx.lookup(node.name))
        elif isinstance(node, Parenthesis):
            pass
        elif isinstance(node, Unary):
            values.append(UNARY_OPS[node.op](values.pop()))
        elif isinstance(node, Binary):
            b = values.pop()
            a = values.pop()
            value = OPS[node.op](a, b)
            if value.bit_length() > MAX_RESULT_BITS:
                raise ResultTooLargeError(node.op, MAX_RESULT_BITS)
            values.append(value)
        else:
            raise TypeError(f"Unknown node {type(node)}")
    return values.pop()
