import math
import numpy as np
import pandas as pd
from typing import Union
from arith.errors import DivisionByZeroError, NegativeFactorialError, UnknownVariableError
from arith.nodes import Binary, Form, Literal, Node, Parenthesis, Unary, Variable, iter_postorder
from arith.parser import parse_expression

# largest factorial that fits in int64
_FACTORIALS = np.array([math.factorial(i) for i in range(21)], dtype=np.int64)

def _div(a, b):
    if (b == 0).any():
        raise DivisionByZeroError("Division by zero in column expression")
    q = np.abs(a) // np.abs(b)
    return np.where((a < 0) == (b < 0), q, -q)

def _mod(a, b):
    return a - b * _div(a, b)

def _pow(base, exp):
    neg = exp < 0
    if (neg & (base == 0)).any():
        raise DivisionByZeroError("Zero raised to negative power in column expression")
    e = np.where(neg, 0, exp)
    b = base.copy()
    result = np.ones_like(base)
    while (e > 0).any():
        odd = (e & 1).astype(bool)
        result = np.where(odd, result * b, result)
        b = b * b
        e = e >> 1
    truncated = np.where(base == 1, 1, np.where(base == -1, np.where(exp % 2 == 0, 1, -1), 0))
    return np.where(neg, truncated, result)

def _factorial(x):
    if (x < 0).any():
        raise NegativeFactorialError(int(x[x < 0][0]))
    if (x >= len(_FACTORIALS)).any():
        raise OverflowError("Factorial argument too large for int64 evaluation")
    return _FACTORIALS[x]

_BIN = {
    '+': lambda a,b: a + b,
    '-': lambda a,b: a - b,
    '*': lambda a,b: a * b,
    '/': _div,
    '%': _mod,
    '^': _pow,
}

def evaluate_table_vectorized(expr: Union[Node, str], frame: pd.DataFrame, form: Form = Form.NATURAL) -> pd.Series:
    """
    Column-at-a-time counterpart of engine.batch.evaluate_table.
    Arithmetic is int64: results agree with the row loop as long as every
    intermediate value fits in 64 bits.
    """
    tree = parse_expression(expr, form) if isinstance(expr, str) else expr
    n = len(frame)

    cols = []
    for node in iter_postorder(tree):
        if isinstance(node, Literal):
            cols.append(np.full(n, node.value, dtype=np.int64))
        elif isinstance(node, Variable):
            if node.name not in frame.columns:
                raise UnknownVariableError(node.name)
            cols.append(frame[node.name].to_numpy(dtype=np.int64))
        elif isinstance(node, Parenthesis):
            pass
        elif isinstance(node, Unary):
            if node.op != '!':
                raise ValueError(f"Unsupported unary {node.op}")
            cols.append(_factorial(cols.pop()))
        elif isinstance(node, Binary):
            if node.op not in _BIN:
                raise ValueError(f"Unsupported op {node.op}")
            b = cols.pop(); a = cols.pop()
            cols.append(_BIN[node.op](a, b))
        else:
            raise TypeError(f"Unknown node {type(node)}")

    return pd.Series(cols.pop(), index=frame.index, dtype=np.int64)
