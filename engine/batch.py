import pandas as pd
from typing import Union
from arith.eval import Context, evaluate
from arith.nodes import Form, LETTERS, Node
from arith.parser import parse_expression

def binding_columns(frame: pd.DataFrame) -> list:
    return [c for c in frame.columns if isinstance(c, str) and c in LETTERS]

def evaluate_table(expr: Union[Node, str], frame: pd.DataFrame, form: Form = Form.NATURAL) -> pd.Series:
    """
    Evaluate one expression for every row of `frame`.
    Single-letter columns are the variable bindings; one Context per row.
    """
    tree = parse_expression(expr, form) if isinstance(expr, str) else expr
    names = binding_columns(frame)
    results = []
    for _, row in frame[names].iterrows():
        ctx = Context({n: int(row[n]) for n in names})
        results.append(evaluate(tree, ctx))
    return pd.Series(results, index=frame.index, dtype=object)
