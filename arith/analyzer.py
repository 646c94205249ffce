from dataclasses import dataclass, field
from typing import Set
from .nodes import Binary, Node, Unary, Variable, children

@dataclass
class Analysis:
    variables: Set[str] = field(default_factory=set)
    operators: Set[str] = field(default_factory=set)
    depth: int = 0
    size: int = 0

def analyze(node: Node) -> Analysis:
    an = Analysis()
    stack = [(node, 1)] if node is not None else []
    while stack:
        n, depth = stack.pop()
        an.size += 1
        an.depth = max(an.depth, depth)
        if isinstance(n, Variable):
            an.variables.add(n.name)
        elif isinstance(n, (Unary, Binary)):
            an.operators.add(n.op)
        stack.extend((c, depth + 1) for c in children(n))
    return an
