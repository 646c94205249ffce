# arith/ast_utils.py
from typing import Any, Dict
from .nodes import Literal, Variable, Parenthesis, Unary, Binary, iter_postorder

def ast_to_dict(node) -> Dict[str, Any]:
    done = []
    for n in iter_postorder(node):
        if isinstance(n, Literal):
            done.append({"type": "Literal", "value": n.value})
        elif isinstance(n, Variable):
            done.append({"type": "Variable", "name": n.name})
        elif isinstance(n, Parenthesis):
            done.append({"type": "Parenthesis", "expression": done.pop()})
        elif isinstance(n, Unary):
            done.append({"type": "Unary", "op": n.op, "operand": done.pop()})
        elif isinstance(n, Binary):
            right = done.pop()
            done.append({"type": "Binary", "op": n.op, "left": done.pop(), "right": right})
        else:
            done.append({"type": "Unknown", "repr": repr(n)})
    return done.pop() if done else {"type": "Unknown", "repr": repr(node)}

def ast_to_pretty(node, indent: str = "  ") -> str:
    lines = []
    stack = [(node, 0, None)]
    while stack:
        n, depth, label = stack.pop()
        pad = indent * depth
        pre = f"{label}: " if label else ""
        if isinstance(n, Literal):
            lines.append(f"{pad}{pre}Literal({n.value})")
        elif isinstance(n, Variable):
            lines.append(f"{pad}{pre}Variable({n.name})")
        elif isinstance(n, Parenthesis):
            lines.append(f"{pad}{pre}Parenthesis")
            stack.append((n.expression, depth+1, "expression"))
        elif isinstance(n, Unary):
            lines.append(f"{pad}{pre}Unary({n.op})")
            stack.append((n.operand, depth+1, "operand"))
        elif isinstance(n, Binary):
            lines.append(f"{pad}{pre}Binary({n.op})")
            stack.append((n.right, depth+1, "right"))
            stack.append((n.left, depth+1, "left"))
        else:
            lines.append(f"{pad}{pre}{type(n).__name__}")
    return "\n".join(lines)
