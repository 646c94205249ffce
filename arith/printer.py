
from typing import List, Optional, Union

from .nodes import Binary, Form, Literal, Node, Parenthesis, Unary, Variable


def print_expression(tree: Optional[Node], form: Union[Form, str] = Form.PREFIX) -> str:
    """Render `tree` in prefix or postfix form. An empty tree renders as ''."""
    form = Form(form)
    if form is Form.NATURAL:
        raise ValueError("Natural form cannot be printed; use prefix or postfix")
    out: List[str] = []
    # pending output: text is emitted as is, nodes are expanded in place
    stack: list = [tree] if tree is not None else []
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        else:
            stack.extend(reversed(_pieces(item, form)))
    return "".join(out)


def _pieces(node: Node, form: Form) -> list:
    if isinstance(node, Literal):
        return [str(node.value)]
    if isinstance(node, Variable):
        return [node.name]
    if isinstance(node, Parenthesis):
        return ["(", node.expression, ")"]
    if isinstance(node, Unary):
        if form is Form.PREFIX:
            return [f"{node.op}(", node.operand, ")"]
        return ["(", node.operand, f"){node.op}"]
    if isinstance(node, Binary):
        if form is Form.PREFIX:
            return [f"{node.op}(", node.left, ",", node.right, ")"]
        return ["(", node.left, ",", node.right, f"){node.op}"]
    raise TypeError(f"Unknown node {type(node)}")
