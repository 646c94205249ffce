# arith/nodes.py
import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Type, TypeVar

from .errors import VariantError

LETTERS = frozenset(string.ascii_letters)
BINARY_OPERATORS = frozenset("+-*/%^")
UNARY_OPERATORS = frozenset("!")


class Form(Enum):
    NATURAL = "natural"
    PREFIX = "prefix"
    POSTFIX = "postfix"


class Node: ...

@dataclass(frozen=True)
class Literal(Node):
    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError(f"Literal must be non-negative, got {self.value}")

@dataclass(frozen=True)
class Variable(Node):
    name: str

    def __post_init__(self):
        if self.name not in LETTERS:
            raise ValueError(f"Variable name must be a single letter, got {self.name!r}")

@dataclass(frozen=True)
class Parenthesis(Node):
    expression: Node

@dataclass(frozen=True)
class Unary(Node):
    op: str
    operand: Node

    def __post_init__(self):
        if self.op not in UNARY_OPERATORS:
            raise ValueError(f"Unknown unary op {self.op!r}")

@dataclass(frozen=True)
class Binary(Node):
    left: Node
    op: str
    right: Node

    def __post_init__(self):
        if self.op not in BINARY_OPERATORS:
            raise ValueError(f"Unknown binary op {self.op!r}")


N = TypeVar("N", bound=Node)


def expect(node: Node, cls: Type[N]) -> N:
    """Return `node` typed as `cls`, or fail if it is another variant."""
    if not isinstance(node, cls):
        raise VariantError(f"Expected {cls.__name__}, got {type(node).__name__}")
    return node


def children(node: Node) -> Tuple[Node, ...]:
    if isinstance(node, Parenthesis):
        return (node.expression,)
    if isinstance(node, Unary):
        return (node.operand,)
    if isinstance(node, Binary):
        return (node.left, node.right)
    return ()


def iter_nodes(tree: Optional[Node]) -> Iterator[Node]:
    # pre-order; iterative so deep trees do not hit the recursion limit
    stack = [tree] if tree is not None else []
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(children(node)))


def iter_postorder(tree: Optional[Node]) -> Iterator[Node]:
    """Yield every node after its children, left subtree first."""
    stack = [(tree, False)] if tree is not None else []
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
        else:
            stack.append((node, True))
            stack.extend((c, False) for c in reversed(children(node)))


def size(tree: Optional[Node]) -> int:
    return sum(1 for _ in iter_nodes(tree))


def release(tree: Optional[Node]) -> int:
    """Give up a tree and report how many nodes went with it.

    Nodes are reclaimed once the caller drops its last reference; this only
    walks the tree so callers replacing a tree can account for it.
    """
    return size(tree)
