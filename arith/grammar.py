"""Grammar-driven parser for natural form.

Builds the same trees as :func:`arith.parser.parse_expression` from an
LALR grammar, so the two can be checked against each other.
"""
from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError

from .errors import ParseError
from .nodes import Binary, Literal, Node, Parenthesis, Unary, Variable

GRAMMAR = r"""
?start: add_expr
?add_expr: mul_expr (ADD_OP mul_expr)*
?mul_expr: pow_expr (MUL_OP pow_expr)*
?pow_expr: postfix_expr (POW_OP pow_expr)?
?postfix_expr: atom
             | atom BANG      -> factorial
?atom: NUMBER                 -> number
     | LETTER                 -> variable
     | "(" add_expr ")"       -> paren
ADD_OP: "+" | "-"
MUL_OP: "*" | "/" | "%"
POW_OP: "^"
BANG: "!"
NUMBER: /[0-9]+/
LETTER: /[A-Za-z]/
"""

parser = Lark(GRAMMAR, start="start", parser="lalr")

@v_args(inline=True)
class ASTBuilder(Transformer):
    def number(self, tok): return Literal(int(tok))
    def variable(self, tok): return Variable(str(tok))
    def paren(self, inner): return Parenthesis(inner)
    def factorial(self, operand, bang): return Unary(str(bang), operand)

    def add_expr(self, a, *rest):
        n = a
        it = iter(rest)
        for op, b in zip(it, it):
            n = Binary(n, str(op), b)
        return n

    def mul_expr(self, a, *rest):
        n = a
        it = iter(rest)
        for op, b in zip(it, it):
            n = Binary(n, str(op), b)
        return n

    def pow_expr(self, a, op, b):
        # the grammar nests the right operand, giving right associativity
        return Binary(a, str(op), b)

def parse_reference(src: str) -> Node:
    try:
        return ASTBuilder().transform(parser.parse(src))
    except LarkError as e:
        raise ParseError(f"rejected by grammar ({type(e).__name__})", getattr(e, "pos_in_stream", None) or 0) from None
