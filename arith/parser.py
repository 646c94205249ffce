
import logging
import re
from typing import Optional, Tuple, Union

from .errors import ParseError
from .nodes import (
    BINARY_OPERATORS, LETTERS, UNARY_OPERATORS,
    Binary, Form, Literal, Node, Parenthesis, Unary, Variable,
)

logger = logging.getLogger(__name__)

NUMBER = re.compile(r"[0-9]+")

PRECEDENCE = {
    '^': 3,
    '*': 2, '/': 2, '%': 2,
    '+': 1, '-': 1,
}
RIGHT_ASSOCIATIVE = frozenset("^")

Parsed = Tuple[Node, int]


def precedence(op: str) -> int:
    return PRECEDENCE.get(op, -1)


def _continues_right(prev_op: str, op: str) -> bool:
    return op == prev_op and op in RIGHT_ASSOCIATIVE


def _peek(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else ""


def _expect(text: str, pos: int, ch: str) -> int:
    found = _peek(text, pos)
    if found != ch:
        raise ParseError(f"expected {ch!r}, found {found or 'end of input'!r}", pos)
    return pos + 1


def parse_primary(text: str, pos: int, form: Form) -> Parsed:
    """primary := NUMBER | LETTER | '(' expression ')'

    The parenthesized expression is parsed in `form`.
    """
    ch = _peek(text, pos)
    if not ch:
        raise ParseError("unexpected end of input", pos)
    if ch in LETTERS:
        return Variable(ch), pos + 1
    m = NUMBER.match(text, pos)
    if m:
        try:
            value = int(m.group())
        except ValueError:
            # beyond the interpreter's int-from-str digit limit
            raise ParseError("number has too many digits", pos) from None
        return Literal(value), m.end()
    if ch == '(':
        inner, pos = parse_form(text, pos + 1, form)
        pos = _expect(text, pos, ')')
        return Parenthesis(inner), pos
    raise ParseError(f"unexpected character {ch!r}", pos)


def parse_postfix_expression(text: str, pos: int) -> Parsed:
    """postfix := primary '!'?  (natural form only)"""
    node, pos = parse_primary(text, pos, Form.NATURAL)
    ch = _peek(text, pos)
    if ch in UNARY_OPERATORS:
        return Unary(ch, node), pos + 1
    return node, pos


def parse_binary_rhs(text: str, pos: int, lhs: Node, prev_op: str) -> Parsed:
    """Fold `(op postfix)*` onto `lhs` while operators bind tighter than `prev_op`."""
    while True:
        op = _peek(text, pos)
        if op not in BINARY_OPERATORS or (
            precedence(op) <= precedence(prev_op) and not _continues_right(prev_op, op)
        ):
            return lhs, pos

        rhs, pos = parse_postfix_expression(text, pos + 1)

        # a tighter operator after rhs claims rhs as its own left operand
        next_op = _peek(text, pos)
        if precedence(op) < precedence(next_op) or _continues_right(op, next_op):
            rhs, pos = parse_binary_rhs(text, pos, rhs, op)

        lhs = Binary(lhs, op, rhs)


def parse_natural_form(text: str, pos: int) -> Parsed:
    lhs, pos = parse_postfix_expression(text, pos)
    return parse_binary_rhs(text, pos, lhs, "")


def parse_prefix_form(text: str, pos: int) -> Parsed:
    """expr := primary | '!' '(' expr ')' | op '(' expr ',' expr ')'"""
    ch = _peek(text, pos)
    if ch in UNARY_OPERATORS:
        pos = _expect(text, pos + 1, '(')
        operand, pos = parse_prefix_form(text, pos)
        pos = _expect(text, pos, ')')
        return Unary(ch, operand), pos
    if ch in BINARY_OPERATORS:
        pos = _expect(text, pos + 1, '(')
        left, pos = parse_prefix_form(text, pos)
        pos = _expect(text, pos, ',')
        right, pos = parse_prefix_form(text, pos)
        pos = _expect(text, pos, ')')
        return Binary(left, ch, right), pos
    return parse_primary(text, pos, Form.PREFIX)


def parse_postfix_form(text: str, pos: int) -> Parsed:
    """expr := primary | '(' expr ')' '!' | '(' expr ',' expr ')' op

    A bare '(' expr ')' is kept as a Parenthesis when followed by the end
    of input, ')' or ','.
    """
    if _peek(text, pos) != '(':
        return parse_primary(text, pos, Form.POSTFIX)

    first, pos = parse_postfix_form(text, pos + 1)
    sep = _peek(text, pos)

    if sep == ')':
        pos += 1
        ch = _peek(text, pos)
        if ch in UNARY_OPERATORS:
            return Unary(ch, first), pos + 1
        if ch in ("", ")", ","):
            return Parenthesis(first), pos
        raise ParseError(f"unexpected {ch!r} after ')'", pos)

    if sep == ',':
        second, pos = parse_postfix_form(text, pos + 1)
        pos = _expect(text, pos, ')')
        op = _peek(text, pos)
        if op not in BINARY_OPERATORS:
            raise ParseError(f"expected binary operator, found {op or 'end of input'!r}", pos)
        return Binary(first, op, second), pos + 1

    raise ParseError(f"expected ')' or ',', found {sep or 'end of input'!r}", pos)


_FORMS = {
    Form.NATURAL: parse_natural_form,
    Form.PREFIX: parse_prefix_form,
    Form.POSTFIX: parse_postfix_form,
}


def parse_form(text: str, pos: int, form: Form) -> Parsed:
    return _FORMS[form](text, pos)


def parse_expression(text: str, form: Union[Form, str] = Form.NATURAL) -> Node:
    """Parse the whole of `text` in `form`; raises ParseError on any failure."""
    form = Form(form)
    try:
        tree, pos = parse_form(text, 0, form)
    except RecursionError:
        raise ParseError("expression nested too deeply", 0) from None
    if pos != len(text):
        raise ParseError(f"unexpected trailing input {text[pos:]!r}", pos)
    return tree


def try_parse(text: str, form: Union[Form, str] = Form.NATURAL) -> Optional[Node]:
    try:
        return parse_expression(text, form)
    except ParseError as e:
        logger.debug("rejected %s expression %r: %s", Form(form).value, text, str(e))
        return None
