"""Line-oriented command layer.

Each line is a command word followed by space-separated arguments::

    parse 2+3*a
    save_pst
    evaluate a=4

and produces at most one output line: ``success``, ``incorrect``,
``not_loaded``, a rendered expression, an integer, or ``error: <message>``.
"""
import logging
import re
from typing import Iterable, Iterator, Optional

from .errors import EvaluationError
from .eval import Context, evaluate
from .nodes import Form, Node, release
from .parser import try_parse
from .printer import print_expression

logger = logging.getLogger(__name__)

SUCCESS = "success"
INCORRECT = "incorrect"
NOT_LOADED = "not_loaded"

LOADERS = {
    "parse": Form.NATURAL,
    "load_prf": Form.PREFIX,
    "load_pst": Form.POSTFIX,
}
SAVERS = {
    "save_prf": Form.PREFIX,
    "save_pst": Form.POSTFIX,
}

_BINDING_SEPARATORS = re.compile(r"[ ,]+")


class Session:
    """Holds the currently loaded tree between commands."""

    def __init__(self):
        self.tree: Optional[Node] = None

    def load(self, text: Optional[str], form: Form) -> bool:
        if self.tree is not None:
            logger.debug("releasing %d nodes", release(self.tree))
        self.tree = try_parse(text, form) if text else None
        return self.tree is not None

    def process_line(self, line: str) -> Optional[str]:
        line = line.rstrip("\r\n")
        command, _, args = line.strip(" ").partition(" ")
        if not command:
            return None
        args = args.strip(" ")

        if command in LOADERS:
            if " " in args:
                logger.debug("%s: extra arguments in %r", command, args)
                self.load(None, LOADERS[command])
                return INCORRECT
            return SUCCESS if self.load(args, LOADERS[command]) else INCORRECT

        if command in SAVERS:
            if self.tree is None:
                return NOT_LOADED
            return print_expression(self.tree, SAVERS[command])

        if command == "evaluate":
            if self.tree is None:
                return NOT_LOADED
            tokens = [t for t in _BINDING_SEPARATORS.split(args) if t]
            try:
                ctx = Context.from_tokens(tokens)
            except ValueError as e:
                logger.debug("evaluate: %s", e)
                return INCORRECT
            try:
                return str(evaluate(self.tree, ctx))
            except EvaluationError as e:
                return f"error: {e}"

        logger.debug("unknown command %r", command)
        return INCORRECT

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            out = self.process_line(line)
            if out is not None:
                yield out
