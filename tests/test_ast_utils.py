from arith.analyzer import analyze
from arith.ast_utils import ast_to_dict, ast_to_pretty
from arith.parser import parse_expression

def test_dict_and_pretty():
    tree = parse_expression("(a+1)!")
    assert ast_to_dict(tree) == {
        "type": "Unary", "op": "!",
        "operand": {"type": "Parenthesis", "expression": {
            "type": "Binary", "op": "+",
            "left": {"type": "Variable", "name": "a"},
            "right": {"type": "Literal", "value": 1},
        }},
    }
    assert ast_to_pretty(tree).splitlines() == [
        "Unary(!)",
        "  operand: Parenthesis",
        "    expression: Binary(+)",
        "      left: Variable(a)",
        "      right: Literal(1)",
    ]

def test_analyze():
    meta = analyze(parse_expression("a^b*(c-a)!"))
    assert meta.variables == {"a", "b", "c"}
    assert meta.operators == {"^", "*", "-", "!"}
    assert meta.size == 9
    assert meta.depth == 5

def test_long_chain():
    tree = parse_expression("+".join(["1"] * 5000))
    meta = analyze(tree)
    assert (meta.size, meta.depth) == (9999, 5000)
    assert len(ast_to_pretty(tree).splitlines()) == 9999
    d = ast_to_dict(tree)
    for _ in range(4999):
        assert d["right"] == {"type": "Literal", "value": 1}
        d = d["left"]
    assert d == {"type": "Literal", "value": 1}
