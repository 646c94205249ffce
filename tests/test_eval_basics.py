
import math
import pytest
from arith.errors import (
    DivisionByZeroError, EvaluationError, NegativeFactorialError, ResultTooLargeError, UnknownVariableError,
)
from arith.eval import MAX_RESULT_BITS, Context, evaluate
from arith.nodes import Binary, Literal, Variable
from arith.parser import parse_expression

def ev(src, **bindings):
    return evaluate(parse_expression(src), Context(bindings))

@pytest.mark.parametrize("src,expected", [
    ("2+3*4", 14),
    ("(2+3)*4", 20),
    ("2^3^2", 512),
    ("2^3*2", 16),
    ("10-4-3", 3),
    ("100/10/5", 2),
    ("7/2", 3),
    ("7%2", 1),
    ("0!", 1),
    ("1!", 1),
    ("5!", 120),
    ("2*3!", 12),
    ("3!^2", 36),
    ("2^0", 1),
    ("0^0", 1),
    ("2^62", 4611686018427387904),
])
def test_arithmetic(src, expected):
    assert ev(src) == expected

def test_variables():
    assert ev("a+b", a=2, b=3) == 5
    assert ev("a*a-b", a=-4, b=1) == 15

def test_missing_variable_is_an_error():
    with pytest.raises(UnknownVariableError) as exc:
        ev("a+b", a=2)
    assert exc.value.name == 'b'

@pytest.mark.parametrize("src", ["5/0", "5%0", "a/(b-b)"])
def test_division_by_zero(src):
    with pytest.raises(DivisionByZeroError):
        ev(src, a=1, b=2)

def test_division_errors_are_evaluation_errors():
    with pytest.raises(EvaluationError):
        ev("1/0")
    with pytest.raises(ZeroDivisionError):
        ev("1/0")

@pytest.mark.parametrize("a,b,quotient,remainder", [
    (7, 2, 3, 1),
    (-7, 2, -3, -1),
    (7, -2, -3, 1),
    (-7, -2, 3, -1),
    (6, 3, 2, 0),
])
def test_truncating_division(a, b, quotient, remainder):
    assert ev("a/b", a=a, b=b) == quotient
    assert ev("a%b", a=a, b=b) == remainder

@pytest.mark.parametrize("a,b,expected", [
    (2, -1, 0),
    (1, -5, 1),
    (-1, -3, -1),
    (-1, -2, 1),
    (-2, 3, -8),
])
def test_negative_exponents_truncate(a, b, expected):
    assert ev("a^b", a=a, b=b) == expected

def test_zero_to_negative_power():
    with pytest.raises(DivisionByZeroError):
        ev("a^b", a=0, b=-1)

def test_power_is_exact():
    assert ev("3^40") == 3 ** 40

def test_negative_factorial():
    with pytest.raises(NegativeFactorialError):
        ev("a!", a=-1)

def test_plain_mapping_context():
    tree = Binary(Variable('x'), '*', Literal(3))
    assert evaluate(tree, {'x': 5}) == 15

def test_tree_can_be_evaluated_repeatedly():
    tree = parse_expression("a^2+1")
    assert [evaluate(tree, {'a': v}) for v in range(4)] == [1, 2, 5, 10]

def test_context_from_tokens():
    ctx = Context.from_tokens(["a=2", "b=-3", "c=+4"])
    assert ctx.variables == {'a': 2, 'b': -3, 'c': 4}

@pytest.mark.parametrize("tokens", [
    ["a"],
    ["a=x"],
    ["ab=1"],
    ["=1"],
    ["a=1", "a=2"],
])
def test_context_rejects_bad_tokens(tokens):
    with pytest.raises(ValueError):
        Context.from_tokens(tokens)

def test_context_rejects_bad_names():
    with pytest.raises(ValueError):
        Context({"ab": 1})

def long_chain(op, n=5000):
    return op.join(["1"] * n)

def test_long_left_associative_chain():
    assert evaluate(parse_expression(long_chain("+")), {}) == 5000
    assert evaluate(parse_expression(long_chain("-")), {}) == -4998

def test_long_chain_with_variables():
    tree = parse_expression("+".join(["a*b"] * 3000))
    assert evaluate(tree, {'a': 2, 'b': 3}) == 18000

@pytest.mark.parametrize("src", ["9^9^9", "(9^9)!", "2^8192", "1000!", "2^8191*2"])
def test_oversized_results_are_refused(src):
    with pytest.raises(ResultTooLargeError):
        ev(src)

def test_oversized_product_is_refused():
    with pytest.raises(ResultTooLargeError):
        ev("a*a", a=2 ** 5000)

@pytest.mark.parametrize("src,expected", [
    ("2^8191", 2 ** 8191),
    ("1^1000000000", 1),
    ("0^1000000000", 0),
    ("100!", math.factorial(100)),
])
def test_large_results_within_limit(src, expected):
    assert ev(src) == expected

def test_result_limit_is_an_evaluation_error():
    assert MAX_RESULT_BITS == 8192
    with pytest.raises(EvaluationError):
        ev("9^9^9")
