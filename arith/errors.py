
class ParseError(ValueError):
    """Raised when text is not a well-formed expression in the requested form."""

    def __init__(self, message: str, position: int = 0):
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position


class VariantError(AssertionError):
    """A node was accessed as a variant it is not. Always a programming error."""


class EvaluationError(Exception):
    """Base class for errors reachable from evaluating a well-formed tree."""


class UnknownVariableError(EvaluationError):
    def __init__(self, name: str):
        super().__init__(f"Unknown variable '{name}'")
        self.name = name


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    pass


class NegativeFactorialError(EvaluationError, ValueError):
    def __init__(self, value: int):
        super().__init__(f"Factorial of negative number {value}")
        self.value = value


class ResultTooLargeError(EvaluationError, OverflowError):
    def __init__(self, op: str, limit: int):
        super().__init__(f"Result of '{op}' exceeds {limit} bits")
        self.op = op
        self.limit = limit
