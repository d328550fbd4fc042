from collections import namedtuple
from enum import Enum
from functools import wraps


class ErrorKind(Enum):
    # Lexical
    UNKNOWN_TOKEN = 'unknown token'
    MALFORMED_NUMBER = 'malformed number'
    # Structural
    MISMATCHED_PAREN = 'mismatched parentheses'
    MISPLACED_COMMA = 'misplaced comma'
    INVALID_EXPRESSION = 'invalid expression'
    MISSING_OPERAND = 'missing operand'
    UNKNOWN_FUNCTION = 'unknown function'
    # Numeric
    DIVISION_BY_ZERO = 'division by zero'
    NEGATIVE_FACTORIAL = 'negative factorial'
    MISSING_ARGUMENTS = 'missing arguments'
    ARITY_MISMATCH = 'arity mismatch'
    MATH_ERROR = 'math error'
    STACK_OVERFLOW = 'stack overflow'
    NO_VALUE = 'no value'


class CalcError(Exception):
    '''
    Base of every error the calculator raises on bad user input.

    The precise kind is kept for diagnostics; users only ever see
    :attr:`display`.
    '''
    DISPLAY = 'Error'

    def __init__(self, kind, detail=None):
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else \
            '{}: {}'.format(kind.value, detail)
        super().__init__(message)

    @property
    def display(self):
        return type(self).DISPLAY


class LexError(CalcError):
    DISPLAY = 'Syntax Error'

    def __init__(self, kind, detail=None, position=None):
        super().__init__(kind, detail)
        self.position = position


class ParseError(CalcError):
    DISPLAY = 'Syntax Error'


class NumericError(CalcError):
    DISPLAY = 'Math Error'


class Outcome(namedtuple('Outcome', 'value error')):
    '''
    Result of a full evaluation: either a value, or the error that stopped it.
    '''
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


def wrap_math_errors(fmt):
    '''
    Decorator that converts float math library failures to NumericErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except (ArithmeticError, ValueError) as e:
                raise NumericError(ErrorKind.MATH_ERROR,
                                   fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
