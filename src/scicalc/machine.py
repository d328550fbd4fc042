from collections import deque
from decimal import Decimal, localcontext
import logging
import math
import operator

from . import kernel
from .session import Session
from .util import NumericError, ParseError, ErrorKind, wrap_math_errors


logger = logging.getLogger(__name__)


class Machine:
    '''
    Arithmetic stack machine.

    Takes RPN items from the parser and runs them against a session's
    settings. Never writes to the session.
    '''

    # Pathological inputs only; nothing legitimate gets near this.
    MAX_STACK = 5000
    # Largest n for which n! of a decimal operand is done exactly in exact
    # mode. Exact operands have no limit.
    EXACT_FACTORIAL_LIMIT = 2000

    OPERATORS = {
        '+': operator.__add__,
        '-': operator.__sub__,
        '*': operator.__mul__,
        '^': operator.__pow__,
    }

    # Argument converted from the session's angle mode.
    TRIG = {
        'sin': math.sin,
        'cos': math.cos,
        'tan': math.tan,
    }
    # Result converted to the session's angle mode.
    ARCTRIG = {
        'asin': math.asin,
        'acos': math.acos,
        'atan': math.atan,
    }
    # Straight through double precision.
    MATH = {
        'sinh': math.sinh,
        'cosh': math.cosh,
        'tanh': math.tanh,
        'asinh': math.asinh,
        'acosh': math.acosh,
        'atanh': math.atanh,
        'ln': math.log,
        'log': math.log10,
        'sqrt': math.sqrt,
        'exp': math.exp,
        'gamma': kernel.gamma,
        'erf': kernel.erf,
    }
    UNARY = frozenset(TRIG) | frozenset(ARCTRIG) | frozenset(MATH) | {'abs'}
    BINARY = frozenset({'root', 'ncr', 'npr'})
    FUNCTIONS = UNARY | BINARY

    def __init__(self, session=None):
        '''
        Create empty stack machine.

        :param session: Settings to evaluate with; a default one if omitted.
        '''
        self.session = Session() if session is None else session
        self.stack = deque()

    def run(self, rpn):
        '''
        Execute RPN items from an empty stack and return the single result.
        '''
        self.stack.clear()
        with localcontext(self.session.context()):
            for item in rpn:
                self.feed(item)
                if len(self.stack) > type(self).MAX_STACK:
                    raise NumericError(ErrorKind.STACK_OVERFLOW,
                                       '{} entries'.format(len(self.stack)))
            if len(self.stack) != 1:
                raise ParseError(ErrorKind.INVALID_EXPRESSION,
                                 '{} values left'.format(len(self.stack)))
            result = self.stack.pop()
        if not kernel.is_exact(result) and not result.is_finite():
            raise NumericError(ErrorKind.MATH_ERROR, str(result))
        return result

    def feed(self, item):
        '''
        Stack or run a single RPN item.
        '''
        if item.kind == 'number':
            self._pshstack(+Decimal(item.value))
        elif item.kind == 'const':
            self._pshstack(self._constant(item.value))
        elif item.kind == 'op' and item.value == 'neg':
            self._pshstack(-self._popstack()[0])
        elif item.kind == 'op':
            b, a = self._popstack(2)
            self._pshstack(self._operate(item.value, a, b))
        elif item.kind == 'postfix' and item.value == '!':
            self._pshstack(self._factorial(self._popstack()[0]))
        elif item.kind == 'postfix':
            self._pshstack(self._percent(self._popstack()[0]))
        elif item.kind == 'func':
            self._call(item.value, item.arity)
        else:
            raise ParseError(ErrorKind.INVALID_EXPRESSION, repr(item))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of operands from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise ParseError(ErrorKind.MISSING_OPERAND,
                             'less than {} value(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]

    def _constant(self, name):
        if name == 'pi':
            return kernel.pi()
        elif name == 'e':
            return kernel.e()
        return self.session.last_answer

    @wrap_math_errors('{1} failed')
    def _operate(self, op, a, b):
        if kernel.is_exact(a) and kernel.is_exact(b) and \
           not (op == '^' and b < 0):
            if op == '/':
                if b == 0:
                    raise NumericError(ErrorKind.DIVISION_BY_ZERO)
                return kernel.truncating_divide(a, b)
            return type(self).OPERATORS[op](a, b)
        a, b = kernel.to_decimal(a), kernel.to_decimal(b)
        if op == '/':
            if b.is_zero():
                raise NumericError(ErrorKind.DIVISION_BY_ZERO)
            return a / b
        elif op == '^':
            return kernel.decimal_power(a, b)
        return type(self).OPERATORS[op](a, b)

    @wrap_math_errors('{1}! failed')
    def _factorial(self, x):
        if kernel.is_exact(x):
            if x < 0:
                raise NumericError(ErrorKind.NEGATIVE_FACTORIAL, str(x))
            return kernel.exact_factorial(x)
        if kernel.is_integral(x) and x >= 0:
            n = int(x)
            if self.session.exact and n <= type(self).EXACT_FACTORIAL_LIMIT:
                return kernel.exact_factorial(n)
            return kernel.decimal_factorial(n)
        return kernel.from_float(kernel.gamma(kernel.to_float(x) + 1))

    @wrap_math_errors('{1}% failed')
    def _percent(self, x):
        if kernel.is_exact(x):
            return kernel.from_float(x / 100)
        return x / 100

    def _call(self, name, arity):
        if name not in type(self).FUNCTIONS:
            raise ParseError(ErrorKind.UNKNOWN_FUNCTION, name)
        if len(self.stack) < arity:
            raise NumericError(ErrorKind.MISSING_ARGUMENTS,
                               '{} needs {}'.format(name, arity))
        args = list(reversed(self._popstack(arity)))
        expected = 2 if name in type(self).BINARY else 1
        if arity != expected:
            raise NumericError(ErrorKind.ARITY_MISMATCH,
                               '{} takes {}, got {}'.format(name, expected,
                                                            arity))
        self._pshstack(self._apply(name, *args))

    @wrap_math_errors('{1} failed')
    def _apply(self, name, *args):
        if name in type(self).TRIG:
            return kernel.from_float(type(self).TRIG[name](
                self._to_radians(args[0])))
        elif name in type(self).ARCTRIG:
            return self._from_radians(type(self).ARCTRIG[name](
                kernel.to_float(args[0])))
        elif name in type(self).MATH:
            return kernel.from_float(type(self).MATH[name](
                kernel.to_float(args[0])))
        elif name == 'abs':
            return abs(args[0])
        elif name == 'root':
            a, n = map(kernel.to_float, args)
            return kernel.from_float(math.pow(a, 1 / n))
        elif name == 'ncr':
            return self._combinations(*args)
        return self._permutations(*args)

    def _to_radians(self, x):
        if self.session.degrees:
            x = kernel.to_decimal(x) * kernel.pi() / 180
        return kernel.to_float(x)

    def _from_radians(self, x):
        x = kernel.from_float(x)
        if self.session.degrees:
            x = x * 180 / kernel.pi()
        return x

    def _combinations(self, n, r):
        if self.session.exact and kernel.is_integral(n) and \
           kernel.is_integral(r):
            return kernel.exact_ncr(int(n), int(r))
        if kernel.is_integral(n) and kernel.is_integral(r):
            return kernel.decimal_ncr(int(n), int(r))
        return kernel.from_float(kernel.gamma_ncr(kernel.to_float(n),
                                                  kernel.to_float(r)))

    def _permutations(self, n, r):
        if self.session.exact and kernel.is_integral(n) and \
           kernel.is_integral(r):
            return kernel.exact_npr(int(n), int(r))
        if kernel.is_integral(n) and kernel.is_integral(r):
            return kernel.decimal_npr(int(n), int(r))
        return kernel.from_float(kernel.gamma_npr(kernel.to_float(n),
                                                  kernel.to_float(r)))
