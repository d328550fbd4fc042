from decimal import (Context, Decimal, ROUND_HALF_UP, MAX_EMAX, MIN_EMIN,
                     localcontext)
from enum import Enum

from . import kernel


class AngleMode(Enum):
    DEGREES = 'deg'
    RADIANS = 'rad'


class Session:
    '''
    Settings and registers that outlive a single evaluation.

    The evaluator only reads a session; everything else changes it through
    the setters below.
    '''

    MIN_PRECISION = 8
    MAX_PRECISION = 200
    DEFAULT_PRECISION = 34

    def __init__(self, precision=DEFAULT_PRECISION,
                 angle_mode=AngleMode.RADIANS, exact=False,
                 last_answer=None, memory=None):
        self.set_precision(precision)
        self.set_angle_mode(angle_mode)
        self.exact = exact
        self.last_answer = Decimal(0) if last_answer is None else last_answer
        self.memory = Decimal(0) if memory is None else memory

    @property
    def degrees(self):
        return self.angle_mode is AngleMode.DEGREES

    def context(self):
        '''
        Decimal context for one evaluation.

        Nothing is trapped: overflow and invalid operations become Infinity
        and NaN, and the evaluator rejects those once it is done.
        '''
        return Context(prec=self.precision,
                       rounding=ROUND_HALF_UP,
                       Emax=MAX_EMAX,
                       Emin=MIN_EMIN,
                       traps=[])

    def set_precision(self, precision):
        '''
        Set significant digits for later decimal operations, clamped to the
        supported range. Garbage falls back to the default.
        '''
        try:
            precision = int(precision)
        except (TypeError, ValueError):
            precision = type(self).DEFAULT_PRECISION
        self.precision = max(type(self).MIN_PRECISION,
                             min(type(self).MAX_PRECISION, precision))

    def set_angle_mode(self, mode):
        self.angle_mode = AngleMode(mode)

    def toggle_angle_mode(self):
        self.angle_mode = AngleMode.RADIANS if self.degrees \
            else AngleMode.DEGREES

    def set_exact_mode(self, enabled):
        self.exact = bool(enabled)

    def set_last_answer(self, value):
        self.last_answer = value

    def memory_add(self, value):
        self.memory = self._combine(self.memory, value, subtract=False)

    def memory_subtract(self, value):
        self.memory = self._combine(self.memory, value, subtract=True)

    def memory_clear(self):
        self.memory = Decimal(0)

    def _combine(self, a, b, subtract):
        if kernel.is_exact(a) and kernel.is_exact(b):
            return a - b if subtract else a + b
        with localcontext(self.context()):
            a, b = kernel.to_decimal(a), kernel.to_decimal(b)
            return a - b if subtract else a + b
