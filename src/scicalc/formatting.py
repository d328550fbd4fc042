'''
Turning values back into text.

Two flavours: :func:`format_result` for people to read, :func:`to_text` for
the lexer to read back.
'''

from decimal import Decimal, localcontext, ROUND_HALF_UP

from . import kernel


TINY = Decimal('1e-6')
HUGE = Decimal('1e21')
SIGNIFICANT_DIGITS = 12
EXPONENT_DIGITS = 10


def format_result(value):
    '''
    Format a value for display.

    Decimal magnitudes below 1e-6, zero included, use exponential notation
    with 10 fractional digits. Whole numbers below 1e21 get thousands
    separators, and everything else is rounded to 12 significant digits.
    '''
    if kernel.is_exact(value):
        if abs(value) < HUGE:
            return '{:,}'.format(value)
        return str(value)
    if not value.is_finite():
        return str(value)
    magnitude = abs(value)
    if not magnitude:
        # Decimal's own 'e' format gives zero the exponent e+10.
        return '{:.{}f}e+0'.format(value, EXPONENT_DIGITS)
    if magnitude < TINY:
        return '{:.{}e}'.format(value, EXPONENT_DIGITS)
    if kernel.is_integral(value) and magnitude < HUGE:
        return '{:,}'.format(int(value))
    with localcontext() as ctx:
        ctx.prec = SIGNIFICANT_DIGITS
        ctx.rounding = ROUND_HALF_UP
        rounded = (+value).normalize()
    return _plain(rounded)


def _plain(value):
    # Positional notation, unless the exponent is as big as 1e21 or as
    # small as 1e-7.
    if -7 < value.adjusted() < 21:
        return '{:f}'.format(value)
    return '{:e}'.format(value)


def to_text(value):
    '''
    Text that lexes back to the same value: no grouping, no exponent.
    '''
    if kernel.is_exact(value):
        return str(value)
    text = '{:f}'.format(value)
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text
