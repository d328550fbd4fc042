'''
Numeric kernel.

Values live in one of two domains: ``int`` (exact, unbounded) or
``decimal.Decimal`` (rounded to whatever context is active). Every move from
one to the other goes through a function in here.

Gamma and erf are plain double precision, whatever the decimal precision.
'''

from decimal import Decimal, localcontext
from functools import lru_cache
import math


# Lanczos approximation, g=7, n=9
LANCZOS_G = 7
LANCZOS_COEFFICIENTS = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)

# Abramowitz & Stegun 7.1.26
ERF_P = 0.3275911
ERF_COEFFICIENTS = (
    0.254829592,
    -0.284496736,
    1.421413741,
    -1.453152027,
    1.061405429,
)


def is_exact(value):
    return isinstance(value, int)


def is_integral(value):
    '''
    Return True if value is a finite whole number, in either domain.
    '''
    if is_exact(value):
        return True
    return value.is_finite() and value == value.to_integral_value()


def to_decimal(value):
    if is_exact(value):
        return Decimal(value)
    return value


def to_float(value):
    '''
    Convert to a double, saturating to infinity instead of raising.
    '''
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def from_float(x):
    '''
    Convert a double to Decimal through its shortest repr, not its binary
    expansion.
    '''
    return +Decimal(repr(x))


def truncating_divide(a, b):
    '''
    Integer division rounding toward zero, not toward negative infinity.
    '''
    if b == 0:
        raise ZeroDivisionError('integer division by zero')
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def decimal_power(base, exponent):
    '''
    Raise a Decimal to a Decimal power.

    The exponent goes through a float first, so only about 17 of its digits
    count.
    '''
    x = to_float(exponent)
    if x == 0:
        return Decimal(1)
    if math.isfinite(x) and x.is_integer():
        return base ** int(x)
    return base ** Decimal(repr(x))


@lru_cache(maxsize=16)
def _pi(precision):
    with localcontext() as ctx:
        ctx.prec = precision + 2
        three = Decimal(3)
        lasts, t, s, n, na, d, da = 0, three, 3, 1, 0, 0, 24
        while s != lasts:
            lasts = s
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            t = (t * n) / d
            s += t
    return s


def pi():
    '''
    Pi to the active context precision.
    '''
    with localcontext() as ctx:
        return +_pi(ctx.prec)


def e():
    '''
    Euler's number to the active context precision.
    '''
    return Decimal(1).exp()


def gamma(z):
    '''
    Lanczos approximation of the Gamma function.

    Double precision only. Near the poles at the non-positive integers the
    reflection formula produces huge values of either sign instead of
    failing; callers get whatever it gives.
    '''
    if z < 0.5:
        return math.pi / (math.sin(math.pi * z) * gamma(1 - z))
    z -= 1
    x = LANCZOS_COEFFICIENTS[0]
    for i, coefficient in enumerate(LANCZOS_COEFFICIENTS[1:], start=1):
        x += coefficient / (z + i)
    t = z + LANCZOS_G + 0.5
    return math.sqrt(2 * math.pi) * math.pow(t, z + 0.5) * math.exp(-t) * x


def erf(x):
    '''
    Error function, to about 1.5e-7 absolute.
    '''
    sign = -1 if x < 0 else 1
    x = abs(x)
    t = 1 / (1 + ERF_P * x)
    polynomial = 0
    for coefficient in reversed(ERF_COEFFICIENTS):
        polynomial = (polynomial + coefficient) * t
    return sign * (1 - polynomial * math.exp(-x * x))


def exact_factorial(n):
    if n < 0:
        raise ValueError('factorial of negative number')
    return math.factorial(n)


def decimal_factorial(n):
    '''
    n! as a Decimal product, rounding at every step.
    '''
    result = Decimal(1)
    for i in range(2, n + 1):
        result *= i
    return result


def exact_ncr(n, r):
    '''
    Binomial coefficient, exactly.

    Keeps the intermediate numbers small by cancelling each denominator term
    against the numerator terms before multiplying anything out.
    '''
    if r < 0 or n < 0 or r > n:
        return 0
    k = min(r, n - r)
    if k == 0:
        return 1
    numerators = [n - i for i in range(k)]
    denominators = list(range(1, k + 1))
    for i, d in enumerate(denominators):
        for j, numerator in enumerate(numerators):
            if d == 1:
                break
            divisor = math.gcd(numerator, d)
            if divisor > 1:
                numerators[j] = numerator // divisor
                d //= divisor
        denominators[i] = d
    result = 1
    for numerator in numerators:
        result *= numerator
    for d in denominators:
        result //= d
    return result


def exact_npr(n, r):
    if r < 0 or n < 0 or r > n:
        return 0
    result = 1
    for i in range(r):
        result *= n - i
    return result


def decimal_ncr(n, r):
    if r < 0 or n < 0 or r > n:
        return Decimal(0)
    k = min(r, n - r)
    result = Decimal(1)
    for i in range(1, k + 1):
        result = result * (n - k + i) / i
    return result


def decimal_npr(n, r):
    if r < 0 or n < 0 or r > n:
        return Decimal(0)
    result = Decimal(1)
    for i in range(r):
        result *= n - i
    return result


def gamma_ncr(n, r):
    '''
    Binomial coefficient generalised to real arguments.
    '''
    return gamma(n + 1) / (gamma(r + 1) * gamma(n - r + 1))


def gamma_npr(n, r):
    return gamma(n + 1) / gamma(n - r + 1)
