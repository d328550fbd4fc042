'''
Scientific calculator.

Infix expressions with the usual precedence, postfix factorial and percent,
trigonometric, hyperbolic and special functions, combinatorics, and the
constants pi, e and ans. Numbers are arbitrary precision decimals; in exact
mode factorials and combinatorics come out as exact integers, and stay exact
through +, -, * and ^.

Unlike most calculators, negation binds tighter than power: -3^2 is 9.
Gamma and erf are double precision whatever the decimal precision.
'''

from .calculator import Calculator
from .cli import CLI
from .controller import Controller
from .lexer import Lexer
from .machine import Machine
from .parser import Parser
from .session import Session


__all__ = 'Calculator', 'Controller', 'Session', 'Machine', 'Parser', \
    'Lexer', 'CLI'
