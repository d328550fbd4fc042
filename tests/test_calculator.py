'''
Whole pipeline tests
'''

from decimal import Decimal

from scicalc.calculator import Calculator
from scicalc.formatting import to_text
from scicalc.session import Session
from scicalc.util import LexError, ParseError, NumericError, ErrorKind


def test_evaluate_returns_outcome(calculator):
    outcome = calculator.evaluate('2+3*4')
    assert outcome.ok
    assert outcome.value == 14
    assert outcome.error is None


def test_evaluate_reports_errors(calculator):
    outcome = calculator.evaluate('(2+3')
    assert not outcome.ok
    assert isinstance(outcome.error, ParseError)
    assert outcome.error.kind is ErrorKind.MISMATCHED_PAREN
    assert outcome.error.display == 'Syntax Error'


def test_error_display_classes(calculator):
    assert calculator.evaluate('5/0').error.display == 'Math Error'
    assert isinstance(calculator.evaluate('2#2').error, LexError)
    assert isinstance(calculator.evaluate('root(8)').error, NumericError)
    assert calculator.evaluate('root(8)').error.kind is \
        ErrorKind.ARITY_MISMATCH


def test_compatibility_operators(calculator):
    assert calculator.evaluate('2\N{MULTIPLICATION SIGN}3').value == \
        calculator.evaluate('2*3').value == 6
    assert calculator.evaluate('2\N{DIVISION SIGN}2').value == \
        calculator.evaluate('2/2').value == 1


def test_ans_is_last_result(calculator):
    calculator.evaluate('2^10')
    assert calculator.evaluate('ans').value == 1024
    assert calculator.evaluate('ans').value == 1024
    assert calculator.evaluate('ans/2').value == 512


def test_failure_keeps_last_answer(calculator):
    calculator.evaluate('7')
    calculator.evaluate('7/0')
    assert calculator.session.last_answer == 7


def test_compute_leaves_last_answer_alone(calculator):
    calculator.compute('99')
    assert calculator.session.last_answer == 0


def test_text_lexes_back_to_same_value():
    calculator = Calculator(Session(precision=40))
    for expression in ('1/3', '2^0.5', '-7/8', '10^25/3', '1/7^9', '5!'):
        value = calculator.compute(expression)
        assert calculator.compute(to_text(value)) == value


def test_exact_text_lexes_back(exact_session):
    calculator = Calculator(exact_session)
    value = calculator.compute('30!')
    assert calculator.compute(to_text(value)) == value


def test_precision_change_is_not_retroactive(session):
    calculator = Calculator(session)
    third = calculator.evaluate('1/3').value
    session.set_precision(10)
    assert calculator.evaluate('ans').value == third
    assert calculator.evaluate('1/3').value == Decimal('0.3333333333')
