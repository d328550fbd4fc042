'''
Shunting-yard parser tests
'''

from scicalc.lexer import Lexer
from scicalc.parser import Parser
from scicalc.util import ParseError, ErrorKind

from pytest import raises


def rpn(text):
    items = Parser().parse(Lexer().lex(text))
    return ' '.join('{}/{}'.format(i.value, i.arity) if i.kind == 'func'
                    else i.value
                    for i in items)


def test_precedence():
    assert rpn('2+3*4') == '2 3 4 * +'
    assert rpn('(2+3)*4') == '2 3 + 4 *'


def test_left_associative():
    assert rpn('8-3-2') == '8 3 - 2 -'
    assert rpn('8/4/2') == '8 4 / 2 /'


def test_power_is_right_associative():
    assert rpn('2^3^2') == '2 3 2 ^ ^'


def test_negation_binds_tighter_than_power():
    assert rpn('-3^2') == '3 neg 2 ^'
    assert rpn('2^-1') == '2 1 neg ^'


def test_postfix_binds_tightest():
    assert rpn('-3!') == '3 ! neg'
    assert rpn('2^3!') == '2 3 ! ^'
    assert rpn('50%*2') == '50 % 2 *'


def test_function_arity():
    assert rpn('nCr(50,6)') == '50 6 ncr/2'
    assert rpn('sqrt(2+2)') == '2 2 + sqrt/1'
    assert rpn('root(8,1+2)*2') == '8 1 2 + root/2 2 *'


def test_nested_calls():
    assert rpn('root(sqrt(16),nPr(3,(2)))') == \
        '16 sqrt/1 3 2 npr/2 root/2'


def test_empty_call_has_no_arguments():
    assert rpn('f()') == 'f/0'


def test_call_without_parentheses():
    assert rpn('sin 30') == '30 sin/1'


def test_unclosed_paren():
    with raises(ParseError) as info:
        Parser().parse(Lexer().lex('(2+3'))
    assert info.value.kind is ErrorKind.MISMATCHED_PAREN


def test_unopened_paren():
    with raises(ParseError) as info:
        Parser().parse(Lexer().lex('2+3)'))
    assert info.value.kind is ErrorKind.MISMATCHED_PAREN


def test_comma_outside_call():
    with raises(ParseError) as info:
        Parser().parse(Lexer().lex('2,3'))
    assert info.value.kind is ErrorKind.MISPLACED_COMMA
