from collections import namedtuple
from functools import reduce
import logging
import operator

import regex

from .util import LexError, ErrorKind


logger = logging.getLogger(__name__)

Token = namedtuple('Token', 'kind value position')


class Lexer:
    '''
    Lexer for calculator expressions.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Compatibility spellings, folded before scanning.
    NORMALIZE = str.maketrans({
        '\N{MULTIPLICATION SIGN}': '*',
        '\N{DIVISION SIGN}': '/',
        '\N{MINUS SIGN}': '-',
    })
    CONSTANTS = frozenset({'pi', 'e', 'ans'})

    # Digits and dots, however many. How many dots is checked afterwards, so
    # that 1.2.3 is a malformed number rather than two numbers.
    NUMBER = r'[0-9.]+'
    # pi, sin, nCr, log10, x_1
    NAME = r'[A-Za-z][A-Za-z0-9_]*'
    OPERATOR = r'[-+*/^]'
    PAREN = r'[()]'
    COMMA = r','
    POSTFIX = r'[!%]'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<name>' + NAME + r')|' \
             r'(?<op>' + OPERATOR + r')|' \
             r'(?<paren>' + PAREN + r')|' \
             r'(?<comma>' + COMMA + r')|' \
             r'(?<postfix>' + POSTFIX + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.ASCII,
                    regex.VERSION1},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    def normalize(self, text):
        return text.translate(type(self).NORMALIZE)

    def scan(self, text):
        '''
        Yield raw tokens, before unary minus is told apart from subtraction.
        '''
        pattern = type(self).PATTERN
        position = 0
        while position < len(text):
            match = pattern.match(text, position)
            if match is None:
                raise LexError(ErrorKind.UNKNOWN_TOKEN,
                               '{!r} at {}'.format(text[position], position),
                               position=position)
            kind = match.lastgroup
            lexeme = match.group(0)
            if kind == 'number':
                yield self._number(lexeme, position)
            elif kind == 'name':
                name = lexeme.lower()
                kind = 'const' if name in type(self).CONSTANTS else 'func'
                yield Token(kind, name, position)
            elif kind != 'space':
                yield Token(kind, lexeme, position)
            position = match.end()

    def _number(self, lexeme, position):
        if lexeme.count('.') > 1 or lexeme == '.':
            raise LexError(ErrorKind.MALFORMED_NUMBER, repr(lexeme),
                           position=position)
        return Token('number', lexeme, position)

    def lex(self, text):
        '''
        Take a line and return all tokens.

        A minus is unary negation when nothing it could subtract from comes
        before it.
        '''
        tokens = []
        for token in self.scan(self.normalize(text)):
            if token.kind == 'op' and token.value == '-' and \
               self._starts_operand(tokens[-1] if tokens else None):
                token = token._replace(value='neg')
            tokens.append(token)
        logger.debug('lexed %r into %d tokens', text, len(tokens))
        return tokens

    @staticmethod
    def _starts_operand(previous):
        return previous is None or \
            previous.kind in ('op', 'comma') or \
            (previous.kind == 'paren' and previous.value == '(')
