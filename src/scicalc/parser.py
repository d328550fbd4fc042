'''
Shunting-yard conversion of calculator tokens to RPN.
'''

from collections import namedtuple
import logging

from .util import ParseError, ErrorKind


logger = logging.getLogger(__name__)

Item = namedtuple('Item', 'kind value arity')
Item.__new__.__defaults__ = (None,)


class Operator:
    '''
    Operator waiting on the stack for its right operand.
    '''
    __slots__ = 'kind', 'value'

    def __init__(self, kind, value):
        self.kind = kind
        self.value = value


class PendingFunction:
    '''
    Function name waiting for its argument list to close.
    '''
    __slots__ = 'name',

    def __init__(self, name):
        self.name = name


class GroupMarker:
    '''
    Open parenthesis, counting the commas and noticing whether anything at
    all went in.
    '''
    __slots__ = 'arg_count', 'has_content'

    def __init__(self):
        self.arg_count = 0
        self.has_content = False

    @property
    def arity(self):
        return self.arg_count + 1 if self.has_content else 0


class Parser:
    '''
    Operator-precedence parser for calculator tokens.
    '''
    # Higher binds tighter. Negation outranks power: -3^2 is (-3)^2.
    PRECEDENCE = {
        '!': 6,
        '%': 6,
        'neg': 5,
        '^': 4,
        '*': 3,
        '/': 3,
        '+': 2,
        '-': 2,
    }
    RIGHT_ASSOCIATIVE = frozenset({'^', 'neg'})

    def parse(self, tokens):
        '''
        Take lexer tokens and return the equivalent RPN items.
        '''
        output = []
        stack = []
        for token in tokens:
            closing = token.kind == 'paren' and token.value == ')'
            if not closing and token.kind != 'comma':
                self._mark_content(stack)
            if token.kind in ('number', 'const'):
                output.append(Item(token.kind, token.value))
            elif token.kind == 'func':
                stack.append(PendingFunction(token.value))
            elif token.kind in ('op', 'postfix'):
                self._push_operator(Operator(token.kind, token.value),
                                    stack, output)
            elif token.kind == 'paren' and not closing:
                stack.append(GroupMarker())
            elif closing:
                self._close_group(stack, output)
            elif token.kind == 'comma':
                marker = self._unwind(stack, output)
                if marker is None:
                    raise ParseError(ErrorKind.MISPLACED_COMMA,
                                     'at {}'.format(token.position))
                marker.arg_count += 1
        while stack:
            frame = stack.pop()
            if isinstance(frame, GroupMarker):
                raise ParseError(ErrorKind.MISMATCHED_PAREN, 'unclosed (')
            output.append(self._emit(frame))
        logger.debug('parsed into %r', output)
        return output

    @staticmethod
    def _mark_content(stack):
        for frame in reversed(stack):
            if isinstance(frame, GroupMarker):
                frame.has_content = True
                return

    def _push_operator(self, incoming, stack, output):
        precedence = type(self).PRECEDENCE[incoming.value]
        right = incoming.value in type(self).RIGHT_ASSOCIATIVE
        while stack:
            top = stack[-1]
            if isinstance(top, PendingFunction):
                output.append(self._emit(stack.pop()))
                continue
            if isinstance(top, Operator):
                top_precedence = type(self).PRECEDENCE[top.value]
                if precedence < top_precedence or \
                   not right and precedence == top_precedence:
                    output.append(self._emit(stack.pop()))
                    continue
            break
        stack.append(incoming)

    def _unwind(self, stack, output):
        '''
        Pop everything down to the innermost group marker, which stays put.

        Return the marker, or None if there isn't one.
        '''
        while stack:
            if isinstance(stack[-1], GroupMarker):
                return stack[-1]
            output.append(self._emit(stack.pop()))
        return None

    def _close_group(self, stack, output):
        marker = self._unwind(stack, output)
        if marker is None:
            raise ParseError(ErrorKind.MISMATCHED_PAREN, 'unopened )')
        stack.pop()
        if stack and isinstance(stack[-1], PendingFunction):
            output.append(Item('func', stack.pop().name, marker.arity))

    @staticmethod
    def _emit(frame):
        if isinstance(frame, PendingFunction):
            # Applied without parentheses, as in sin 30.
            return Item('func', frame.name, 1)
        return Item(frame.kind, frame.value)
