'''
How keypresses build up, evaluate and chain calculator expressions.

After an evaluation the buffer holds the result. What happens to it next
depends on what is pressed: a digit starts over, an operator carries on from
the result, a unary function is applied to it straight away, and a binary
function takes it as its first argument.
'''

from collections import deque
from decimal import Decimal, InvalidOperation
from enum import Enum
import logging

from .calculator import Calculator
from .formatting import format_result, to_text
from .machine import Machine
from .util import NumericError, ErrorKind, Outcome


logger = logging.getLogger(__name__)


class Mode(Enum):
    EDITING = 'editing'
    EVALUATED = 'evaluated'


class Controller:
    '''
    Input composition state machine, owning the session and the history.
    '''

    HISTORY_SIZE = 300
    POSTFIX = frozenset('!%')

    def __init__(self, session=None, store=None, history=()):
        '''
        :param session: Session to evaluate with; a default one if omitted.
        :param store: Where to save state after evaluations, if anywhere.
        :param history: (expression, result) pairs, newest first.
        '''
        self.calculator = Calculator(session)
        self.store = store
        self.history = deque(history, maxlen=type(self).HISTORY_SIZE)
        self.buffer = ''
        self.mode = Mode.EDITING
        self.display = ''
        self.subdisplay = ''
        self.error = None

    @property
    def session(self):
        return self.calculator.session

    def _edit(self, buffer):
        self.buffer = buffer
        self.mode = Mode.EDITING
        self.display = buffer
        self.error = None

    def press(self, text):
        '''
        Type literal text: digits, operators, parentheses, names.
        '''
        if self.mode is Mode.EVALUATED and \
           text and text[0] in '0123456789.':
            self._edit(text)
        else:
            self._edit(self.buffer + text)

    def select_function(self, name):
        '''
        Pick a function from the keypad.
        '''
        key = name.lower()
        if self.mode is Mode.EVALUATED:
            if key in Machine.UNARY:
                self.buffer = '{}({})'.format(name, self.buffer)
                return self.evaluate()
            elif key in Machine.BINARY:
                self._edit('{}({},'.format(name, self.buffer))
                return None
            self._edit(name + '(')
            return None
        self._edit(self.buffer + name + '(')
        return None

    def postfix(self, symbol):
        '''
        Press ! or %. Straight after an evaluation, applies to the result.
        '''
        if symbol not in type(self).POSTFIX:
            raise ValueError('not a postfix operator: {!r}'.format(symbol))
        if self.mode is Mode.EVALUATED:
            self.buffer += symbol
            return self.evaluate()
        self._edit(self.buffer + symbol)
        return None

    def evaluate(self):
        '''
        Evaluate the buffer. Return its Outcome, or None if it was blank.
        '''
        expression = self.buffer
        if not expression.strip():
            return None
        outcome = self.calculator.evaluate(expression)
        if not outcome.ok:
            return self._fail(outcome.error)
        self.buffer = to_text(outcome.value)
        self.mode = Mode.EVALUATED
        self.display = format_result(outcome.value)
        self.subdisplay = expression + ' ='
        self.error = None
        self.history.appendleft((expression, self.buffer))
        self._save()
        return outcome

    def _fail(self, error):
        logger.debug('showing %s for %r', error.display, self.buffer)
        self.buffer = ''
        self.mode = Mode.EDITING
        self.display = error.display
        self.subdisplay = ''
        self.error = error
        return Outcome(None, error)

    def clear(self):
        self._edit('')
        self.subdisplay = ''

    def backspace(self):
        if self.mode is Mode.EVALUATED:
            self.clear()
        else:
            self._edit(self.buffer[:-1])

    def insert_answer(self):
        self._edit(self.buffer + 'ans')

    def memory_recall(self):
        self._edit(self.buffer + to_text(self.session.memory))

    def memory_add(self):
        return self._memory(self.session.memory_add)

    def memory_subtract(self):
        return self._memory(self.session.memory_subtract)

    def memory_clear(self):
        self.session.memory_clear()
        self._save()

    def _memory(self, update):
        try:
            value = self._displayed_value()
        except NumericError as e:
            return self._fail(e)
        update(value)
        self._save()
        return Outcome(value, None)

    def _displayed_value(self):
        if self.mode is Mode.EVALUATED:
            return self.session.last_answer
        try:
            value = Decimal(self.buffer.replace(',', '').strip())
        except InvalidOperation:
            value = None
        if value is None or not value.is_finite():
            raise NumericError(ErrorKind.NO_VALUE, repr(self.buffer))
        return value

    def clear_history(self):
        self.history.clear()
        self._save()

    def completions(self, prefix):
        '''
        Return function names starting with prefix, case-insensitively.
        '''
        prefix = prefix.lower()
        return sorted(name
                      for name
                      in Machine.FUNCTIONS
                      if name.startswith(prefix))

    def _save(self):
        if self.store is not None:
            self.store.save(self.session, self.history)
