import logging

from .lexer import Lexer
from .machine import Machine
from .parser import Parser
from .session import Session
from .util import CalcError, Outcome


logger = logging.getLogger(__name__)


class Calculator:
    '''
    The whole pipeline: text to tokens to RPN to a value.

    :meth:`lex`, :meth:`parse` and :meth:`run` raise :class:`CalcError`, for
    poking at each stage. :meth:`evaluate` never raises on bad input; it
    hands back an :class:`Outcome` instead.
    '''

    def __init__(self, session=None):
        self.session = Session() if session is None else session
        self.lexer = Lexer()
        self.parser = Parser()
        self.machine = Machine(self.session)

    def lex(self, text):
        return self.lexer.lex(text)

    def parse(self, tokens):
        return self.parser.parse(tokens)

    def run(self, rpn):
        return self.machine.run(rpn)

    def compute(self, text):
        '''
        Run the full pipeline on text and return the value, without touching
        the session's last answer.
        '''
        return self.run(self.parse(self.lex(text)))

    def evaluate(self, text):
        '''
        Evaluate text, recording the result as the session's last answer.
        '''
        try:
            value = self.compute(text)
        except CalcError as e:
            logger.debug('evaluating %r failed: %s', text, e)
            return Outcome(None, e)
        self.session.set_last_answer(value)
        return Outcome(value, None)
