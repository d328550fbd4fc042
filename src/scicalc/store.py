from decimal import Decimal, InvalidOperation
from os import path
import json
import logging

from . import kernel
from .session import Session, AngleMode


logger = logging.getLogger(__name__)


def dump_value(value):
    if kernel.is_exact(value):
        return {'exact': str(value)}
    return {'decimal': str(value)}


def load_value(data):
    if 'exact' in data:
        return int(data['exact'])
    return Decimal(data['decimal'])


class StateStore:
    '''
    Session settings, registers and history, kept in a JSON file between
    runs.

    Best effort: a missing or unreadable file means defaults, and a failed
    write is logged and otherwise ignored.
    '''

    def __init__(self, filename):
        self.filename = path.expanduser(filename)

    def load(self):
        '''
        Return a session and history list built from the saved state.
        '''
        try:
            with open(self.filename) as fp:
                state = json.load(fp)
        except FileNotFoundError:
            return Session(), []
        except (OSError, ValueError) as e:
            logger.warning('ignoring unreadable state %s: %s',
                           self.filename, e)
            return Session(), []
        if not isinstance(state, dict):
            logger.warning('ignoring malformed state %s: not an object',
                           self.filename)
            return Session(), []
        try:
            session = Session(precision=state.get('precision'),
                              angle_mode=AngleMode(state.get('angle', 'rad')),
                              exact=bool(state.get('exact', False)),
                              last_answer=load_value(state['ans'])
                              if 'ans' in state else None,
                              memory=load_value(state['memory'])
                              if 'memory' in state else None)
            history = [(expression, result)
                       for expression, result
                       in state.get('history', [])]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.warning('ignoring malformed state %s: %s',
                           self.filename, e)
            return Session(), []
        return session, history

    def save(self, session, history=()):
        state = {
            'precision': session.precision,
            'angle': session.angle_mode.value,
            'exact': session.exact,
            'ans': dump_value(session.last_answer),
            'memory': dump_value(session.memory),
            'history': [list(entry) for entry in history],
        }
        try:
            with open(self.filename, 'w') as fp:
                json.dump(state, fp, indent=1)
        except OSError as e:
            logger.warning('could not save state to %s: %s',
                           self.filename, e)
