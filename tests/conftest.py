from pytest import Item, fixture

from scicalc.calculator import Calculator
from scicalc.controller import Controller
from scicalc.session import Session


@fixture
def session():
    return Session()


@fixture
def exact_session():
    return Session(exact=True)


@fixture
def calculator(session):
    return Calculator(session)


@fixture
def controller(exact_session):
    return Controller(exact_session)


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, so a run over the numeric edge cases can be
    audited afterwards.

    Needs enable_assertion_pass_hook; use with pytest -rP.
    '''
    print('checked', item.name + ':' + str(lineno), str(orig))
    print('got', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
