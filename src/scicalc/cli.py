from os import path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from .controller import Controller, Mode
from .formatting import format_result
from .lexer import Lexer
from .machine import Machine
from .session import Session, AngleMode
from .store import StateStore
from .util import CalcError


class InteractiveInput:
    def __init__(self, prompt, history_file):
        self.prompt = prompt
        self.history_file = history_file

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Persistent
                                    history=FileHistory(
                                        path.expanduser(self.history_file)),
                                    completer=WordCompleter(
                                        sorted(Machine.FUNCTIONS),
                                        ignore_case=True),
                                    complete_while_typing=False,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.

    Each line is typed into the calculator and evaluated. A line starting
    with an operator carries on from the previous result; anything else
    starts a new expression, unless a binary function is still waiting for
    its second argument. Lines starting with a colon are keypad actions,
    see :attr:`COMMANDS`, or function names.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.scicalc_history'
    CONTINUATION = tuple('+-*/^!%')

    # Keypad actions, as :name [argument]
    COMMANDS = {
        'clear': 'do_clear',
        'del': 'do_backspace',
        'deg': 'do_degrees',
        'rad': 'do_radians',
        'exact': 'do_exact',
        'prec': 'do_precision',
        'ans': 'do_answer',
        'mc': 'do_memory_clear',
        'mr': 'do_memory_recall',
        'm+': 'do_memory_add',
        'm-': 'do_memory_subtract',
        'history': 'do_history',
        'forget': 'do_forget',
        '!': 'do_postfix',
        '%': 'do_postfix',
    }

    def dumper(self):
        '''
        Dump tokens and RPN of every line.
        '''
        calculator = self._controller().calculator
        print('[tokens]\t<rpn>')
        for line in self._expressions():
            try:
                tokens = calculator.lex(line)
                rpn = calculator.parse(tokens)
            except CalcError as e:
                self._report(e)
                continue
            print(' '.join(token.value for token in tokens),
                  ' '.join(self._describe(item) for item in rpn),
                  sep='\t')

    @staticmethod
    def _describe(item):
        if item.kind == 'func':
            return '{}/{}'.format(item.value, item.arity)
        return item.value

    def executor(self):
        '''
        Run calculator.
        '''
        self.controller = self._controller()
        for line in self._expressions():
            line = line.strip()
            if not line:
                continue
            elif line.startswith(':'):
                self.command(line[1:])
            else:
                if self.controller.mode is Mode.EVALUATED and \
                   not line.startswith(type(self).CONTINUATION):
                    self.controller.clear()
                self.controller.press(line)
                self._show(self.controller.evaluate())

    def command(self, line):
        name, _, argument = line.partition(' ')
        method = type(self).COMMANDS.get(name)
        if method is not None:
            return getattr(self, method)(name, argument.strip())
        elif name.lower() in Machine.FUNCTIONS:
            return self._show(self.controller.select_function(name))
        print('Unknown command :{}'.format(name), file=sys.stderr)

    def _show(self, outcome):
        if outcome is None:
            # Waiting on more input, e.g. root(8,
            if self.controller.mode is Mode.EDITING and self.controller.buffer:
                print(self.controller.buffer)
            return
        if outcome.ok:
            print(self.controller.display)
        else:
            self._report(outcome.error)

    def _report(self, error):
        print(error.display, file=sys.stderr)
        if self.args.verbose:
            print(str(error), file=sys.stderr)
            traceback.print_exception(type(error), error, error.__traceback__,
                                      file=sys.stderr)

    def do_clear(self, name, argument):
        self.controller.clear()

    def do_backspace(self, name, argument):
        self.controller.backspace()
        print(self.controller.buffer)

    def do_degrees(self, name, argument):
        self.controller.session.set_angle_mode(AngleMode.DEGREES)

    def do_radians(self, name, argument):
        self.controller.session.set_angle_mode(AngleMode.RADIANS)

    def do_exact(self, name, argument):
        self.controller.session.set_exact_mode(argument.lower() != 'off')

    def do_precision(self, name, argument):
        self.controller.session.set_precision(argument)
        print(self.controller.session.precision)

    def do_answer(self, name, argument):
        print(format_result(self.controller.session.last_answer))

    def do_memory_clear(self, name, argument):
        self.controller.memory_clear()

    def do_memory_recall(self, name, argument):
        print(format_result(self.controller.session.memory))

    def do_memory_add(self, name, argument):
        self._show_memory(self.controller.memory_add())

    def do_memory_subtract(self, name, argument):
        self._show_memory(self.controller.memory_subtract())

    def _show_memory(self, outcome):
        if outcome.ok:
            print('M', format_result(self.controller.session.memory))
        else:
            self._report(outcome.error)

    def do_history(self, name, argument):
        for expression, result in reversed(self.controller.history):
            print(expression, '=', result)

    def do_forget(self, name, argument):
        self.controller.clear_history()

    def do_postfix(self, name, argument):
        self._show(self.controller.postfix(name))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _controller(self):
        '''
        Build a controller from saved state, then command line overrides.
        '''
        if self.args.state:
            store = StateStore(self.args.state)
            session, history = store.load()
        else:
            store, session, history = None, Session(), []
        if self.args.precision is not None:
            session.set_precision(self.args.precision)
        if self.args.angle is not None:
            session.set_angle_mode(self.args.angle)
        if self.args.exact:
            session.set_exact_mode(True)
        return Controller(session, store=store, history=history)

    def _expressions(self):
        '''
        Lines to work through: -e arguments, else standard input.
        '''
        if self.args.expressions is None:
            return self._prompting_input()
        return self.args.expressions

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history_file=self.HISTORY_FILE)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Scientific calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-s', '--state',
                                          metavar='FILE',
                                          help='load and save settings, '
                                               'memory and history here')
        self.argument_parser.add_argument('--precision', type=int,
                                          help='significant digits, {}-{}'
                                               .format(Session.MIN_PRECISION,
                                                       Session.MAX_PRECISION))
        self.argument_parser.add_argument('--exact', action='store_true',
                                          help='exact integer factorials '
                                               'and combinatorics')
        angle_groups = self.argument_parser.add_mutually_exclusive_group()
        angle_groups.add_argument('--degrees', action='store_const',
                                  const=AngleMode.DEGREES, dest='angle')
        angle_groups.add_argument('--radians', action='store_const',
                                  const=AngleMode.RADIANS, dest='angle')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None,
                                          angle=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
