'''
Command line tests
'''

import io

from scicalc.cli import CLI
from scicalc.lexer import Lexer


def run(*args):
    CLI().run(args=list(args))


def test_expressions(capsys):
    run('-e', '(-3^2)', '2+3*4', '2\N{DIVISION SIGN}2')
    assert capsys.readouterr().out.splitlines() == ['9', '14', '1']


def test_continuing_from_result(capsys):
    run('-e', '2+2', '*10', 'sqrt(16)')
    assert capsys.readouterr().out.splitlines() == ['4', '40', '4']


def test_errors_go_to_stderr(capsys):
    run('-e', '5/0', '(2', '1+1')
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['2']
    assert captured.err.splitlines() == ['Math Error', 'Syntax Error']


def test_settings(capsys):
    run('--exact', '--degrees', '--precision', '12',
        '-e', 'nCr(50,6)', 'sin(30)', '1/3')
    assert capsys.readouterr().out.splitlines() == \
        ['15,890,700', '0.5', '0.333333333333']


def test_keypad_commands(capsys):
    run('--exact', '-e', '5', ':!', ':!', '256', ':sqrt', ':root', '3)',
        ':m+', ':mr')
    out = capsys.readouterr().out.splitlines()
    assert out[0:2] == ['5', '120']
    assert out[2].startswith('6689502913449127057588118054090372586752746')
    assert out[3:] == ['256', '16', 'root(16,', '2.51984209979',
                       'M 2.51984209979', '2.51984209979']


def test_unknown_command(capsys):
    run('-e', ':bogus')
    assert 'Unknown command :bogus' in capsys.readouterr().err


def test_dump(capsys):
    run('-D', '-e', 'nCr(5,2)+-1')
    out = capsys.readouterr().out.splitlines()
    assert out == ['[tokens]\t<rpn>',
                   'ncr ( 5 , 2 ) + neg 1\t5 2 ncr/2 1 neg +']


def test_raw_grammar(capsys):
    run('-G')
    assert capsys.readouterr().out.strip() == Lexer.LEXEME


def test_state_file(tmp_path, capsys):
    state = str(tmp_path / 'state.json')
    run('-s', state, '-e', '6*7')
    run('-s', state, '-e', 'ans+1', ':history')
    out = capsys.readouterr().out.splitlines()
    assert out == ['42', '43', '6*7 = 42', 'ans+1 = 43']


def test_lines_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('2^10\n\n*2\n(1\n'))
    run()
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ['1,024', '2,048']
    assert captured.err.splitlines() == ['Syntax Error']
