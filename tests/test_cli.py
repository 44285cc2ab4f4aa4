'''
Command line interface tests
'''

from infixrpn.cli import CLI

from pytest import raises


def run(capsys, *args):
    # Only what this run prints, not what earlier assertions logged.
    capsys.readouterr()
    CLI().run(args=list(args))
    return capsys.readouterr()


def test_evaluate(capsys):
    captured = run(capsys, '-e', '2+3', '(2+3)*4', '10/4')
    assert captured.out == '5\n20\n2.5\n'
    assert captured.err == ''


def test_value(capsys):
    assert run(capsys, '-x', '3', '-e', 'x*2+1').out == '7\n'
    assert run(capsys, '-x', '0,5', '-e', 'x*2').out == '1\n'


def test_other_variable(capsys):
    assert run(capsys, '-n', 't', '-x', '2', '-e', 't^3').out == '8\n'


def test_errors_go_to_stderr_and_do_not_stop(capsys):
    captured = run(capsys, '-e', '2#3', '(2+3', '1+1')
    assert captured.out == '2\n'
    assert "Unknown operator '#' at column 2" in captured.err
    assert 'Unclosed (' in captured.err
    assert 'Traceback' not in captured.err


def test_verbose_errors(capsys):
    captured = run(capsys, '-v', '-x', '1.5708', '-e', 'tg(x)')
    assert 'Traceback' in captured.err
    assert 'DomainError' in captured.err


def test_blank_lines_skipped(capsys):
    assert run(capsys, '-e', '', '  ', '1').out == '1\n'


def test_range(capsys):
    captured = run(capsys, '-r', '-1', '1', '1', '-e', 'x^2')
    assert captured.out == '-1\t1\n0\t0\n1\t1\n'


def test_bad_step(capsys):
    captured = run(capsys, '-r', '0', '1', '0', '-e', 'x')
    assert 'Step must be positive' in captured.err


def test_dump(capsys):
    out = run(capsys, '-D', '-e', 'log(2, x)').out.splitlines()
    assert out[0] == '[kind]\t<token>'
    assert out[1:] == ['OPERATOR\tlog', 'OPEN_PAREN\t(', 'NUMBER\t2',
                       'SEPARATOR\t,', 'VARIABLE\tx', 'CLOSE_PAREN\t)',
                       'rpn\t2 x log']


def test_operators(capsys):
    out = run(capsys, '-O').out.splitlines()
    assert out[0] == '[name]\t<precedence>\t<arity>\t<function>'
    assert '+\t1\t2\tno' in out
    assert 'log\t3\t2\tyes' in out
    assert len(out) == 13


def test_bad_arguments(capsys):
    with raises(SystemExit):
        CLI().run(args=['-x', 'abc', '-e', '1'])
    with raises(SystemExit):
        CLI().run(args=['-n', 'xy', '-e', '1'])


def test_range_beyond_float32_resolution(capsys):
    out = run(capsys, '-r', '16777216', '16777220', '1', '-e', 'x').out
    lines = out.splitlines()
    assert 0 < len(lines) <= 5
    assert lines[-1] == '16777220\t16777220'
