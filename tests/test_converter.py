'''
Shunting-yard conversion tests
'''

from infixrpn.converter import to_rpn
from infixrpn.lexer import tokenize
from infixrpn.tokens import Kind
from infixrpn.util import (EmptyArgumentError,
                           MismatchedParenthesesError,
                           ParseError)

from pytest import mark, raises


def rpn(expression):
    return ' '.join(map(str, to_rpn(tokenize(expression))))


@mark.parametrize('expression, expected', [
    ('2', '2'),
    ('x', 'x'),
    ('2+3*4', '2 3 4 * +'),
    ('2*3+4', '2 3 * 4 +'),
    ('(2+3)*4', '2 3 + 4 *'),
    ('((2))', '2'),
    # Equal precedence binds left, ^ included.
    ('2-3-4', '2 3 - 4 -'),
    ('8/4/2', '8 4 / 2 /'),
    ('2^3^2', '2 3 ^ 2 ^'),
    ('2*3^2', '2 3 2 ^ *'),
    # Functions bind tighter than whatever surrounds them.
    ('2+sqrt(9)', '2 9 sqrt +'),
    ('2^sqrt(4)', '2 4 sqrt ^'),
    ('2*sqrt(9)+1', '2 9 sqrt * 1 +'),
    ('sqrt(4)^2', '4 sqrt 2 ^'),
    ('sin(cos(x))', 'x cos sin'),
    ('sqrt(x+7)', 'x 7 + sqrt'),
    # Arguments keep their order.
    ('log(2,8)', '2 8 log'),
    ('log(2, x+1)', '2 x 1 + log'),
    ('rt(3, 2*x) - 1', '3 2 x * rt 1 -'),
    ('log(2, log(3, 9))', '2 3 9 log log'),
])
def test_to_rpn(expression, expected):
    assert rpn(expression) == expected


def test_only_operands_and_operators_in_output():
    tokens = to_rpn(tokenize('log(2, (x+1)*(x-1)) / sqrt(x)'))
    assert {t.kind for t in tokens} == \
        {Kind.NUMBER, Kind.VARIABLE, Kind.OPERATOR}


def test_empty():
    assert to_rpn([]) == []


@mark.parametrize('expression', ['(2+3', '2+3)', ')(', '((2)', 'sqrt(2',
                                 'log(2,8))'])
def test_mismatched_parentheses(expression):
    with raises(MismatchedParenthesesError):
        to_rpn(tokenize(expression))


@mark.parametrize('expression', ['log(2,,8)', 'log(,8)', 'log(2,)',
                                 'rt(3, log(,9))'])
def test_empty_argument(expression):
    with raises(EmptyArgumentError, match='Empty argument'):
        to_rpn(tokenize(expression))


def test_empty_argument_is_a_parse_error():
    with raises(ParseError):
        to_rpn(tokenize('log(2,,8)'))
