'''
Infix to RPN conversion, by shunting-yard.
'''

from collections import deque

from .tokens import Kind
from .util import EmptyArgumentError, MismatchedParenthesesError


def _binds(top, incoming):
    '''
    Return True if operator token on top of stack must be output before
    pushing incoming operator.

    Functions on the stack always go first. Equal precedence goes left to
    right, ^ included: 2^3^2 is (2^3)^2.
    '''
    if top.kind is not Kind.OPERATOR:
        return False
    return top.value.is_function or \
        top.value.precedence >= incoming.value.precedence


def to_rpn(tokens):
    '''
    Reorder infix tokens into RPN.

    :param tokens: tokens, as from the lexer.
    :returns: list of NUMBER, VARIABLE and OPERATOR tokens.
    '''
    output = []
    stack = deque()
    previous = None
    for token in tokens:
        _check_argument(previous, token)
        previous = token
        if token.kind in (Kind.NUMBER, Kind.VARIABLE):
            output.append(token)
        elif token.kind is Kind.OPERATOR:
            if not token.value.is_function:
                while stack and _binds(stack[-1], token):
                    output.append(stack.pop())
            stack.append(token)
        elif token.kind is Kind.OPEN_PAREN:
            stack.append(token)
        elif token.kind is Kind.CLOSE_PAREN:
            _unwind(stack, output, ')')
            stack.pop()
            if stack and stack[-1].kind is Kind.OPERATOR and \
               stack[-1].value.is_function:
                output.append(stack.pop())
        elif token.kind is Kind.SEPARATOR:
            _unwind(stack, output, ',')
    while stack:
        top = stack.pop()
        if top.kind is Kind.OPEN_PAREN:
            raise MismatchedParenthesesError('Unclosed (')
        output.append(top)
    return output


def _check_argument(previous, token):
    '''
    Refuse a separator with no argument on either side of it.
    '''
    after = previous.kind if previous is not None else None
    if token.kind is Kind.SEPARATOR and \
       after in (None, Kind.OPEN_PAREN, Kind.SEPARATOR) or \
       token.kind is Kind.CLOSE_PAREN and after is Kind.SEPARATOR:
        raise EmptyArgumentError('Empty argument before {}'.format(token))


def _unwind(stack, output, what):
    '''
    Output operators down to, but excluding, the innermost open parenthesis.
    '''
    while stack and stack[-1].kind is not Kind.OPEN_PAREN:
        output.append(stack.pop())
    if not stack:
        raise MismatchedParenthesesError('Unmatched {}'.format(what))
