'''
Compile once, evaluate many times.
'''

from itertools import count

import numpy

from .converter import to_rpn
from .lexer import Lexer
from .machine import evaluate
from .registry import REGISTRY
from .util import EmptyExpressionError


DEFAULT_VARIABLE = 'x'


class CompiledExpression:
    '''
    Expression converted to RPN, ready to be evaluated at any variable value.

    Immutable: evaluations share nothing but the RPN tuple, so they can run
    from several threads at once.
    '''
    __slots__ = ('_expression', '_variable', '_rpn')

    def __init__(self, expression, variable, rpn):
        self._expression = expression
        self._variable = variable
        self._rpn = tuple(rpn)

    @property
    def expression(self):
        '''
        Source text.
        '''
        return self._expression

    @property
    def variable(self):
        return self._variable

    @property
    def rpn(self):
        return self._rpn

    def evaluate_at(self, value=0):
        '''
        Evaluate with the variable bound to value, as float32.
        '''
        return evaluate(self._rpn, value)

    def sample(self, start, end, step):
        '''
        Yield (x, y) pairs for x from start to end inclusive, every step.

        Each x is start + i * step worked out in double precision and rounded
        to float32, so rounding never stalls or drifts the walk. Where float32
        is coarser than step, neighbouring samples may repeat an x.
        '''
        start = numpy.float64(start)
        end = numpy.float64(end)
        step = numpy.float64(step)
        if not step > 0:
            raise ValueError('Step must be positive, not {}'.format(step))
        if not (numpy.isfinite(start) and numpy.isfinite(end)):
            raise ValueError('Range must be finite, not {} to {}'.format(
                start, end))
        for i in count():
            x = start + i * step
            if x > end:
                return
            x = numpy.float32(x)
            yield x, self.evaluate_at(x)

    def __str__(self):
        return ' '.join(map(str, self._rpn))

    def __repr__(self):
        return '{}({!r}, rpn={!r})'.format(type(self).__name__,
                                           self._expression, str(self))


def compile(expression, variable=DEFAULT_VARIABLE, registry=REGISTRY):
    '''
    Tokenize and convert expression to RPN.

    :param expression: infix expression text.
    :param variable: the single letter standing for the variable.
    :param registry: operators the expression may use.
    '''
    lexer = Lexer({variable}, registry)
    rpn = to_rpn(lexer.tokenize(expression))
    if not rpn:
        raise EmptyExpressionError('Empty expression')
    return CompiledExpression(expression, variable, rpn)


def format_value(value):
    '''
    Shortest decimal text that reads back as the same float32.

    Always uses . as decimal point, whatever the locale.
    '''
    return numpy.format_float_positional(numpy.float32(value), trim='-')
