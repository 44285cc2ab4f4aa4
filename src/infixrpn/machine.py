from collections import deque

import numpy

from .tokens import Kind
from .util import EmptyExpressionError, RPNError, StackUnderflowError


class Machine:
    '''
    Arithmetic stack machine.

    Runs an RPN token sequence with the variable bound to one value. A machine
    is used for a single run; make a new one per evaluation.
    '''

    def __init__(self, value=0):
        '''
        Create empty stack machine.

        :param value: value every VARIABLE token stands for.
        '''
        self.value = numpy.float32(value)
        self.stack = deque()

    def run(self, rpn):
        '''
        Feed all tokens and return the single value left on the stack.
        '''
        # IEEE semantics: 1/0 is inf, 0/0 is nan, both silently.
        with numpy.errstate(all='ignore'):
            for token in rpn:
                self.feed(token)
        return self.result()

    def feed(self, token):
        '''
        Stack operand or apply operator.
        '''
        if token.kind is Kind.NUMBER:
            self._pshstack(token.value)
        elif token.kind is Kind.VARIABLE:
            self._pshstack(self.value)
        elif token.kind is Kind.OPERATOR:
            self._apply(token.value)
        else:
            raise RPNError('Cannot run {} token {!r}'.format(token.kind,
                                                             str(token)))

    def _apply(self, descriptor):
        '''
        Pop operator's arguments, apply it, push the result.
        '''
        if len(self.stack) < descriptor.arity:
            raise StackUnderflowError(
                '{!r} needs {} operand(s), {} on stack'.format(
                    descriptor.name, descriptor.arity, len(self.stack)))
        # If you don't reverse, you'll do 3^2 when you say 2 3 ^ instead of
        # 2^3.
        args = reversed(self._popstack(descriptor.arity))
        self._pshstack(numpy.float32(descriptor.evaluate(*args)))

    def result(self):
        '''
        Return the only element on the stack.
        '''
        if len(self.stack) != 1:
            raise EmptyExpressionError(
                'Expected 1 value left on stack, found {}'.format(
                    len(self.stack)))
        return self.stack[-1]

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise StackUnderflowError(
                'Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]


def evaluate(rpn, value=0):
    '''
    Evaluate RPN tokens with the variable bound to value.
    '''
    return Machine(value).run(rpn)
