'''
Tokens shared by the lexer, the converter and the machine.
'''

from collections import namedtuple
import enum

import numpy


class Kind(enum.Enum):
    NUMBER = enum.auto()
    VARIABLE = enum.auto()
    OPERATOR = enum.auto()
    OPEN_PAREN = enum.auto()
    CLOSE_PAREN = enum.auto()
    # Argument separator between the arguments of a multi-argument function.
    SEPARATOR = enum.auto()

    def __str__(self):
        return self.name


class Token(namedtuple('Token', 'kind value')):
    '''
    Immutable lexeme of an infix expression.

    ``value`` is the float32 of a NUMBER, the name of a VARIABLE, the
    `OperatorDescriptor` of an OPERATOR, and the source character otherwise.
    '''
    __slots__ = ()

    @classmethod
    def number(cls, value):
        return cls(Kind.NUMBER, numpy.float32(value))

    @classmethod
    def variable(cls, name):
        return cls(Kind.VARIABLE, name)

    @classmethod
    def operator(cls, descriptor):
        return cls(Kind.OPERATOR, descriptor)

    @property
    def name(self):
        '''
        Operator name, when an operator.
        '''
        return self.value.name if self.kind is Kind.OPERATOR else None

    def __str__(self):
        if self.kind is Kind.NUMBER:
            return numpy.format_float_positional(self.value, trim='-')
        elif self.kind is Kind.OPERATOR:
            return self.value.name
        return str(self.value)


OPEN_PAREN = Token(Kind.OPEN_PAREN, '(')
CLOSE_PAREN = Token(Kind.CLOSE_PAREN, ')')
SEPARATOR = Token(Kind.SEPARATOR, ',')
