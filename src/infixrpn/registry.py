'''
Operator registry.

Every operator and function the engine knows about is one row of
`OPERATORS`. New operations are new rows (or `Registry.register` calls on a
registry of your own); the lexer, converter and machine never need to change.
'''

from collections import namedtuple
import math

import numpy

from .util import (DomainError,
                   DuplicateOperatorError,
                   InvalidOperatorError,
                   RegistryFrozenError,
                   UnknownOperatorError)


OperatorDescriptor = namedtuple('OperatorDescriptor',
                                'name precedence is_function arity evaluate')
OperatorDescriptor.__doc__ = '''
Immutable description of an operator or function.

:param name: symbol (``+``) or function name (``sqrt``), unique per registry.
:param precedence: binding strength, >= 1. 0 belongs to the open parenthesis.
:param is_function: written ``name(args)`` rather than ``a name b``.
:param arity: number of operands, >= 1.
:param evaluate: callable taking ``arity`` float32 operands, in the order they
                 appear in the expression, and returning a float32.
'''

# Tangent poles the engine refuses to evaluate, and how close is too close.
POLES = (math.pi / 2, -math.pi / 2)
POLE_TOLERANCE = 1e-4

# Characters with a fixed meaning to the lexer, never operator symbols.
RESERVED = frozenset('(),.')


def _infix(f):
    '''
    Operator computed directly in single precision.
    '''
    def wrapped(*operands):
        return numpy.float32(f(*operands))
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


def _double(f):
    '''
    Operation computed in double precision, then rounded to single.
    '''
    def wrapped(*operands):
        return numpy.float32(f(*map(numpy.float64, operands)))
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


def _check_pole(name, operand):
    if any(abs(operand - pole) < POLE_TOLERANCE for pole in POLES):
        raise DomainError('{} is undefined at {}'.format(name, operand))


def tg(operand):
    '''
    Tangent, refusing to go near ±π/2.
    '''
    _check_pole('tg', operand)
    return numpy.tan(operand)


def ctg(operand):
    '''
    Cotangent, refusing to go near ±π/2.
    '''
    _check_pole('ctg', operand)
    return 1 / numpy.tan(operand)


def log(base, operand):
    '''
    Logarithm of operand in given base.
    '''
    return numpy.log(operand) / numpy.log(base)


def rt(degree, operand):
    '''
    degree-th root of operand.
    '''
    return numpy.power(operand, 1 / degree)


OPERATORS = (
    # Arithmetic
    OperatorDescriptor('+', 1, False, 2, _infix(numpy.add)),
    OperatorDescriptor('-', 1, False, 2, _infix(numpy.subtract)),
    OperatorDescriptor('*', 2, False, 2, _infix(numpy.multiply)),
    OperatorDescriptor('/', 2, False, 2, _infix(numpy.true_divide)),
    OperatorDescriptor('^', 3, False, 2, _double(numpy.power)),

    # Functions
    OperatorDescriptor('sqrt', 3, True, 1, _double(numpy.sqrt)),
    OperatorDescriptor('sin', 3, True, 1, _double(numpy.sin)),
    OperatorDescriptor('cos', 3, True, 1, _double(numpy.cos)),
    OperatorDescriptor('tg', 3, True, 1, _double(tg)),
    OperatorDescriptor('ctg', 3, True, 1, _double(ctg)),
    OperatorDescriptor('log', 3, True, 2, _double(log)),
    OperatorDescriptor('rt', 3, True, 2, _double(rt)),
)


class Registry:
    '''
    Name to `OperatorDescriptor` mapping.

    Filled once, then frozen. A frozen registry is never mutated again, so it
    can be shared by any number of threads.
    '''

    def __init__(self, descriptors=()):
        '''
        Create registry holding descriptors, unfrozen.

        :param descriptors: any iterable of descriptors, including another
                            registry.
        '''
        self._operators = dict()
        self._frozen = False
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor):
        '''
        Add descriptor, refusing duplicate names.
        '''
        if self._frozen:
            raise RegistryFrozenError(
                'Cannot register {!r}, registry is frozen'.format(
                    descriptor.name))
        self._validate(descriptor)
        if descriptor.name in self._operators:
            raise DuplicateOperatorError(
                'Operator {!r} already registered'.format(descriptor.name))
        self._operators[descriptor.name] = descriptor

    def _validate(self, descriptor):
        name = descriptor.name
        if not isinstance(name, str) or not name:
            raise InvalidOperatorError('Invalid name {!r}'.format(name))
        if descriptor.is_function:
            if not name.isalpha():
                raise InvalidOperatorError(
                    'Function name {!r} must be letters only'.format(name))
        elif (len(name) != 1 or name.isalnum() or name.isspace() or
              name in RESERVED):
            raise InvalidOperatorError(
                'Operator {!r} must be a single symbol'.format(name))
        if not isinstance(descriptor.precedence, int) or \
           descriptor.precedence < 1:
            raise InvalidOperatorError(
                'Precedence of {!r} must be at least 1'.format(name))
        if not isinstance(descriptor.arity, int) or descriptor.arity < 1:
            raise InvalidOperatorError(
                'Arity of {!r} must be at least 1'.format(name))
        if not callable(descriptor.evaluate):
            raise InvalidOperatorError(
                'Evaluation rule of {!r} is not callable'.format(name))

    def lookup(self, name):
        '''
        Return descriptor registered under name.
        '''
        try:
            return self._operators[name]
        except KeyError:
            raise UnknownOperatorError(
                'Unknown operator {!r}'.format(name)) from None

    def freeze(self):
        '''
        Make registry read-only. Returns the registry itself.
        '''
        self._frozen = True
        return self

    @property
    def frozen(self):
        return self._frozen

    def symbols(self):
        '''
        Return the single character infix operator symbols.
        '''
        return [name
                for name, descriptor
                in self._operators.items()
                if not descriptor.is_function]

    def __contains__(self, name):
        return name in self._operators

    def __iter__(self):
        return iter(self._operators.values())

    def __len__(self):
        return len(self._operators)


# Populated at import, so the import lock is the one-time initialization
# barrier.
REGISTRY = Registry(OPERATORS).freeze()
