'''
Infix expression calculator.

Converts arithmetic expressions, with parentheses, functions, one variable and
the usual precedence, to Reverse Polish Notation, and evaluates them on a
stack machine in single precision.

    >>> from infixrpn import compile
    >>> expression = compile('x*2+1')
    >>> str(expression)
    'x 2 * 1 +'
    >>> float(expression.evaluate_at(3))
    7.0

Compile once, then evaluate as many times as needed, say once per sample point
of a plot.

Extending is a matter of registering operators:

    >>> from infixrpn import Registry, REGISTRY, OperatorDescriptor
    >>> registry = Registry(REGISTRY)
    >>> registry.register(OperatorDescriptor('abs', 3, True, 1, abs))
    >>> float(compile('abs(x)', registry=registry.freeze()).evaluate_at(-2))
    2.0
'''

from .cli import CLI
from .converter import to_rpn
from .expression import CompiledExpression, compile, format_value
from .lexer import Lexer, tokenize
from .machine import Machine, evaluate
from .registry import OPERATORS, OperatorDescriptor, Registry, REGISTRY
from .tokens import Kind, Token
from .util import (RPNError,
                   ParseError,
                   EvalError,
                   MalformedNumberError,
                   UnknownOperatorError,
                   MismatchedParenthesesError,
                   EmptyArgumentError,
                   EmptyExpressionError,
                   StackUnderflowError,
                   DomainError,
                   DuplicateOperatorError,
                   InvalidOperatorError,
                   RegistryFrozenError)


__all__ = (
    'compile', 'CompiledExpression', 'format_value',
    'tokenize', 'to_rpn', 'evaluate',
    'Lexer', 'Machine', 'CLI',
    'Kind', 'Token',
    'OperatorDescriptor', 'Registry', 'REGISTRY', 'OPERATORS',
    'RPNError', 'ParseError', 'EvalError',
    'MalformedNumberError', 'UnknownOperatorError',
    'MismatchedParenthesesError', 'EmptyArgumentError',
    'EmptyExpressionError',
    'StackUnderflowError', 'DomainError',
    'DuplicateOperatorError', 'InvalidOperatorError', 'RegistryFrozenError',
)
