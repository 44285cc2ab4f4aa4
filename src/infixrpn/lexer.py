from functools import reduce
import operator

import numpy
import regex

from .registry import REGISTRY
from .tokens import Kind, Token, OPEN_PAREN, CLOSE_PAREN, SEPARATOR
from .util import MalformedNumberError, UnknownOperatorError, wrap_user_errors


DEFAULT_VARIABLES = frozenset('x')


class Lexer:
    '''
    Lexer for the infix expression grammar.

    Bound to a registry, whose operator symbols are part of the grammar, and
    to the set of single letter variable names. Holds no state between calls
    to `lex` or `tokenize`, so one instance can be shared.
    '''
    # Digits and decimal separators. Validity is checked on conversion, so
    # that 1.2.3 is one malformed number rather than two numbers.
    NUMBER = r'[0-9.,]+'
    # Same, when , separates the arguments of a function instead.
    ARGUMENT_NUMBER = r'[0-9.]+'
    # Function names and variables.
    IDENTIFIER = r'\p{L}+'
    OPEN = r'\('
    CLOSE = r'\)'
    COMMA = r','
    SPACE = r'\s+'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.UNICODE},
                   0)

    def __init__(self, variables=DEFAULT_VARIABLES, registry=REGISTRY):
        '''
        Create lexer for registry's operators and the given variables.
        '''
        self.variables = frozenset(variables)
        for name in self.variables:
            if len(name) != 1 or not name.isalpha():
                raise ValueError('Variable {!r} is not a single letter'
                                 .format(name))
        self.registry = registry
        symbols = sorted(registry.symbols())
        # Nothing registered still has to compile; (?!) never matches.
        self.OPERATOR = (r'(?:' + r'|'.join(map(regex.escape, symbols)) + r')'
                         if symbols else r'(?!)')
        # Immediate, as in immediately complete lexeme
        immediate = (r'(?<identifier>' + self.IDENTIFIER + r')|'
                     r'(?<operator>' + self.OPERATOR + r')|'
                     r'(?<open>' + self.OPEN + r')|'
                     r'(?<close>' + self.CLOSE + r')|'
                     r'(?<space>' + self.SPACE + r')')
        self.LEXEME = r'(?<number>' + self.NUMBER + r')|' + immediate
        self.ARGUMENT_LEXEME = (r'(?<number>' + self.ARGUMENT_NUMBER + r')|'
                                r'(?<separator>' + self.COMMA + r')|' +
                                immediate)
        self._lexeme = regex.compile(self.LEXEME, flags=self.FLAGS)
        self._argument_lexeme = regex.compile(self.ARGUMENT_LEXEME,
                                              flags=self.FLAGS)

    def lex(self, line):
        '''
        Take a line and yield all lexemes, as regex matches.

        Raises on the first character no lexeme starts with.
        '''
        # One entry per open parenthesis: True when it opens the argument list
        # of a multi-argument function.
        calls = []
        previous = None
        position = 0
        while position < len(line):
            pattern = self._argument_lexeme if calls and calls[-1] \
                else self._lexeme
            match = pattern.match(line, position)
            if match is None:
                raise UnknownOperatorError(
                    'Unknown operator {!r} at column {}'.format(
                        line[position], position + 1))
            kind = match.lastgroup
            if kind == 'open':
                calls.append(self._opens_call(previous))
            elif kind == 'close' and calls:
                calls.pop()
            if kind != 'space':
                previous = match
            yield match
            position = match.end()

    def _opens_call(self, previous):
        '''
        Return True if previous lexeme is a multi-argument function name.
        '''
        if previous is None or previous.lastgroup != 'identifier':
            return False
        name = previous.group()
        if name in self.variables or name not in self.registry:
            return False
        return self.registry.lookup(name).arity > 1

    def tokenize(self, line):
        '''
        Take a line and return its tokens, whitespace dropped.
        '''
        return [self.token(match)
                for match
                in self.lex(line)
                if match.lastgroup != 'space']

    def token(self, match):
        '''
        Convert one lexeme match into a token.
        '''
        kind = match.lastgroup
        text = match.group()
        if kind == 'number':
            return Token(Kind.NUMBER, self._number(text, match.start() + 1))
        elif kind == 'identifier':
            return self._identifier(text, match.start() + 1)
        elif kind == 'operator':
            return Token.operator(self.registry.lookup(text))
        elif kind == 'open':
            return OPEN_PAREN
        elif kind == 'close':
            return CLOSE_PAREN
        elif kind == 'separator':
            return SEPARATOR
        raise UnknownOperatorError('Unknown operator {!r} at column {}'
                                   .format(text, match.start() + 1))

    @wrap_user_errors('Malformed number {1!r} at column {2}',
                      MalformedNumberError)
    def _number(self, text, column):
        '''
        Convert number lexeme to float32, accepting , as decimal point.
        '''
        return numpy.float32(text.replace(',', '.'))

    def _identifier(self, text, column):
        if len(text) == 1 and text in self.variables:
            return Token.variable(text)
        if text not in self.registry:
            raise UnknownOperatorError(
                'Unknown operator {!r} at column {}'.format(text, column))
        return Token.operator(self.registry.lookup(text))


def tokenize(expression, variables=DEFAULT_VARIABLES, registry=REGISTRY):
    '''
    Split expression into tokens.
    '''
    return Lexer(variables, registry).tokenize(expression)
