from os import isatty, path
import sys
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .converter import to_rpn
from .expression import DEFAULT_VARIABLE, compile, format_value
from .lexer import Lexer
from .registry import REGISTRY
from .util import RPNError


def _number(text):
    '''
    argparse type for numbers, accepting , as decimal point.
    '''
    try:
        return float(text.replace(',', '.'))
    except ValueError:
        raise ArgumentTypeError('invalid number: {!r}'.format(text)) from None


def _variable(text):
    if len(text) != 1 or not text.isalpha():
        raise ArgumentTypeError('variable must be a single letter: {!r}'
                                .format(text))
    return text


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.infixrpn_history'

    def dumper(self):
        '''
        Dump tokens and RPN of every expression.
        '''
        lexer = Lexer({self.args.variable}, REGISTRY)
        for line in self._lines():
            try:
                tokens = lexer.tokenize(line)
                print('[kind]\t<token>')
                for token in tokens:
                    print(token.kind, str(token), sep='\t')
                print('rpn', ' '.join(map(str, to_rpn(tokens))), sep='\t')
            except RPNError as e:
                self._report(e)

    def executor(self):
        '''
        Evaluate every expression, at one value or over a range.
        '''
        for line in self._lines():
            # Abort entire rest of line on error
            try:
                expression = compile(line, variable=self.args.variable)
                if self.args.range is None:
                    result = expression.evaluate_at(self.args.value)
                    print(format_value(result))
                else:
                    for x, y in expression.sample(*self.args.range):
                        print(format_value(x), format_value(y), sep='\t')
            except (RPNError, ValueError) as e:
                self._report(e)

    def operators(self):
        '''
        Print every registered operator and function.
        '''
        print('[name]\t<precedence>\t<arity>\t<function>')
        for descriptor in REGISTRY:
            print(descriptor.name,
                  descriptor.precedence,
                  descriptor.arity,
                  'yes' if descriptor.is_function else 'no',
                  sep='\t')

    def _lines(self):
        '''
        Yield non-blank expressions, stripped.
        '''
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def _report(self, e):
        if self.args.verbose:
            traceback.print_exception(type(e), e, e.__traceback__,
                                      file=sys.stderr)
        else:
            print(e.args[0], file=sys.stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-x', '--value',
                                          type=_number,
                                          default=0.0,
                                          help='value of the variable')
        self.argument_parser.add_argument('-n', '--variable',
                                          type=_variable,
                                          default=DEFAULT_VARIABLE,
                                          help='name of the variable')
        self.argument_parser.add_argument('-r', '--range',
                                          type=_number,
                                          nargs=3,
                                          metavar=('START', 'END', 'STEP'),
                                          help='tabulate over a range')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-O', '--operators',
                                       self.operators),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
