from functools import wraps


class RPNError(Exception):
    '''
    Base of every error raised by the expression engine.

    The first argument is always a human readable message, ready to be shown
    to the user as is.
    '''
    pass


class ParseError(RPNError):
    '''
    Expression text could not be compiled.
    '''
    pass


class EvalError(RPNError):
    '''
    Compiled expression could not be evaluated.
    '''
    pass


class MalformedNumberError(ParseError):
    pass


class UnknownOperatorError(ParseError):
    pass


class MismatchedParenthesesError(ParseError):
    pass


class EmptyArgumentError(ParseError):
    pass


class EmptyExpressionError(ParseError, EvalError):
    pass


class StackUnderflowError(EvalError):
    pass


class DomainError(EvalError, ArithmeticError):
    pass


class DuplicateOperatorError(RPNError):
    pass


class InvalidOperatorError(RPNError):
    pass


class RegistryFrozenError(RPNError):
    pass


def wrap_user_errors(fmt, error=RPNError):
    '''
    Decorator that converts unexpected exceptions to `error`.

    Passes through RPNErrors. The message is `fmt` formatted with the
    decorated function's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
