from functools import wraps


class RPNError(Exception):
    '''
    Base of all errors raised while compiling or evaluating an expression.

    Rendered as ``<kind>: <detail>``.
    '''
    kind = 'error'

    def __init__(self, detail):
        super().__init__(detail)
        self.detail = detail

    def __str__(self):
        return '{}: {}'.format(self.kind, self.detail)


class InvalidOperandError(RPNError):
    kind = 'invalid operand'


class InvalidSyntaxError(RPNError):
    kind = 'invalid syntax'


class InvalidExpressionError(RPNError):
    kind = 'invalid expression'


class InvalidOperationError(RPNError):
    '''
    A solver was handed the wrong number of operands.
    '''
    kind = 'invalid operation'


class OperandTypeMismatchError(RPNError):
    kind = 'operand type mismatch'


def wrap_user_errors(fmt, error=RPNError):
    '''
    Decorator that converts low-level exceptions to RPNErrors.

    Passes through RPNErrors. Only ValueError and ArithmeticError are
    converted; anything else is a bug and propagates as is.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (ValueError, ArithmeticError) as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
