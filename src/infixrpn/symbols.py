'''
Symbol table: every operator and parenthesis the language knows about.

Built once at import and never mutated, so it can be shared freely between
threads.
'''

from types import MappingProxyType
import operator

import regex

from .operand import Operand
from .tokens import TokenType
from .util import (InvalidOperandError, InvalidOperationError,
                   OperandTypeMismatchError)


def _check(operands, arity):
    '''
    Validate operands handed to a solver, returning them as a tuple.
    '''
    operands = tuple(operands)
    if len(operands) != arity:
        raise InvalidOperationError(
            'invalid number of operands {} != {}'.format(arity,
                                                         len(operands)))
    for operand in operands:
        if not isinstance(operand, Operand):
            raise OperandTypeMismatchError(
                'expected Operand, received {}'.format(
                    type(operand).__name__))
    return operands


def _unary(f):
    '''
    Turn a one-argument number function into a solver.
    '''
    def wrapped(operands):
        only, = _check(operands, 1)
        return Operand(f(only.value()))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _binary(f):
    '''
    Turn a two-argument number function into a solver.

    Promotes the integer side to a float when the other side is one.
    '''
    def wrapped(operands):
        left, right = _check(operands, 2)
        if left.is_float != right.is_float:
            left, right = left.as_float(), right.as_float()
        return Operand(f(left.value(), right.value()))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _divide(left, right):
    '''
    True division; two integers give a float.
    '''
    if not right:
        raise InvalidOperandError('cannot divide by zero')
    return float(left) / float(right)


def _modulus(operands):
    '''
    Integer remainder, taking the sign of the dividend.
    '''
    left, right = _check(operands, 2)
    if left.is_float or right.is_float:
        raise InvalidOperandError(
            'cannot perform modulus operation with floats')
    dividend, divisor = left.value(), right.value()
    if not divisor:
        raise InvalidOperandError('cannot perform modulus by zero')
    remainder = abs(dividend) % abs(divisor)
    return Operand(-remainder if dividend < 0 else remainder)


class Operator:
    '''
    One overload of an operator symbol. Read-only once built.

    :param qualifiers: Kinds of preceding token this overload applies after.
                       None if it applies everywhere.
    :param solver: None for an inert operator, which is read but never
                   computed.
    '''

    __slots__ = ('symbol', 'precedence', 'arity', 'solver', 'qualifiers')

    type = TokenType.OPERATOR

    def __init__(self, symbol, precedence, arity, solver, qualifiers=None):
        for name, value in (('symbol', symbol),
                            ('precedence', precedence),
                            ('arity', arity),
                            ('solver', solver),
                            ('qualifiers', qualifiers)):
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError('Operator is immutable')

    def __reduce__(self):
        # Copies and unpickles resolve back to the registered descriptor.
        return registered, (self.symbol, self.arity)

    @property
    def inert(self):
        return self.solver is None

    def qualifies(self, last_type):
        '''
        Return True if this overload applies after a token of last_type.

        Every kind in last_type must be one of the qualifiers
        (``qualifiers & last == last``); a mere overlap is not enough. The
        two rules only differ for a last_type made of several kinds, which
        the lexer never passes.
        '''
        return self.qualifiers is None or last_type in self.qualifiers

    def solve(self, operands):
        if self.inert:
            raise InvalidOperationError(
                '{} cannot be solved'.format(self.symbol))
        return self.solver(operands)

    def __str__(self):
        return self.symbol

    def __repr__(self):
        return '<{} {!r} arity={} precedence={}>'.format(
            type(self).__name__, self.symbol, self.arity, self.precedence)


class Parenthesis:
    '''
    Group delimiter. Structural only; never part of a notation.
    '''

    __slots__ = ('symbol', 'opens')

    type = TokenType.PARENTHESIS

    def __init__(self, symbol, opens):
        object.__setattr__(self, 'symbol', symbol)
        object.__setattr__(self, 'opens', opens)

    def __setattr__(self, name, value):
        raise AttributeError('Parenthesis is immutable')

    def __reduce__(self):
        return registered, (self.symbol, None)

    def __str__(self):
        return self.symbol

    def __repr__(self):
        return '<{} {!r}>'.format(type(self).__name__, self.symbol)


BINARY = TokenType.OPERAND | TokenType.PARENTHESIS
UNARY = TokenType.EMPTY | TokenType.OPERATOR

# Higher binds tighter. Equal precedences are never popped off one another,
# so the exact values decide the shape of chained expressions.
OPERATORS = (
    Operator('-', 11, 2, _binary(operator.__sub__), qualifiers=BINARY),
    Operator('+', 12, 2, _binary(operator.__add__), qualifiers=BINARY),
    Operator('*', 21, 2, _binary(operator.__mul__)),
    Operator('%', 22, 2, _modulus),
    Operator('/', 23, 2, _binary(_divide)),
    Operator('+', 31, 1, None, qualifiers=UNARY),
    Operator('-', 32, 1, _unary(operator.__neg__), qualifiers=UNARY),
)

PARENTHESES = (
    Parenthesis('(', opens=True),
    Parenthesis(')', opens=False),
)


def _registry():
    table = {}
    for descriptor in OPERATORS:
        table.setdefault(descriptor.symbol, []).append(descriptor)
    for descriptor in PARENTHESES:
        table.setdefault(descriptor.symbol, []).append(descriptor)
    return MappingProxyType({symbol: tuple(overloads)
                             for symbol, overloads
                             in table.items()})


# Symbol to all of its descriptors, in declaration order.
SYMBOLS = _registry()

assert not [symbol
            for symbol
            in SYMBOLS
            if len(symbol) != 1]
# Alternation matching any one symbol.
PATTERN = r'(?:' + r'|'.join(map(regex.escape, SYMBOLS)) + r')'


def lookup(symbol, last_type):
    '''
    Return the descriptor for symbol read after a token of last_type.

    Returns None if the symbol is unknown, or none of its overloads applies
    after last_type.
    '''
    overloads = SYMBOLS.get(symbol, ())
    for descriptor in overloads:
        if isinstance(descriptor, Parenthesis) or \
           descriptor.qualifies(last_type):
            return descriptor
    return None


def registered(symbol, arity):
    '''
    Return the registered descriptor for symbol with arity.

    Parentheses have an arity of None.
    '''
    for descriptor in SYMBOLS.get(symbol, ()):
        if getattr(descriptor, 'arity', None) == arity:
            return descriptor
    raise LookupError('no {!r} with arity {}'.format(symbol, arity))
