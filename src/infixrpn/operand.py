import math

import regex

from .tokens import TokenType
from .util import (InvalidOperandError, OperandTypeMismatchError,
                   wrap_user_errors)


# Signed 64-bit integer range
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1
# Digits, optionally followed by a dot and more digits. Stricter than what
# int() and float() accept on their own (no signs, underscores, exponents).
LITERAL = regex.compile(r'[0-9]+(?:\.[0-9]*)?', flags=regex.VERSION1)


class Operand:
    '''
    Immutable numeric value, either an integer or a float.

    The Python type of the wrapped value is the tag: an integer stays an
    integer until it meets a float, so ``0.0`` is still float-typed.
    '''

    __slots__ = ('_value',)

    type = TokenType.OPERAND

    def __init__(self, value):
        # bool is an int subclass; not a number here.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise OperandTypeMismatchError(
                'expected int or float, received {}'.format(
                    type(value).__name__))
        if isinstance(value, int) and not INT_MIN <= value <= INT_MAX:
            raise InvalidOperandError('integer overflow: {}'.format(value))
        object.__setattr__(self, '_value', value)

    def __setattr__(self, name, value):
        raise AttributeError('Operand is immutable')

    def __reduce__(self):
        # Rebuilt through the constructor; slot state can't be set back.
        return type(self), (self._value,)

    @classmethod
    @wrap_user_errors('cannot parse "{1}"', error=InvalidOperandError)
    def parse(cls, text):
        '''
        Parse a numeric literal.

        A literal with a dot that isn't its last character is a float,
        anything else must be an integer. ``2.`` is therefore rejected.
        '''
        if LITERAL.fullmatch(text) is None:
            raise ValueError(text)
        if '.' in text and not text.endswith('.'):
            value = float(text)
            if math.isinf(value):
                raise OverflowError(text)
        else:
            value = int(text, 10)
            if not INT_MIN <= value <= INT_MAX:
                raise OverflowError(text)
        return cls(value)

    def value(self):
        return self._value

    @property
    def is_float(self):
        return isinstance(self._value, float)

    def as_float(self):
        '''
        Return this operand promoted to a float.
        '''
        if self.is_float:
            return self
        return type(self)(float(self._value))

    def __str__(self):
        if not self.is_float:
            return str(self._value)
        # Shortest round-trip form, without the redundant trailing .0
        text = repr(self._value)
        if text.endswith('.0'):
            text = text[:-2]
        return text

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self._value)

    def __eq__(self, other):
        if not isinstance(other, Operand):
            return NotImplemented
        return (self.is_float == other.is_float and
                self._value == other._value)

    def __hash__(self):
        return hash((self.is_float, self._value))
