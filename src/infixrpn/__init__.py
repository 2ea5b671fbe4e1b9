'''
Infix arithmetic expression compiler and RPN evaluator.

Compiles integers, decimals, ``+ - * / %``, unary ``+``/``-`` and nested
parentheses into Reverse Polish Notation, then evaluates that on a stack.
Not intended to be a language! No variables, no functions, no comparisons.

>>> notation = compile('(1+2)*4-3')
>>> notation.render()
'12+4*3-'
>>> notation.evaluate().value()
9
'''

from .notation import Notation, compile, evaluate
from .operand import Operand
from .util import (RPNError, InvalidOperandError, InvalidSyntaxError,
                   InvalidExpressionError, InvalidOperationError,
                   OperandTypeMismatchError)


__all__ = ('compile', 'evaluate', 'Notation', 'Operand',
           'RPNError', 'InvalidOperandError', 'InvalidSyntaxError',
           'InvalidExpressionError', 'InvalidOperationError',
           'OperandTypeMismatchError')
