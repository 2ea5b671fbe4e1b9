'''
Infix to RPN compiler, and the RPN evaluator.
'''

import logging

from .lexer import Lexer
from .operand import Operand
from .symbols import Operator, Parenthesis
from .tokens import TokenType
from .util import InvalidExpressionError, RPNError


logger = logging.getLogger(__name__)

_LEXER = Lexer()


class Notation(tuple):
    '''
    Expression in Reverse Polish Notation: operands and operators only,
    each operator after its operands.

    Immutable. Usually obtained from :func:`compile`, but any sequence of
    tokens can be wrapped and evaluated; it is checked as it runs.
    '''

    def render(self):
        '''
        Concatenate every token's text, without separators.
        '''
        return ''.join(map(str, self))

    __str__ = render

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.render())

    def evaluate(self):
        '''
        Run the notation on an operand stack and return the single result.
        '''
        stack = []
        for token in self:
            if isinstance(token, Operand):
                stack.append(token)
            elif isinstance(token, Operator):
                if len(stack) < token.arity:
                    raise InvalidExpressionError(
                        'insufficient operands {} != {}'.format(token.arity,
                                                                len(stack)))
                # Operands in their original left to right order
                operands = stack[len(stack) - token.arity:]
                del stack[len(stack) - token.arity:]
                stack.append(token.solve(operands))
            elif isinstance(token, Parenthesis):
                raise InvalidExpressionError(
                    'unexpected parenthesis {!r}'.format(str(token)))
            else:
                raise InvalidExpressionError(
                    'unexpected token {!r}'.format(token))
        if len(stack) != 1:
            raise InvalidExpressionError('not all operands consumed')
        logger.debug('%s evaluated to %r', self.render(), stack[0])
        return stack[0]


def _convert(line, depth):
    '''
    Shunting-yard over one nesting level of line.

    Recurses once per open parenthesis. Return the notation of this level
    and what is left of the line after its closing parenthesis.
    '''
    output = []
    operators = []
    last_type = TokenType.EMPTY
    while line.strip():
        token, line = _LEXER.next_token(line, last_type)
        last_type = token.type
        if isinstance(token, Operand):
            output.append(token)
        elif isinstance(token, Operator):
            if token.inert:
                continue
            while operators and operators[-1].precedence > token.precedence:
                output.append(operators.pop())
            operators.append(token)
        elif token.opens:
            group, line = _convert(line, depth + 1)
            output.extend(group)
            # A group reads as a single operand from outside.
            last_type = TokenType.OPERAND
        else:
            if not depth:
                raise InvalidExpressionError('too many close parenthesis')
            break
    else:
        if depth:
            raise InvalidExpressionError('unclosed parenthesis')
    output.extend(reversed(operators))
    return output, line


def compile(expression):
    '''
    Compile an infix expression to Reverse Polish Notation.

    :raises RPNError: The expression does not lex, or is malformed.
    '''
    try:
        output, _ = _convert(expression, 0)
    except RecursionError as e:
        raise InvalidExpressionError('parenthesis nesting too deep') from e
    except RPNError as e:
        logger.debug('Cannot compile %r: %s', expression, e)
        raise
    notation = Notation(output)
    logger.debug('%r compiled to %s', expression, notation)
    return notation


def evaluate(expression):
    '''
    Compile and evaluate an infix expression in one go.
    '''
    return compile(expression).evaluate()
