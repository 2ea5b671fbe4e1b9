from functools import reduce
import operator

import regex

from . import symbols
from .operand import Operand
from .tokens import TokenType
from .util import InvalidSyntaxError


class Lexer:
    '''
    Lexer for the infix arithmetic grammar.

    Pull based: the caller asks for one token at a time, passing the type of
    the token it got last, since that decides what ``+`` and ``-`` mean.

    Holds no state; one instance can serve any number of callers.
    '''
    # Number, integral or decimal.
    NUMBER = r'''
              (?:
                  # 0, or no leading zeroes
                  0
                  |
                  [1-9][0-9]*
              )
              (?:
                  # Fractional part. A bare trailing dot is matched here and
                  # rejected when the operand is parsed.
                  \.
                  [0-9]*
              )?
              '''
    # Any one operator or parenthesis.
    SYMBOL = symbols.PATTERN

    # One lexeme, after optional whitespace. Symbols first.
    TOKEN = r'\s*' \
            r'(?:' \
            r'(?<symbol>' + SYMBOL + r')|' \
            r'(?<number>' + NUMBER + r')' \
            r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    _TOKEN = regex.compile(TOKEN, flags=FLAGS)

    def next_token(self, line, last_type=TokenType.EMPTY):
        '''
        Read the first token off line.

        Return that token and what is left of the line after it.
        '''
        match = type(self)._TOKEN.match(line)
        if match is None:
            raise InvalidSyntaxError(
                'no valid token found at {!r}'.format(line.strip()))
        rest = line[match.end():]
        if match.group('number') is not None:
            return Operand.parse(match.group('number')), rest
        token = symbols.lookup(match.group('symbol'), last_type)
        if token is None:
            raise InvalidSyntaxError(
                'no valid token found at {!r}'.format(line.strip()))
        return token, rest

    def lex(self, line):
        '''
        Take a line and yield all of its tokens.

        Stops with an InvalidSyntaxError on the first bad token. Tokens are
        typed in context the same way the converter does: whatever follows a
        closing parenthesis is read as if it followed an operand.
        '''
        last_type = TokenType.EMPTY
        while line.strip():
            token, line = self.next_token(line, last_type)
            yield token
            last_type = token.type
            if isinstance(token, symbols.Parenthesis) and token.opens:
                last_type = TokenType.EMPTY
            elif isinstance(token, symbols.Parenthesis):
                last_type = TokenType.OPERAND
