from enum import Flag


class TokenType(Flag):
    '''
    Kind of lexical token.

    Also used as the context the next token is read in, which is why it is a
    flag: an operator overload qualifies for a union of preceding kinds.
    '''
    # Values pinned. EMPTY is the start-of-expression sentinel; no token
    # ever has it as its own type.
    EMPTY = 1
    OPERAND = 2
    OPERATOR = 4
    PARENTHESIS = 8
