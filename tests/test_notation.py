'''
Compiler and evaluator tests
'''

from concurrent.futures import ThreadPoolExecutor
import copy
import pickle

import regex

from infixrpn import Notation, Operand, compile, evaluate
from infixrpn.symbols import lookup
from infixrpn.tokens import TokenType
from infixrpn.util import (RPNError, InvalidExpressionError,
                           InvalidOperandError, InvalidOperationError,
                           InvalidSyntaxError)

from pytest import approx, mark, raises


@mark.parametrize('expression,rpn,answer', [
    ('1+2*4-3', '124*+3-', 6),
    ('1.0+2.5*4.0-3.2/1.0', '12.54*+3.21/-', 7.8),
    ('(4/2)', '42/', 2.0),
    ('(1+2)*4-3', '12+4*3-', 9),
    ('1+2*(4-3)', '1243-*+', 3),
    ('1+((4+3)-2)*2-2', '143+2-2*+2-', 9),
    ('(1+2)*(1--2)', '12+12--*', 9),
    ('(((1+2)))*(1--2)', '12+12--*', 9),
    ('(4+3)-2', '43+2-', 5),
    ('2*-3', '23-*', -6),
    (' 1 - 2 +  3   *  ( 4  / 5 ) + + 6 - - 7  ', '12345/*6++7---', -16.4),
    ('-2*-3', '2-3-*', 6),
    ('(+2--2)*-3', '22--3-*', -12),
    ('-4.1', '4.1-', -4.1),
    ('3', '3', 3),
    ('6%(3-1)', '631-%', 0),
    ('1.0+2', '12+', 3.0),
    ('2-1.0', '21-', 1.0),
    ('4/2', '42/', 2.0),
    ('0.0+1', '01+', 1.0),
    ('-7%3', '7-3%', -1),
])
def test_compile_and_evaluate(expression, rpn, answer):
    notation = compile(expression)
    assert notation.render() == rpn
    assert str(notation) == rpn
    result = notation.evaluate()
    assert isinstance(result, Operand)
    assert result.value() == approx(answer)
    assert type(result.value()) is type(answer)


@mark.parametrize('expression,rpn,answer', [
    # Equal precedences are never popped by one another
    ('6-2-1', '621--', 5),
    # Binary + binds tighter than binary -
    ('1-2+3', '123+-', -4),
    ('8/4/2', '842//', 4.0),
])
def test_chained_operators(expression, rpn, answer):
    notation = compile(expression)
    assert notation.render() == rpn
    assert notation.evaluate().value() == answer


@mark.parametrize('expression,rpn,error,message', [
    ('2%1.4', '21.4%', InvalidOperandError,
     'invalid operand: cannot perform modulus operation with floats'),
    ('1.4%2', '1.42%', InvalidOperandError,
     'invalid operand: cannot perform modulus operation with floats'),
    ('1.4%2.3', '1.42.3%', InvalidOperandError,
     'invalid operand: cannot perform modulus operation with floats'),
    ('1 2-1', '121-', InvalidExpressionError,
     'invalid expression: not all operands consumed'),
    ('1*', '1*', InvalidExpressionError,
     'invalid expression: insufficient operands 2 != 1'),
    ('', '', InvalidExpressionError,
     'invalid expression: not all operands consumed'),
    ('1/(2-2)', '122-/', InvalidOperandError,
     'invalid operand: cannot divide by zero'),
])
def test_evaluation_errors(expression, rpn, error, message):
    notation = compile(expression)
    assert notation.render() == rpn
    with raises(error) as info:
        notation.evaluate()
    assert str(info.value) == message


@mark.parametrize('expression,error,message', [
    ('-99999999999999999999', InvalidOperandError,
     'invalid operand: cannot parse "99999999999999999999"'),
    ('(4-1', InvalidExpressionError,
     'invalid expression: unclosed parenthesis'),
    ('((1)', InvalidExpressionError,
     'invalid expression: unclosed parenthesis'),
    ('4-1)', InvalidExpressionError,
     'invalid expression: too many close parenthesis'),
    ('(1))+(2', InvalidExpressionError,
     'invalid expression: too many close parenthesis'),
    ('2=1', InvalidSyntaxError,
     "invalid syntax: no valid token found at '=1'"),
    ('3.', InvalidOperandError,
     'invalid operand: cannot parse "3."'),
])
def test_compilation_errors(expression, error, message):
    with raises(error) as info:
        compile(expression)
    assert str(info.value) == message


def test_errors_share_a_base():
    with raises(RPNError):
        compile('1 # 2')


def test_deep_nesting():
    depth = 10000
    with raises(InvalidExpressionError, match='nesting too deep'):
        compile('(' * depth + '1' + ')' * depth)


@mark.parametrize('expression,spaced', [
    ('1+2*4-3', ' 1 +2*  4\t- 3 '),
    ('(1+2)*(1--2)', '( 1 + 2 ) * ( 1 - - 2 )'),
    ('(+2--2)*-3', '(+ 2-  -2)*  -3'),
    ('1.0+2.5*4.0-3.2/1.0', '1.0 + 2.5 * 4.0 - 3.2 / 1.0'),
])
def test_whitespace_insensitive(expression, spaced):
    assert compile(spaced) == compile(expression)
    assert compile(spaced).evaluate() == compile(expression).evaluate()


def test_notation_is_immutable():
    notation = compile('1+2')
    assert isinstance(notation, tuple)
    with raises(TypeError):
        notation[0] = Operand(3)
    assert repr(notation) == "Notation('12+')"


def test_evaluate_hand_built_notation():
    plus = lookup('+', TokenType.OPERAND)
    notation = Notation([Operand(1), Operand(2), plus])
    assert notation.evaluate() == Operand(3)
    # Evaluating twice gives the same answer; nothing is consumed.
    assert notation.evaluate() == Operand(3)


def test_hand_built_notation_with_parenthesis():
    notation = Notation([Operand(1), lookup('(', TokenType.EMPTY)])
    with raises(InvalidExpressionError, match='unexpected parenthesis'):
        notation.evaluate()


def test_hand_built_notation_with_garbage():
    with raises(InvalidExpressionError, match='unexpected token'):
        Notation([Operand(1), 'x']).evaluate()


def test_hand_built_notation_with_inert_operator():
    notation = Notation([Operand(1), lookup('+', TokenType.EMPTY)])
    with raises(InvalidOperationError, match=regex.escape('+ cannot be')):
        notation.evaluate()


def test_evaluate_shortcut():
    assert evaluate('(1+2)*4-3') == Operand(9)


def test_concurrent_use():
    expressions = ['(1+2)*4-3', '2*-3', '1.0+2', '6%(3-1)'] * 50
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(evaluate, expressions))
    assert results == [evaluate(expression) for expression in expressions]


@mark.parametrize('expression', ['1+2', '(+2--2)*-3', '6%(3-1)', '1.0+2'])
def test_copy_and_pickle(expression):
    notation = compile(expression)
    for duplicate in (copy.deepcopy(notation),
                      pickle.loads(pickle.dumps(notation))):
        assert isinstance(duplicate, Notation)
        assert duplicate == notation
        assert duplicate.render() == notation.render()
        assert duplicate.evaluate() == notation.evaluate()
