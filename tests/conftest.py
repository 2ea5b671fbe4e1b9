from pytest import Item, fixture

from infixrpn.cli import CLI
from infixrpn.lexer import Lexer


@fixture
def lexer():
    return Lexer()


@fixture
def cli():
    return CLI()


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Only called when the assertion pass hook is enabled in the ini file.
    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))
