from os import path
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .util import RPNError
from .lexer import Lexer
from .notation import compile


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression compiler.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.infixrpn_history'

    def dumper(self):
        '''
        Dump every token of each expression, then its notation.
        '''
        lexer = Lexer()

        def dump(line):
            for token in lexer.lex(line):
                print(token.type.name,
                      repr(str(token)),
                      getattr(token, 'arity', None),
                      sep='\t')
            print('RPN', repr(compile(line).render()), None, sep='\t')

        print('[type]\t<repr(text)>\t<arity>')
        self._foreach(dump)

    def executor(self):
        '''
        Compile and evaluate each expression, printing its value.
        '''
        self._foreach(lambda line: print(compile(line).evaluate().value()))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.TOKEN)

    def _foreach(self, handle):
        '''
        Handle each non-blank input line, reporting its errors.

        An error aborts the rest of that line only.
        '''
        for line in self.args.expressions:
            if not line.strip():
                continue
            try:
                handle(line)
            except RPNError as e:
                logger.debug('Failed on %r', line, exc_info=True)
                print(e, file=sys.stderr)
                self.failed = True

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.failed = False
        self.argument_parser = ArgumentParser(
            description='Infix arithmetic to RPN compiler and evaluator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log compilation and '
                                               'evaluation')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
        if self.failed:
            sys.exit(1)
