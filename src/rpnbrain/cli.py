from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import traceback

from prompt_toolkit import PromptSession

from .util import BrainError, wrap_user_errors
from .brain import Evaluator
from .lexer import Lexer


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # No persistent history; nothing else
                                    # outlives the session either.
                                    history=None,
                                    rprompt=None,
                                    bottom_toolbar=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=True,
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line front end to the evaluator.

    Plays the keypad and display: numbers and symbols typed are pushed one at
    a time, and every push prints the evaluator's current result.
    '''

    DEFAULT_PROMPT = '> '
    # What the display shows when there is no result.
    DEFAULT_ABSENT = '0'

    def dumper(self):
        '''
        Dump all lexemes: kind, text, and what they'd push.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(text)>\t<pushes>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                if not lexer.isfeedable(match):
                    continue
                groups = lexer.matchedgroups(match)
                kind, = groups.keys()
                print(kind,
                      repr(match.group(0)),
                      self._describe(lexer, groups),
                      sep='\t')

    def _describe(self, lexer, groups):
        if 'number' in groups:
            return self._iconvert(groups['number'])
        elif 'symbol' in groups:
            symbol = lexer.canonical(groups['symbol'])
            token = lexer.registry.lookup_operator(symbol)
            if token is None:
                token = lexer.registry.lookup_constant(symbol)
            return type(token).__name__ + ' ' + symbol
        return None

    def executor(self):
        '''
        Run evaluator (RPN calculator), printing every result.
        '''
        evaluator = Evaluator()
        lexer = Lexer(evaluator.registry)
        commands = {
            'clear': evaluator.clear,
            'show': lambda: print(evaluator),
        }
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if not lexer.isfeedable(match):
                        continue
                    groups = lexer.matchedgroups(match)
                    if 'command' in groups:
                        commands[groups['command']]()
                    else:
                        self.display(self.feed(evaluator, lexer, groups))
            # Abort entire rest of line, makes sense anyway
            except BrainError as e:
                print(e.args[0], file=stderr)
                if self.args.verbose:
                    traceback.print_exc(file=stderr)

    def feed(self, evaluator, lexer, groups):
        '''
        Push one lexeme onto evaluator, returning its result.

        :param groups: matched groups of a number or symbol lexeme.
        '''
        if 'number' in groups:
            return evaluator.push_operand(self._iconvert(groups['number']))
        symbol = lexer.canonical(groups['symbol'])
        if symbol in evaluator.registry.constants:
            return evaluator.push_constant(symbol)
        return evaluator.push_operator(symbol)

    @wrap_user_errors('Cannot convert {1}')
    def _iconvert(self, number):
        '''
        Convert number text to a float.
        '''
        return float(number.replace('_', ''))

    def display(self, result):
        '''
        Print result, or the absent sentinel if there is none.
        '''
        if result is None:
            print(self.args.absent)
        else:
            print(result)

    def symbols(self):
        '''
        Print all known symbols.
        '''
        lexer = Lexer()
        print('operators:', *lexer.registry.operators, file=stderr)
        print('constants:', *lexer.registry.constants, file=stderr)
        print('aliases:', *('{}={}'.format(alias, symbol)
                            for alias, symbol
                            in Lexer.ALIASES.items()), file=stderr)
        print('commands:', *Lexer.COMMANDS, file=stderr)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='show tracebacks on bad input')
        self.argument_parser.add_argument('-a', '--absent',
                                          default=self.DEFAULT_ABSENT,
                                          help='text shown when there is '
                                               'no result')
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
                                      ('-D', '--dump', self.dumper),
                                      ('-H', '--symbols', self.symbols)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
