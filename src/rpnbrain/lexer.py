from functools import reduce
import operator

import regex

from .util import BrainError
from .brain import DEFAULT_REGISTRY


class Lexer:
    '''
    Lexer for the calculator's *regular* input grammar.

    Numbers, then whatever symbols the registry knows, their ASCII aliases,
    and the few commands. Holds no state besides the grammar built from the
    registry.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      \d+
                      |
                      (?:
                          \d{3}
                          (?:
                              _\d{3}
                          )*
                          (?:
                              _\d{1,2}
                          )?
                      )*
                  )
                  '''
    # Number. No sign; negatives are 0 x −, as on the keypad.
    # String formatting and regex is a tricky business, because of the braces.
    NUMBER = r'''
              (?:
                  # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                  {INTEGRAL}
                  (?:
                      \.
                      {FRACTIONAL}?
                  )?
              )|(?:
                  # .2, 0.2, 0.200_200
                  {INTEGRAL}?
                  \.
                  {FRACTIONAL}
              )
              '''.format(INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL)

    # Keyboard friendly spellings of the keypad labels.
    ALIASES = {
        '*': '×',
        '/': '÷',
        '-': '−',
        'sqrt': '√',
        'pi': 'π',
    }
    COMMANDS = 'clear', 'show'
    SPACE = r'\s+'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, registry=None):
        '''
        Build grammar for the symbols in registry.

        :param registry: symbol tables, defaults to the shared built-in one.
        '''
        self.registry = DEFAULT_REGISTRY if registry is None else registry
        symbols = [*self.registry.operators,
                   *self.registry.constants,
                   *type(self).ALIASES]
        self.SYMBOL = self._alternation(symbols)
        self.COMMAND = self._alternation(type(self).COMMANDS)
        # All possible lexemes.
        self.LEXEME = r'(?<number>' + type(self).NUMBER + r')|' \
                      r'(?<symbol>' + self.SYMBOL + r')|' \
                      r'(?<command>' + self.COMMAND + r')|' \
                      r'(?<space>' + type(self).SPACE + r')'

    @staticmethod
    def _alternation(words):
        # Longest first, so cos never shadows a longer symbol sharing its
        # prefix.
        words = sorted(set(words), key=len, reverse=True)
        return r'(?:' + r'|'.join(map(regex.escape, words)) + r')'

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Raises BrainError on the first bit of text that isn't a lexeme, after
        having yielded all the good lexemes before it.
        '''
        while line:
            match = regex.match(self.LEXEME, line, flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise BrainError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to the evaluator.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def canonical(self, symbol):
        '''
        Return the registry's spelling of a symbol, resolving aliases.
        '''
        return type(self).ALIASES.get(symbol, symbol)

    def matchedgroups(self, match):
        '''
        Return the lexeme's matched groups.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
