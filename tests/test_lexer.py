'''
Lexer tests
'''

import regex

from rpnbrain.util import BrainError
from rpnbrain.lexer import Lexer
from rpnbrain.brain import Registry, UnaryOperation

from pytest import raises


def kinds(lexer, line):
    return [(kind, text)
            for match in lexer.lex(line)
            if lexer.isfeedable(match)
            for kind, text in lexer.matchedgroups(match).items()]


def test_numbers_and_symbols():
    l = Lexer()
    assert kinds(l, '3 4.5 + π cos') == [('number', '3'),
                                         ('number', '4.5'),
                                         ('symbol', '+'),
                                         ('symbol', 'π'),
                                         ('symbol', 'cos')]


def test_number_forms():
    l = Lexer()
    assert kinds(l, '1_200 .5 7.') == [('number', '1_200'),
                                       ('number', '.5'),
                                       ('number', '7.')]


def test_no_space_needed():
    l = Lexer()
    assert kinds(l, '6 2÷') == [('number', '6'),
                                ('number', '2'),
                                ('symbol', '÷')]


def test_aliases():
    l = Lexer()
    assert [l.canonical(text)
            for _, text in kinds(l, '* / - sqrt pi')] == ['×', '÷', '−',
                                                          '√', 'π']


def test_commands():
    l = Lexer()
    assert kinds(l, 'clear show') == [('command', 'clear'),
                                      ('command', 'show')]


def test_unknown_symbol():
    l = Lexer()
    with raises(BrainError, match=regex.escape("Couldn't lex %")):
        list(l.lex('3 %'))


def test_good_lexemes_before_bad():
    l = Lexer()
    lexemes = l.lex('3 4 tan')
    assert next(lexemes).group(0) == '3'
    assert next(lexemes).group(0) == ' '
    assert next(lexemes).group(0) == '4'
    assert next(lexemes).group(0) == ' '
    with raises(BrainError, match="Couldn't lex tan"):
        next(lexemes)


def test_grammar_follows_registry():
    l = Lexer(Registry(operators=[UnaryOperation('neg', float.__neg__)],
                       constants=[]))
    assert kinds(l, '2 neg') == [('number', '2'), ('symbol', 'neg')]
    with raises(BrainError):
        list(l.lex('2 cos'))
