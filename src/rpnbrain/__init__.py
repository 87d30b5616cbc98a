'''
RPN calculator brain.

Keeps the program of operands, constants and operators pushed so far, and
re-evaluates all of it on every push, the way a keypad calculator's display
does. A program that can't be evaluated (empty, or an operator short of
operands) just has no result; nothing is ever consumed or thrown away.

Built-in operators are the keypad's: × ÷ + − √ cos sin, and π. The command
line front end also takes * / - sqrt pi.
'''

from .brain import (Evaluator, Registry, Program, reduce,
                    Operand, Constant, UnaryOperation, BinaryOperation)
from .cli import CLI
from .lexer import Lexer
from .util import BrainError


__all__ = ('Evaluator', 'Registry', 'Program', 'reduce',
           'Operand', 'Constant', 'UnaryOperation', 'BinaryOperation',
           'Lexer', 'CLI', 'BrainError')
