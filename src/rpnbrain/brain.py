from collections import namedtuple
from types import MappingProxyType
import operator
import math


class Operand(namedtuple('Operand', 'value')):
    '''
    Literal number pushed by the user.
    '''
    __slots__ = ()

    def __str__(self):
        return str(self.value)


class Constant(namedtuple('Constant', 'name value')):
    '''
    Named constant, e.g. π.

    Displays as its value, like an operand. Only the registry knows it by name.
    '''
    __slots__ = ()

    def __str__(self):
        return str(self.value)


class UnaryOperation(namedtuple('UnaryOperation', 'name fn')):
    __slots__ = ()

    def __str__(self):
        return self.name


class BinaryOperation(namedtuple('BinaryOperation', 'name fn')):
    '''
    Named two argument function.

    fn is called with the topmost operand first, i.e. as fn(right, left), so
    that 6 2 ÷ reads 6 / 2.
    '''
    __slots__ = ()

    def __str__(self):
        return self.name


# Operands evaluate to themselves; operators consume what precedes them.
VALUES = Operand, Constant


def _truediv(left, right):
    '''
    IEEE division: x/0 is ±inf, 0/0 is nan, rather than ZeroDivisionError.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _sqrt(x):
    # nan fails the comparison too, and stays nan.
    return math.sqrt(x) if x >= 0 else math.nan


def _periodic(f):
    '''
    Make a trigonometric function return nan for ±inf instead of raising.
    '''
    def wrapped(x):
        if math.isinf(x):
            return math.nan
        return f(x)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


class Registry:
    '''
    Fixed symbol to token tables, for operators and for constants.

    Read-only once built. Safe to share between evaluators.
    '''

    OPERATORS = (
        BinaryOperation('×', operator.__mul__),
        BinaryOperation('÷', lambda right, left: _truediv(left, right)),
        BinaryOperation('+', operator.__add__),
        BinaryOperation('−', lambda right, left: left - right),
        UnaryOperation('√', _sqrt),
        UnaryOperation('cos', _periodic(math.cos)),
        UnaryOperation('sin', _periodic(math.sin)),
    )

    CONSTANTS = (
        Constant('π', math.pi),
    )

    def __init__(self, operators=None, constants=None):
        '''
        Learn operators (by display name) and constants (by name).

        :param operators: operation tokens, defaults to the built-in ones.
        :param constants: constant tokens, defaults to the built-in ones.
        '''
        if operators is None:
            operators = type(self).OPERATORS
        if constants is None:
            constants = type(self).CONSTANTS
        self._operators = {str(op): op for op in operators}
        self._constants = {constant.name: constant for constant in constants}
        if not self._operators and not self._constants:
            raise ValueError('Refusing to build an empty registry')
        self.operators = MappingProxyType(self._operators)
        self.constants = MappingProxyType(self._constants)

    def lookup_operator(self, name):
        return self._operators.get(name)

    def lookup_constant(self, name):
        return self._constants.get(name)


DEFAULT_REGISTRY = Registry()


class Program:
    '''
    Tokens in the order they were pushed.

    Append only. Evaluation works on snapshots, never on the program itself.
    '''

    def __init__(self):
        self._ops = []

    def append(self, op):
        self._ops.append(op)

    def snapshot(self):
        return tuple(self._ops)

    def clear(self):
        self._ops.clear()

    def __len__(self):
        return len(self._ops)

    def __str__(self):
        return ' '.join(map(str, self._ops))


# Operands an operation takes off the program.
ARITY = {
    UnaryOperation: 1,
    BinaryOperation: 2,
}


def reduce(ops):
    '''
    Reduce ops, from the end, to a single value.

    Return (result, remaining ops). An operator pops its operands by reducing
    what precedes it. If any of them can't be had, the result is None and the
    ops are returned exactly as given, not partly consumed.

    Walks an index down the ops, keeping its own stack of operators still
    waiting for operands, so program length isn't bound by the recursion
    limit.
    '''
    ops = tuple(ops)
    # (operation, operands popped so far), innermost last.
    waiting = []
    end = len(ops)
    while end:
        end -= 1
        op = ops[end]
        if not isinstance(op, VALUES):
            if type(op) not in ARITY:
                break
            waiting.append((op, []))
            continue
        value = op.value
        while waiting:
            operation, operands = waiting[-1]
            operands.append(value)
            if len(operands) < ARITY[type(operation)]:
                break
            waiting.pop()
            # First popped is the right hand side.
            value = operation.fn(*operands)
        else:
            return value, ops[:end]
    # Short of operands: every operator waiting fails, and so does the whole.
    return None, ops


class Evaluator:
    '''
    RPN calculator brain.

    Every push re-evaluates the whole program and returns the result, or None
    if the program doesn't reduce (empty, or an operator short of operands).
    Unknown symbols are ignored. Nothing here raises on bad input.
    '''

    def __init__(self, registry=None):
        '''
        Create evaluator with an empty program.

        :param registry: symbol tables, defaults to the shared built-in one.
        '''
        self.registry = DEFAULT_REGISTRY if registry is None else registry
        self._program = Program()

    @property
    def program(self):
        return self._program.snapshot()

    def evaluate(self):
        '''
        Reduce the whole program. Leftover ops after the result are ignored.
        '''
        result, _ = reduce(self._program.snapshot())
        return result

    def push_operand(self, value):
        self._program.append(Operand(float(value)))
        return self.evaluate()

    def push_constant(self, name):
        constant = self.registry.lookup_constant(name)
        if constant is not None:
            self._program.append(constant)
        return self.evaluate()

    def push_operator(self, name):
        operation = self.registry.lookup_operator(name)
        if operation is not None:
            self._program.append(operation)
        return self.evaluate()

    def clear(self):
        '''
        Forget the whole program.
        '''
        self._program.clear()

    def __len__(self):
        return len(self._program)

    def __str__(self):
        return str(self._program)
