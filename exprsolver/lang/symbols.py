"""Symbol table for exprsolver: maps dotted names to constants or callable functions."""

import math
from dataclasses import dataclass
from functools import reduce

from exprsolver.lang import numerical
from exprsolver.lang.error import SymbolNotFoundError, SymbolRedeclaredError


@dataclass(frozen=True)
class Constant:
    """Named constant, e.g. `pi`."""
    value: float


@dataclass(frozen=True)
class Function:
    """Callable function. handler takes a list of floats and returns a float. If variadic, min_arity is only the
    minimum number of arguments; otherwise it is the exact number.
    """
    min_arity: int
    handler: object
    variadic: bool = False

    def __call__(self, args):
        return self.handler(args)


def _fold(func):
    """Handler that folds func pairwise over all arguments."""
    return lambda args: reduce(func, args)


BUILTINS = {
    "pi": Constant(math.pi),

    "round": Function(1, lambda args: numerical.round_half_away(args[0])),
    "ceil": Function(1, lambda args: numerical.ceil(args[0])),
    "floor": Function(1, lambda args: numerical.floor(args[0])),
    "sqrt": Function(1, lambda args: numerical.sqrt(args[0])),
    "pow": Function(2, lambda args: numerical.power(args[0], args[1])),

    "min": Function(2, _fold(min), variadic=True),
    "max": Function(2, _fold(max), variadic=True)
}


class SymbolTable:
    """Holds the symbols available to an evaluation session. Pre-seeded with BUILTINS; symbols can be added but never
    replaced or removed. There is no locking: do not define concurrently with lookups.
    """

    def __init__(self):
        self._table = dict(BUILTINS)

    def define(self, name, symbol):
        """Adds symbol under name. Raises SymbolRedeclaredError if name is already defined."""
        if name in self._table:
            raise SymbolRedeclaredError(name)
        self._table[name] = symbol

    def lookup(self, name):
        """Returns the symbol for name. Raises SymbolNotFoundError if there is none."""
        try:
            return self._table[name]
        except KeyError:
            raise SymbolNotFoundError(name) from None

    def __contains__(self, name):
        return name in self._table

    def __iter__(self):
        return iter(sorted(self._table))

    def __len__(self):
        return len(self._table)

    def __repr__(self):
        return f"SymbolTable({', '.join(self)})"
