import math
import unittest

from exprsolver.lang.error import SymbolError, SymbolNotFoundError, SymbolRedeclaredError
from exprsolver.lang.symbols import Constant, Function, SymbolTable


class SymbolTableTestCase(unittest.TestCase):

    def setUp(self):
        self.table = SymbolTable()

    def test_builtins(self):
        self.assertEqual(["ceil", "floor", "max", "min", "pi", "pow", "round", "sqrt"], list(self.table))
        self.assertEqual(Constant(math.pi), self.table.lookup("pi"))

        arities = {"round": 1, "ceil": 1, "floor": 1, "sqrt": 1, "pow": 2}
        for name, arity in arities.items():
            function = self.table.lookup(name)
            self.assertEqual(arity, function.min_arity, name)
            self.assertFalse(function.variadic, name)

        for name in ["min", "max"]:
            function = self.table.lookup(name)
            self.assertEqual(2, function.min_arity, name)
            self.assertTrue(function.variadic, name)

    def test_builtin_handlers(self):
        cases = {
            ("round", (2.5,)): 3,
            ("round", (-2.5,)): -3,
            ("round", (2.4,)): 2,
            ("ceil", (1.2,)): 2,
            ("floor", (-1.2,)): -2,
            ("sqrt", (16,)): 4,
            ("pow", (2, 10)): 1024,
            ("min", (4, 2, 9, 1)): 1,
            ("max", (4, 2, 9, 1)): 9
        }
        for (name, args), result in cases.items():
            self.assertEqual(result, self.table.lookup(name)(list(args)), name)

        self.assertTrue(math.isnan(self.table.lookup("sqrt")([-1.0])))
        self.assertEqual(math.inf, self.table.lookup("floor")([math.inf]))

    def test_lookup(self):
        should_fail = ["e", "Pi", "pi.x", ""]
        for case in should_fail:
            with self.assertRaises(SymbolNotFoundError, msg=case) as cm:
                self.table.lookup(case)
            self.assertEqual(case, cm.exception.name)

    def test_define(self):
        self.table.define("tau", Constant(2 * math.pi))
        self.table.define("math.e", Constant(math.e))
        self.table.define("now", Function(0, lambda args: 42.0))

        self.assertIn("tau", self.table)
        self.assertEqual(Constant(math.e), self.table.lookup("math.e"))
        self.assertEqual(42.0, self.table.lookup("now")([]))
        self.assertEqual(11, len(self.table))

    def test_redeclare(self):
        should_fail = ["pi", "min"]
        for case in should_fail:
            with self.assertRaises(SymbolRedeclaredError, msg=case) as cm:
                self.table.define(case, Constant(1.0))
            self.assertEqual(case, cm.exception.name)

        self.table.define("x", Constant(1.0))
        self.assertRaises(SymbolError, self.table.define, "x", Constant(2.0))
        self.assertEqual(Constant(1.0), self.table.lookup("x"))

    def test_tables_are_independent(self):
        self.table.define("x", Constant(1.0))
        self.assertNotIn("x", SymbolTable())


if __name__ == '__main__':
    unittest.main()
