import math
import unittest

from exprsolver.lang.calculator import Calculator, evaluate
from exprsolver.lang.error import (ArgumentCountError, CalculatorError, GenericException, LogicError,
                                   SymbolNotFoundError, UndefinedError)
from exprsolver.lang.grammar import parse
from exprsolver.lang.lexical import Kind, Lexer, Token
from exprsolver.lang.symbols import Constant, Function, SymbolTable
from exprsolver.lang.tree import NumberExpr, UnaryExpr


def solve(source, table=None):
    return evaluate(parse(Lexer(source)), table if table is not None else SymbolTable())


class CalculatorTestCase(unittest.TestCase):

    def test_arithmetic(self):
        cases = {
            "42": 42,
            ".5": 0.5,
            "1.": 1,
            "2 - 3 * 4": -10,
            "(2 - 3) * 4": -4,
            "10 - 3 - 2": 5,
            "2 ^ 3 ^ 2": 512,
            "2 ^ (3 ^ 2)": 512,
            "(2 ^ 3) ^ 2": 64,
            "8 / 4 / 2": 1,
            "-2 ^ 2": 4,  # negation binds to the primary
            "- - 3": 3,
            "2 - -3": 5,
            "5 !": 120,
            "3! * 2": 12,
            "2 ^ 3!": 64
        }
        for case, result in cases.items():
            self.assertEqual(result, solve(case), case)

    def test_ieee_semantics(self):
        self.assertEqual(math.inf, solve("1 / 0"))
        self.assertEqual(-math.inf, solve("-1 / 0"))
        self.assertEqual(math.inf, solve("0 ^ -1"))
        self.assertEqual(math.inf, solve("171!"))
        self.assertTrue(math.isnan(solve("0 / 0")))
        self.assertTrue(math.isnan(solve("-8 ^ 0.5")))
        self.assertTrue(math.isnan(solve("sqrt(-1)")))

    def test_constants(self):
        self.assertAlmostEqual(3.14159265358979, solve("pi"))
        self.assertAlmostEqual(2 * math.pi, solve("2 * pi"))

        table = SymbolTable()
        table.define("math.e", Constant(math.e))
        self.assertAlmostEqual(math.e, solve("math.e", table))
        self.assertAlmostEqual(math.e ** 2, solve("math.e ^ 2", table))

    def test_functions(self):
        cases = {
            "min(4, 2, 9, 1)": 1,
            "max(4, 2, 9, 1)": 9,
            "min(3, 7)": 3,
            "max(1, 2, 3, 4, 5)": 5,
            "round(2.5)": 3,
            "round(-2.5)": -3,
            "round(0.49999999999999994)": 0,
            "round(4503599627370497)": 4503599627370497,
            "ceil(1.2)": 2,
            "floor(1.8)": 1,
            "sqrt(16)": 4,
            "pow(2, 10)": 1024,
            "max(pow(2, 3), sqrt(81), 1 + 2 * 3)": 9
        }
        for case, result in cases.items():
            self.assertEqual(result, solve(case), case)

    def test_zero_argument_call(self):
        table = SymbolTable()
        table.define("now", Function(0, lambda args: 42.0))
        self.assertEqual(42, solve("now()", table))
        self.assertEqual(43, solve("now() + 1", table))
        self.assertRaises(ArgumentCountError, solve, "now(1)", table)

    def test_argument_order(self):
        seen = []

        def record(args):
            seen.append(args)
            return args[0]

        table = SymbolTable()
        table.define("first", Function(2, record, variadic=True))
        self.assertEqual(1, solve("first(1, 2, 3 + 4)", table))
        self.assertEqual([[1.0, 2.0, 7.0]], seen)

    def test_undefined(self):
        cases = {
            "foo": "identifier foo",
            "foo.bar": "identifier foo.bar",
            "1 + round": "identifier round",  # a function is not a constant
            "foo(1)": "function foo",
            "pi()": "function pi",  # a constant is not a function
            "max(1, bar)": "identifier bar"
        }
        for case, what in cases.items():
            with self.assertRaises(UndefinedError, msg=case) as cm:
                solve(case)
            self.assertEqual(what, cm.exception.what, case)

    def test_undefined_cause(self):
        with self.assertRaises(UndefinedError) as cm:
            solve("foo")
        self.assertIsInstance(cm.exception.__cause__, SymbolNotFoundError)

    def test_argument_count(self):
        should_fail = ["min(5)", "max()", "sqrt()", "sqrt(1, 2)", "pow(2)", "pow(1, 2, 3)", "round(1, 2)"]
        for case in should_fail:
            self.assertRaises(ArgumentCountError, solve, case)

        with self.assertRaises(ArgumentCountError) as cm:
            solve("min(5)")
        self.assertIn("at least 2", cm.exception.message)

        # arity is checked before any argument is evaluated
        self.assertRaises(ArgumentCountError, solve, "sqrt(foo, 1)")

    def test_factorial(self):
        should_fail = ["0 !", "-3!", "2.5!", "(0 - 1)!", "(1 / 0)!"]
        for case in should_fail:
            with self.assertRaises(LogicError, msg=case):
                solve(case)

        self.assertEqual(1, solve("1!"))
        self.assertEqual(3628800, solve("10!"))

    def test_error_families(self):
        should_raise = ["foo", "min(1)", "0!"]
        for case in should_raise:
            self.assertRaises(CalculatorError, solve, case)

    def test_accumulator(self):
        calculator = Calculator(SymbolTable())
        self.assertEqual(0, calculator.output)

        parse(Lexer("2 * 3")).accept(calculator)
        self.assertEqual(6, calculator.output)

        parse(Lexer("7")).accept(calculator)  # overwritten, not merged
        self.assertEqual(7, calculator.output)

    def test_nesting_limit(self):
        node = NumberExpr(Token(Kind.NUMBER, "1"))
        for _ in range(5000):  # built iteratively, deeper than the parser would allow
            node = UnaryExpr(node, Token(Kind.NEGATE))

        with self.assertRaises(LogicError):
            evaluate(node, SymbolTable())

    def test_invalid_operator(self):
        node = UnaryExpr(NumberExpr(Token(Kind.NUMBER, "1")), Token(Kind.NEGATE))
        object.__setattr__(node, "op", Token(Kind.PLUS))  # bypass the invariant check
        with self.assertRaises(GenericException) as cm:
            evaluate(node, SymbolTable())
        self.assertTrue(cm.exception.internal)


if __name__ == '__main__':
    unittest.main()
