"""Evaluation of exprsolver ASTs."""

from exprsolver.lang import numerical
from exprsolver.lang.error import ArgumentCountError, GenericException, LogicError, SymbolError, UndefinedError
from exprsolver.lang.lexical import Kind
from exprsolver.lang.symbols import Constant, Function
from exprsolver.lang.tree import Visitor


class Calculator(Visitor):
    """Computes the value of an AST. Every visit overwrites output with the value of the visited node, so a Calculator
    can be reused for several trees in sequence but must not be shared between concurrent traversals.
    """
    BINARY = {
        Kind.PLUS: lambda lhs, rhs: lhs + rhs,
        Kind.MINUS: lambda lhs, rhs: lhs - rhs,
        Kind.MULTIPLY: lambda lhs, rhs: lhs * rhs,
        Kind.DIVIDE: numerical.divide,
        Kind.EXPONENT: numerical.power
    }

    def __init__(self, symbol_table):
        self.symbol_table = symbol_table
        self.output = 0.0

    def visit_number(self, node):
        self.output = float(node.token.lexeme)

    def visit_identifier(self, node):
        symbol = self._lookup(node.name, Constant, "identifier")
        self.output = symbol.value

    def visit_binary(self, node):
        node.lhs.accept(self)
        lhs = self.output

        node.rhs.accept(self)
        rhs = self.output

        try:
            operation = Calculator.BINARY[node.op.kind]
        except KeyError:
            raise GenericException("'{}' is not a binary operator", str(node.op), internal=True) from None
        self.output = operation(lhs, rhs)

    def visit_unary(self, node):
        node.operand.accept(self)

        if node.op.kind is Kind.NEGATE:
            self.output = -self.output
        elif node.op.kind is Kind.FACTORIAL:
            self.output = numerical.factorial(self.output)
        else:
            raise GenericException("'{}' is not a unary operator", str(node.op), internal=True)

    def visit_func_call(self, node):
        name = node.ident.name
        function = self._lookup(name, Function, "function")

        count = len(node.arguments)
        if function.variadic and count < function.min_arity:
            raise ArgumentCountError(f"{name} expects at least {function.min_arity}, got {count}")
        elif not function.variadic and count != function.min_arity:
            raise ArgumentCountError(f"{name} expects {function.min_arity}, got {count}")

        args = []
        for arg in node.arguments:
            arg.accept(self)
            args.append(self.output)

        self.output = float(function(args))

    def _lookup(self, name, symbol_type, what):
        """Returns the symbol for name, which must be of symbol_type. Raises UndefinedError otherwise."""
        try:
            symbol = self.symbol_table.lookup(name)
        except SymbolError as e:
            raise UndefinedError(f"{what} {name}") from e

        if not isinstance(symbol, symbol_type):
            raise UndefinedError(f"{what} {name}")
        return symbol


def evaluate(ast, symbol_table):
    """Returns the value of ast, resolving names with symbol_table. Raises a CalculatorError on failure, including a
    LogicError for trees nested deeper than the interpreter's recursion limit.
    """
    calculator = Calculator(symbol_table)
    try:
        ast.accept(calculator)
    except RecursionError:
        raise LogicError("expression nested too deeply") from None
    return calculator.output
