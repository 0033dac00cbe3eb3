"""Session control for exprsolver. Runs the whole pipeline (lexer, parser, printer, calculator) for one expression at
a time against a shared symbol table.
"""

import math

from exprsolver.lang.calculator import evaluate
from exprsolver.lang.grammar import parse
from exprsolver.lang.lexical import Lexer
from exprsolver.lang.printer import render
from exprsolver.lang.symbols import Constant, SymbolTable


class Session:
    """Governs an exprsolver session, with control over the symbols available to its expressions."""

    def __init__(self, error_handler, symbol_table=None):
        self.error_handler = error_handler
        self.symbol_table = symbol_table if symbol_table is not None else SymbolTable()

    def define(self, name, value):
        """Adds a constant to this session's symbol table. Raises SymbolRedeclaredError if name exists."""
        self.symbol_table.define(name, Constant(float(value)))

    @staticmethod
    def parse(source):
        """Returns the AST of source. Raises a ParseError if source is not exactly one expression."""
        return parse(Lexer(source))

    def run(self, source):
        """Parses and evaluates source. Returns a tuple of (canonical text, value). Will raise any errors that are
        encountered.
        """
        self.error_handler.register_source(source)  # in case error is raised

        ast = Session.parse(source)
        value = evaluate(ast, self.symbol_table)

        if not math.isfinite(value):
            self.error_handler.warn("'{}' evaluates to a non-finite value", source, diagnosis=False)

        self.error_handler.remove_source()  # error was not raised
        return render(ast), value
