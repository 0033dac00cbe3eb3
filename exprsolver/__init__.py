"""Arithmetic expression solver.

Reads a single-line expression made of numbers, named constants, function calls and operators, and produces both a
canonical re-serialization of the expression and its numeric value. Basic program flow:
    1. Lexer: splits the source into a lazy stream of tokens (see exprsolver/lang/lexical.py)
    2. Parser: builds an AST from the tokens with recursive descent and precedence climbing
        - For the grammar rules, see exprsolver/lang/grammar.py
    3. Visitors: two independent passes walk the same tree
        - Printer renders canonical text (exprsolver/lang/printer.py)
        - Calculator computes the value, resolving names with a SymbolTable (exprsolver/lang/calculator.py)

"""

from exprsolver.lang.calculator import Calculator, evaluate
from exprsolver.lang.grammar import Parser, parse
from exprsolver.lang.lexical import Kind, Lexer, Token, tokenize
from exprsolver.lang.printer import Printer, render
from exprsolver.lang.symbols import Constant, Function, SymbolTable

__all__ = [
    "Calculator", "evaluate",
    "Parser", "parse",
    "Kind", "Lexer", "Token", "tokenize",
    "Printer", "render",
    "Constant", "Function", "SymbolTable"
]
