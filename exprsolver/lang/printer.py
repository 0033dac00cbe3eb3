"""Canonical text rendering of exprsolver ASTs.

The output is whitespace-normalized and never contains parentheses other than those of function calls: grouping is
implied by precedence only. Rendering is therefore canonical, not lossless: `(2 + 3) * 4` renders as `2 + 3 * 4`.
"""

from exprsolver.lang.tree import Visitor


class Printer(Visitor):
    """Appends the text of every visited node to output."""

    def __init__(self):
        self.output = ""

    def visit_number(self, node):
        self.output += str(node.token)

    def visit_identifier(self, node):
        self.output += node.name

    def visit_binary(self, node):
        node.lhs.accept(self)
        self.output += f" {str(node.op.kind)} "
        node.rhs.accept(self)

    def visit_unary(self, node):
        if node.op.kind.is_left_associative:  # prefix
            self.output += str(node.op)
            node.operand.accept(self)
        else:
            node.operand.accept(self)
            self.output += str(node.op)

    def visit_func_call(self, node):
        node.ident.accept(self)
        self.output += "("
        for idx, arg in enumerate(node.arguments):
            if idx:
                self.output += ", "
            arg.accept(self)
        self.output += ")"


def render(ast):
    """Returns the canonical text of ast."""
    printer = Printer()
    ast.accept(printer)
    return printer.output
