"""Abstract syntax tree for exprsolver expressions, plus the Visitor used to traverse it.

A tree is built once by the parser and is read-only afterwards: every node is a frozen dataclass that owns its
children outright. Traversal is double dispatch: `node.accept(visitor)` calls the visitor method for the concrete node
type, and the visitor decides whether and in which order to recurse into children. All traversal state lives in the
visitor.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Expr(ABC):
    """Superclass for all expression nodes."""

    @abstractmethod
    def accept(self, visitor):
        """Calls the visitor method for this node type and returns its result."""

    @property
    def nodes(self):
        """Child nodes, in textual order."""
        return ()

    @property
    def label(self):
        """Short text describing this node, used by display."""
        return ""

    def display(self, indents=0):
        """Recursively displays tree with readable format.

        Format:
        <Expr>('<label>', nodes=[
            <Expr>('<label>', nodes=[
                ...
                <Expr>('<label>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}('{self.label}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


@dataclass(frozen=True)
class NumberExpr(Expr):
    """Literal number."""
    token: object

    def accept(self, visitor):
        return visitor.visit_number(self)

    @property
    def label(self):
        return str(self.token)


@dataclass(frozen=True)
class IdentifierExpr(Expr):
    """Identifier, possibly dotted: `foo.bar` has members (foo, bar)."""
    members: tuple

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))
        if not self.members:
            raise ValueError("identifier must have at least one member")

    def accept(self, visitor):
        return visitor.visit_identifier(self)

    @property
    def name(self):
        return ".".join(str(member) for member in self.members)

    @property
    def label(self):
        return self.name


@dataclass(frozen=True)
class BinaryExpr(Expr):
    """Binary operation in form of `lhs op rhs`."""
    lhs: Expr
    rhs: Expr
    op: object

    def __post_init__(self):
        if not self.op.kind.is_binary_operator:
            raise ValueError(f"'{self.op}' is not a binary operator")

    def accept(self, visitor):
        return visitor.visit_binary(self)

    @property
    def nodes(self):
        return self.lhs, self.rhs

    @property
    def label(self):
        return str(self.op)


@dataclass(frozen=True)
class UnaryExpr(Expr):
    """Unary operation: prefix `-x` or postfix `x!`."""
    operand: Expr
    op: object

    def __post_init__(self):
        if not self.op.kind.is_unary_operator:
            raise ValueError(f"'{self.op}' is not a unary operator")

    def accept(self, visitor):
        return visitor.visit_unary(self)

    @property
    def nodes(self):
        return (self.operand,)

    @property
    def label(self):
        return str(self.op)


@dataclass(frozen=True)
class FuncCallExpr(Expr):
    """Call expression, e.g. `max(1, 2, 3)`. arguments may be empty."""
    ident: IdentifierExpr
    arguments: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def accept(self, visitor):
        return visitor.visit_func_call(self)

    @property
    def nodes(self):
        return self.arguments

    @property
    def label(self):
        return f"{self.ident.name}()"


class Visitor(ABC):
    """Traverses an AST. Subclasses implement one method per node type."""

    @abstractmethod
    def visit_number(self, node):
        ...

    @abstractmethod
    def visit_identifier(self, node):
        ...

    @abstractmethod
    def visit_binary(self, node):
        ...

    @abstractmethod
    def visit_unary(self, node):
        ...

    @abstractmethod
    def visit_func_call(self, node):
        ...
