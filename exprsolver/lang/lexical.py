"""Lexical analysis for exprsolver. Converts a single-line arithmetic expression into a lazy stream of Tokens.

At each position the lexer applies the following rules, in order:

```
<whitespace>  ::= skipped
<number>      ::= <digit>+ ["." <digit>*] | "." <digit>+     ; at most one "."; stops at a second "."
<identifier>  ::= <letter> (<letter> | <digit>)*              ; no underscores
<punctuation> ::= "+" | "-" | "*" | "/" | "^" | "!" | "," | "." | "(" | ")"
<invalid>     ::= any other single character
```

The lexer never fails: characters it cannot classify become INVALID tokens and are rejected by the parser.
"""

from dataclasses import dataclass, field
from enum import Enum


class Kind(Enum):
    """Kinds of token that the lexer can recognize. Operator metadata is derived from the kind, not stored per token."""
    NUMBER = "<number>"
    IDENTIFIER = "<identifier>"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    EXPONENT = "^"
    NEGATE = "<negate>"  # shares "-" with MINUS, see __str__
    FACTORIAL = "!"
    COMMA = ","
    PERIOD = "."
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    INVALID = "<invalid>"

    @property
    def is_operator(self):
        return self in _OPERATORS

    @property
    def is_binary_operator(self):
        """In `2 + -x`, + is a binary operator, whereas - is a unary operator applying only to x."""
        return self in _BINARY

    @property
    def is_unary_operator(self):
        return self in _UNARY

    @property
    def is_left_associative(self):
        """`2 + 3 + 4` is evaluated as `(2 + 3) + 4`."""
        return self in _LEFT_ASSOCIATIVE

    @property
    def is_right_associative(self):
        """`2 ^ 3 ^ 4` is evaluated as `2 ^ (3 ^ 4)`."""
        return self in _RIGHT_ASSOCIATIVE

    @property
    def precedence(self):
        """Higher precedence binds tighter. Non-operators have precedence 0."""
        return _PRECEDENCE.get(self, 0)

    @classmethod
    def from_char(cls, char):
        """Returns the punctuation kind spelled by char, or None. "-" is always MINUS: NEGATE is decided by the parser."""
        return _PUNCTUATION.get(char)

    def __str__(self):
        if self is Kind.NEGATE:
            return "-"
        return self.value


_BINARY = frozenset({Kind.PLUS, Kind.MINUS, Kind.MULTIPLY, Kind.DIVIDE, Kind.EXPONENT})
_UNARY = frozenset({Kind.NEGATE, Kind.FACTORIAL})
_OPERATORS = _BINARY | _UNARY

_LEFT_ASSOCIATIVE = frozenset({Kind.PLUS, Kind.MINUS, Kind.MULTIPLY, Kind.DIVIDE, Kind.NEGATE})
_RIGHT_ASSOCIATIVE = frozenset({Kind.EXPONENT, Kind.FACTORIAL})

_PRECEDENCE = {
    Kind.PLUS: 1, Kind.MINUS: 1,
    Kind.MULTIPLY: 2, Kind.DIVIDE: 2,
    Kind.EXPONENT: 3,
    Kind.NEGATE: 4, Kind.FACTORIAL: 4
}

_PUNCTUATION = {
    kind.value: kind for kind in Kind
    if len(kind.value) == 1
}


@dataclass(frozen=True)
class Token:
    """A lexical symbol. lexeme is None for punctuation kinds, whose text is implied by kind. start is the column of
    the token in its source and is only used for diagnostics.
    """
    kind: Kind
    lexeme: str = None
    start: int = field(default=-1, compare=False)

    def __str__(self):
        return self.lexeme if self.lexeme is not None else str(self.kind)


class Lexer:
    """Iterable over the tokens of source. Each iteration scans source from the beginning."""

    def __init__(self, source):
        self.source = source

    def __iter__(self):
        return tokenize(self.source)

    def __repr__(self):
        return f"Lexer('{self.source}')"


def tokenize(source):
    """Lazily yields the Tokens of source."""
    pos = 0
    while pos < len(source):
        char = source[pos]

        if char.isspace():
            pos += 1

        elif char.isdigit() or (char == "." and source[pos + 1:pos + 2].isdigit()):
            end = _scan_number(source, pos)
            yield Token(Kind.NUMBER, source[pos:end], pos)
            pos = end

        elif char.isalpha():
            end = pos + 1
            while end < len(source) and (source[end].isalpha() or source[end].isdigit()):
                end += 1
            yield Token(Kind.IDENTIFIER, source[pos:end], pos)
            pos = end

        elif Kind.from_char(char) is not None:
            yield Token(Kind.from_char(char), start=pos)
            pos += 1

        else:
            yield Token(Kind.INVALID, char, pos)
            pos += 1


def _scan_number(source, pos):
    """Returns the end of the number literal starting at pos. Consumes digits and at most one period."""
    decimal = False
    while pos < len(source):
        char = source[pos]
        if not char.isdigit():
            if char == "." and not decimal:
                decimal = True
            else:
                break
        pos += 1
    return pos
