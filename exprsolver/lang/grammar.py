"""Parser for exprsolver expressions: recursive descent for the structure, precedence climbing for binary operators.

Formally, the accepted grammar can be defined as

```
<expr>          ::= <factor> { <binary-op> <expr> }     ; precedence climbed, see Parser._climb
<factor>        ::= <primary> [ <postfix-op> ]          ; postfix-op must be right associative ("!")
<primary>       ::= <number>
                  | <ident-or-call>
                  | "(" <expr> ")"
                  | "-" <primary>                       ; negation, distinct from binary minus
                  | <prefix-op> <primary>
<ident-or-call> ::= <ident> [ "(" [ <arg-list> ] ")" ]
<ident>         ::= <identifier> { "." <identifier> }
<arg-list>      ::= <expr> { "," <expr> }
```

Binary operators group by precedence (+ - lowest, then * /, then ^) and associativity: `10 - 3 - 2` is
`(10 - 3) - 2`, whereas `2 ^ 3 ^ 4` is `2 ^ (3 ^ 4)`. Parentheses only affect tree shape; they leave no node behind.
"""

from exprsolver.lang.error import ExpectedError, ParseError, UnexpectedError
from exprsolver.lang.lexical import Kind, Token
from exprsolver.lang.tree import BinaryExpr, FuncCallExpr, IdentifierExpr, NumberExpr, UnaryExpr


class Parser:
    """Parses a stream of Tokens into an AST, with one token of lookahead. Single use: parse consumes the stream."""

    def __init__(self, tokens, source=None):
        """tokens is any iterable of Tokens, usually a Lexer. source is only used for error diagnostics."""
        if source is None:
            source = getattr(tokens, "source", "")

        self.source = source
        self._tokens = iter(tokens)
        self.current = next(self._tokens, None)

    def parse(self):
        """Parses the whole token stream and returns the root node. Input left over after the expression is an error,
        and so is nesting deeper than the interpreter's recursion limit.
        """
        try:
            expr = self.expression()
        except RecursionError:
            start = self.current.start if self.current is not None else len(self.source)
            raise ParseError("expression nested too deeply at '{1}'", str(self.current or "end of input"), self.source,
                             max(start, 0)) from None
        if self.current is not None:
            raise self._unexpected(self.current)
        return expr

    # ---------------------------------------------------------------------------------------------------------------
    # Expressions

    def expression(self):
        """<expr> ::= <factor> { <binary-op> <expr> }"""
        return self._climb(self.factor(), 1)

    def _climb(self, lhs, precedence):
        """Precedence climbing: folds binary operators of at least precedence into lhs."""
        left = lhs
        while self.current is not None and self.current.kind.is_binary_operator \
                and self.current.kind.precedence >= precedence:
            op = self.move()
            right = self.factor()

            # right-extend while the next operator binds tighter, or equally tight but to the right
            while self.current is not None and self.current.kind.is_binary_operator:
                kind = self.current.kind
                if not (kind.precedence > op.kind.precedence or
                        (kind.is_right_associative and kind.precedence == op.kind.precedence)):
                    break
                right = self._climb(right, kind.precedence)

            left = BinaryExpr(left, right, op)
        return left

    def factor(self):
        """<factor> ::= <primary> [ <postfix-op> ]"""
        lhs = self.primary()

        if self.current is None or not self.current.kind.is_unary_operator:
            return lhs

        if not self.current.kind.is_right_associative:  # only postfix operators are valid here
            raise self._unexpected(self.current)

        return UnaryExpr(lhs, self.move())

    def primary(self):
        """<primary> ::= <number> | <ident-or-call> | "(" <expr> ")" | "-" <primary> | <prefix-op> <primary>"""
        if self.current is None:
            raise ExpectedError("expression", self.source, len(self.source))

        kind = self.current.kind
        if kind is Kind.NUMBER:
            return self.number()

        elif kind is Kind.IDENTIFIER:
            ident = self.identifier()
            if not self.accept(Kind.OPEN_PAREN):
                return ident

            args = self.argument_list() if not self.match(Kind.CLOSE_PAREN) else []
            self.expect(Kind.CLOSE_PAREN)
            return FuncCallExpr(ident, args)

        elif kind is Kind.OPEN_PAREN:
            self.move()
            expr = self.expression()
            self.expect(Kind.CLOSE_PAREN)
            return expr

        elif kind is Kind.MINUS:
            minus = self.move()
            return UnaryExpr(self.primary(), Token(Kind.NEGATE, start=minus.start))

        elif kind.is_unary_operator and kind.is_left_associative:
            op = self.move()
            return UnaryExpr(self.primary(), op)

        raise self._unexpected(self.current)

    def number(self):
        """<number> is validated here so that the evaluator never sees an unparsable literal."""
        token = self.expect(Kind.NUMBER)
        try:
            float(token.lexeme)
        except ValueError:
            raise self._unexpected(token) from None
        return NumberExpr(token)

    def identifier(self):
        """<ident> ::= <identifier> { "." <identifier> }"""
        members = [self.expect(Kind.IDENTIFIER)]
        while self.accept(Kind.PERIOD):
            members.append(self.expect(Kind.IDENTIFIER))
        return IdentifierExpr(members)

    def argument_list(self):
        """<arg-list> ::= <expr> { "," <expr> }"""
        args = [self.expression()]
        while self.accept(Kind.COMMA):
            args.append(self.expression())
        return args

    # ---------------------------------------------------------------------------------------------------------------
    # Helpers

    def move(self):
        """Moves to the next token and returns the previous current one."""
        previous = self.current
        self.current = next(self._tokens, None)
        return previous

    def match(self, kind):
        """Whether or not the current token is of kind."""
        return self.current is not None and self.current.kind is kind

    def accept(self, kind):
        """If the current token is of kind, moves past it and returns True."""
        if not self.match(kind):
            return False
        self.move()
        return True

    def expect(self, kind):
        """Moves past and returns the current token, which must be of kind. Raises ExpectedError otherwise."""
        if not self.match(kind):
            start = self.current.start if self.current is not None else len(self.source)
            raise ExpectedError(str(kind), self.source, max(start, 0))
        return self.move()

    def _unexpected(self, token):
        return UnexpectedError(str(token), self.source, max(token.start, 0), len(str(token)))


def parse(tokens, source=None):
    """Parses tokens into an AST. Raises a ParseError if tokens do not form exactly one expression."""
    return Parser(tokens, source).parse()
