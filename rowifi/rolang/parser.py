"""Recursive-descent parser for the condition language."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from rowifi.rolang.expression import (
    Binary,
    Expression,
    Function,
    Grouping,
    LiteralExpr,
    Unary,
)
from rowifi.rolang.tokens import Literal, ParseError, Token, TokenType

_FUNCTION_TYPES = (
    TokenType.HAS_RANK,
    TokenType.WITH_STRING,
    TokenType.HAS_ROLE,
    TokenType.IS_IN_GROUP,
    TokenType.GET_RANK,
)
_VALUE_TYPES = (TokenType.STRING, TokenType.NUMBER)


class Parser:
    """Builds an expression tree from scanned tokens.

    Precedence from lowest to highest: ``==``/``!=``, ``and``/``or``,
    comparisons, unary ``not``/``!``, then literals, calls and groups.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        if not self._tokens or self._tokens[-1].token_type is not TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self._current = 0

    def expression(self) -> Expression:
        """Parse one expression; raise :class:`ParseError` on bad input."""
        return self._equality()

    def _binary(self, operand: Callable[[], Expression], *types: TokenType) -> Expression:
        expr = operand()
        while self._match(*types):
            op = self._previous
            expr = Binary(expr, op, operand())
        return expr

    def _equality(self) -> Expression:
        return self._binary(self._logical, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _logical(self) -> Expression:
        return self._binary(self._comparison, TokenType.AND, TokenType.OR)

    def _comparison(self) -> Expression:
        return self._binary(
            self._unary,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def _unary(self) -> Expression:
        if self._match(TokenType.NOT, TokenType.BANG):
            op = self._previous
            return Unary(op, self._unary())
        return self._primary()

    def _primary(self) -> Expression:
        if self._match(TokenType.FALSE):
            return LiteralExpr(Literal(False))
        if self._match(TokenType.TRUE):
            return LiteralExpr(Literal(True))
        if self._match(*_VALUE_TYPES):
            return LiteralExpr(self._previous_literal())
        if self._match(*_FUNCTION_TYPES):
            name = self._previous
            self._consume(TokenType.LEFT_PAREN, "Expect ( after function call")
            args: list[Literal] = []
            while self._match(*_VALUE_TYPES):
                args.append(self._previous_literal())
            self._consume(TokenType.RIGHT_PAREN, "Expect ) after function args")
            function = Function(name, tuple(args))
            function.validate()
            return function
        if self._match(TokenType.LEFT_PAREN):
            inner = self.expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ) after expression")
            return Grouping(inner)
        raise ParseError(self._peek, "Expect expression")

    def _previous_literal(self) -> Literal:
        literal = self._previous.literal
        if literal is None:
            raise ParseError(self._previous, "Expect expression")
        return literal

    def _match(self, *types: TokenType) -> bool:
        if any(self._check(t) for t in types):
            self._advance()
            return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> None:
        if not self._check(token_type):
            raise ParseError(self._peek, message)
        self._advance()

    def _check(self, token_type: TokenType) -> bool:
        return not self._at_end and self._peek.token_type is token_type

    def _advance(self) -> None:
        if not self._at_end:
            self._current += 1

    @property
    def _at_end(self) -> bool:
        return self._peek.token_type is TokenType.EOF

    @property
    def _peek(self) -> Token:
        return self._tokens[self._current]

    @property
    def _previous(self) -> Token:
        return self._tokens[self._current - 1]


def parse(tokens: Iterable[Token]) -> Expression:
    """Parse an expression from scanned tokens."""
    return Parser(tokens).expression()