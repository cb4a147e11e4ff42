"""Expression tree of the condition language and its evaluation."""

from __future__ import annotations

import operator
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Callable

from rowifi.rolang.tokens import Literal, ParseError, RolangError, Token, TokenType
from rowifi.users import RoGuildUser


@dataclass(frozen=True)
class RoCommandUser:
    """The member a condition is evaluated against."""

    user: RoGuildUser
    roles: Collection[int]
    ranks: Mapping[int, int]
    username: str


class Expression:
    """Base of every node in a parsed condition."""

    def evaluate(self, user: RoCommandUser) -> Literal:
        raise NotImplementedError

    def validate(self) -> None:
        """Check the node's shape; only function calls have anything to check."""


@dataclass(frozen=True)
class LiteralExpr(Expression):
    literal: Literal

    def evaluate(self, user: RoCommandUser) -> Literal:
        return self.literal


@dataclass(frozen=True)
class Grouping(Expression):
    expression: Expression

    def evaluate(self, user: RoCommandUser) -> Literal:
        return self.expression.evaluate(user)


@dataclass(frozen=True)
class Unary(Expression):
    operator: Token
    right: Expression

    def evaluate(self, user: RoCommandUser) -> Literal:
        flip = self.operator.token_type in (TokenType.NOT, TokenType.BANG)
        return Literal(flip ^ self.right.evaluate(user).truthy())


_COMPARISONS: dict[TokenType, Callable[[Literal, Literal], bool]] = {
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
    TokenType.EQUAL_EQUAL: operator.eq,
    TokenType.BANG_EQUAL: operator.ne,
}


@dataclass(frozen=True)
class Binary(Expression):
    left: Expression
    operator: Token
    right: Expression

    def evaluate(self, user: RoCommandUser) -> Literal:
        left = self.left.evaluate(user)
        right = self.right.evaluate(user)
        kind = self.operator.token_type
        if kind is TokenType.AND:
            return Literal(left.truthy() and right.truthy())
        if kind is TokenType.OR:
            return Literal(left.truthy() or right.truthy())
        compare = _COMPARISONS.get(kind)
        if compare is None:
            raise RolangError("Invalid Operator")
        return Literal(compare(left, right))


_FUNCTIONS = frozenset(
    {
        TokenType.HAS_RANK,
        TokenType.IS_IN_GROUP,
        TokenType.HAS_ROLE,
        TokenType.WITH_STRING,
        TokenType.GET_RANK,
    }
)


@dataclass(frozen=True)
class Function(Expression):
    token: Token
    args: tuple[Literal, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def evaluate(self, user: RoCommandUser) -> Literal:
        kind = self.token.token_type
        if kind not in _FUNCTIONS:
            raise RolangError("Invalid Function")
        first = self.args[0] if self.args else None

        if first is not None and first.is_number:
            if kind is TokenType.HAS_RANK and len(self.args) > 1:
                rank = user.ranks.get(first.value)  # type: ignore[arg-type]
                expected = self.args[1]
                return Literal(rank is not None and expected.is_number and rank == expected.value)
            if kind is TokenType.IS_IN_GROUP:
                return Literal(first.value in user.ranks)
            if kind is TokenType.HAS_ROLE:
                return Literal(first.value in user.roles)
            if kind is TokenType.GET_RANK:
                return Literal(user.ranks.get(first.value, 0))  # type: ignore[arg-type]

        if first is not None and first.is_string and kind is TokenType.WITH_STRING:
            return Literal(first.value in user.username)  # type: ignore[operator]

        raise RolangError("Invalid Expression")

    def _require(self, count: int, usage: str) -> None:
        if len(self.args) != count:
            raise ParseError(self.token, usage)

    def _require_number(self, index: int, what: str) -> None:
        if not self.args[index].is_number:
            raise ParseError(self.token, f"Expected {what} to be an integer")

    def validate(self) -> None:
        """Check the number and kinds of arguments; raise :class:`ParseError` if wrong."""
        kind = self.token.token_type
        if kind is TokenType.HAS_RANK:
            self._require(2, "Expected 2 arguments. {Group Id} {Rank Id}")
            self._require_number(0, "Group Id")
            self._require_number(1, "Rank Id")
        elif kind in (TokenType.IS_IN_GROUP, TokenType.GET_RANK):
            self._require(1, "Expected 1 argument. {Group Id}")
            self._require_number(0, "Group Id")
        elif kind is TokenType.HAS_ROLE:
            self._require(1, "Expected 1 argument. {Role Id}")
            self._require_number(0, "Role Id")
        elif kind is TokenType.WITH_STRING:
            self._require(1, "Expected 1 argument. {Name}")
            if not self.args[0].is_string:
                raise ParseError(self.token, "Expected Name to be an word")
        else:
            raise ParseError(self.token, "Unknown function")