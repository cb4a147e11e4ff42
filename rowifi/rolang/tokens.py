"""Tokens, literals and errors of the bind condition language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from functools import total_ordering
from typing import Union

LiteralValue = Union[str, int, bool]


class RolangError(Exception):
    """Raised when condition code cannot be scanned, parsed or evaluated."""


class ParseError(RolangError):
    """A parse failure at a specific token."""

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message


class TokenType(Enum):
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()

    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    STRING = auto()
    NUMBER = auto()

    AND = auto()
    OR = auto()
    NOT = auto()
    TRUE = auto()
    FALSE = auto()
    EOF = auto()

    HAS_RANK = auto()
    WITH_STRING = auto()
    IS_IN_GROUP = auto()
    HAS_ROLE = auto()
    GET_RANK = auto()

    @classmethod
    def keyword(cls, text: str) -> TokenType:
        """Return the token type of a keyword or function name."""
        try:
            return _KEYWORDS[text]
        except KeyError:
            raise RolangError("Invalid Keyword") from None


_KEYWORDS = {
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "HasRank": TokenType.HAS_RANK,
    "WithString": TokenType.WITH_STRING,
    "IsInGroup": TokenType.IS_IN_GROUP,
    "HasRole": TokenType.HAS_ROLE,
    "GetRank": TokenType.GET_RANK,
}

# Literals of different kinds order as string < number < bool.
_KIND_RANK = {str: 0, int: 1, bool: 2}


def _normalise(value: object) -> LiteralValue:
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        return str(value)
    raise TypeError(f"a literal must be a str, int or bool, got {type(value).__name__}")


@total_ordering
@dataclass(frozen=True, eq=False)
class Literal:
    """A string, integer or boolean value of the condition language."""

    value: LiteralValue

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _normalise(self.value))

    @property
    def is_string(self) -> bool:
        return type(self.value) is str

    @property
    def is_number(self) -> bool:
        return type(self.value) is int

    @property
    def is_bool(self) -> bool:
        return type(self.value) is bool

    def _key(self) -> tuple[int, LiteralValue]:
        return (_KIND_RANK[type(self.value)], self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def truthy(self) -> bool:
        """A boolean's own value; every other literal counts as true."""
        return self.value if self.is_bool else True  # type: ignore[return-value]


@dataclass(frozen=True)
class Token:
    token_type: TokenType
    lexeme: str
    literal: Literal | None = None