"""Turns condition code into a list of tokens."""

from __future__ import annotations

from collections.abc import Iterator

from rowifi.rolang.tokens import Literal, RolangError, Token, TokenType

_I64_MAX = 2**63 - 1

_SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

# A character that may be followed by "=": (type with "=", type without).
_PAIRED = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

_SEPARATORS = frozenset(" \r\t,")


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_alpha(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def scan_tokens(source: str) -> list[Token]:
    """Scan ``source`` into tokens, ending with an EOF token.

    Raises :class:`RolangError` on unexpected characters, unterminated
    strings, numbers that do not fit in 64 bits and unknown keywords.
    """
    return list(_scan(source))


def _scan(source: str) -> Iterator[Token]:
    length = len(source)
    pos = 0
    while pos < length:
        start = pos
        char = source[pos]
        pos += 1

        if char in _SINGLE:
            yield Token(_SINGLE[char], char)
        elif char in _PAIRED:
            with_equal, without = _PAIRED[char]
            if pos < length and source[pos] == "=":
                pos += 1
                yield Token(with_equal, source[start:pos])
            else:
                yield Token(without, char)
        elif char in _SEPARATORS:
            continue
        elif char == '"':
            end = source.find('"', pos)
            if end == -1:
                raise RolangError("Unterminated String")
            pos = end + 1
            yield Token(TokenType.STRING, source[start:pos], Literal(source[start + 1 : end]))
        elif _is_digit(char):
            while pos < length and _is_digit(source[pos]):
                pos += 1
            text = source[start:pos]
            value = int(text)
            if value > _I64_MAX:
                raise RolangError("Unexpected number")
            yield Token(TokenType.NUMBER, text, Literal(value))
        elif _is_alpha(char):
            while pos < length and _is_alpha(source[pos]):
                pos += 1
            text = source[start:pos]
            yield Token(TokenType.keyword(text), text)
        else:
            raise RolangError("Unexpected character")

    yield Token(TokenType.EOF, "")