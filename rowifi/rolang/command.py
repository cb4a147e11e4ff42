"""Compiled condition code that can be checked against a member."""

from __future__ import annotations

from rowifi.rolang.expression import Expression, RoCommandUser
from rowifi.rolang.parser import Parser
from rowifi.rolang.scanner import scan_tokens


class RoCommand:
    """Condition code together with its parsed expression.

    Construction raises :class:`~rowifi.rolang.tokens.RolangError` (or its
    subclass ``ParseError``) when the code is invalid.
    """

    def __init__(self, code: str) -> None:
        self.code: str = code
        self.expr: Expression = Parser(scan_tokens(code)).expression()

    def evaluate(self, user: RoCommandUser) -> bool:
        """Whether the member satisfies the condition; non-boolean results count as true."""
        return self.expr.evaluate(user).truthy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoCommand):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return f"RoCommand({self.code!r})"

    def __str__(self) -> str:
        return f'RoCommand {{ Code: "{self.code}" }}'