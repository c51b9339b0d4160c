"""
Diagnostic collection for the TL parser.

The parser never prints. Every problem it detects is reported to a `Diagnostics`
collector together with the offending token, and parsing continues best-effort.
The caller decides the policy: inspect the collected diagnostics afterwards, or
construct the collector with `fail_fast=True` to turn the first report into a
`ParseError`.

Classes:
    DiagnosticKind: Error taxonomy.
    Diagnostic: One reported problem (kind, message, location, token).
    Diagnostics: Ordered collector.
    ParseError: Raised by a fail-fast collector.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from tl.tl_lexer import Token


class DiagnosticKind(Enum):
    UNEXPECTED_TOPLEVEL = auto()
    MALFORMED_FUNCTION = auto()
    MALFORMED_STRUCT = auto()
    MALFORMED_STATEMENT = auto()
    MALFORMED_EXPRESSION = auto()
    UNKNOWN_DATA_TYPE = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    line: int = 0
    col: int = 0
    token: Token | None = None

    def __str__(self) -> str:
        got = f" (got {self.token!r})" if self.token is not None else ""
        return f"{self.line}:{self.col}: error[{self.kind}]: {self.message}{got}"


class ParseError(SyntaxError):
    """Raised on the first diagnostic when parsing in fail-fast mode."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class Diagnostics:
    """Ordered collection of parse diagnostics.

    Attributes:
        fail_fast (bool): Raise `ParseError` on the first report instead of collecting.
    """

    def __init__(self, fail_fast: bool = False) -> None:
        self.fail_fast = fail_fast
        self._items: list[Diagnostic] = []

    def report(
        self, kind: DiagnosticKind, message: str, token: Token | None = None
    ) -> Diagnostic:
        """Records a diagnostic located at `token` (if given).

        Raises:
            ParseError: When the collector is in fail-fast mode.
        """
        line, col = (token.line, token.col) if token is not None else (0, 0)
        diagnostic = Diagnostic(kind, message, line, col, token)
        self._items.append(diagnostic)
        if self.fail_fast:
            raise ParseError(diagnostic)
        return diagnostic

    @property
    def has_errors(self) -> bool:
        return bool(self._items)

    def kinds(self) -> list[DiagnosticKind]:
        return [d.kind for d in self._items]

    def render(self) -> str:
        return "\n".join(f"Error: {d}" for d in self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self._items[index]


__all__ = ["Diagnostic", "DiagnosticKind", "Diagnostics", "ParseError"]
