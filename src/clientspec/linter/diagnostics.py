"""Diagnostic types for the declaration linter.

A ``Diagnostic`` is an advisory finding attached to one declaration
attribute.  Unlike ``ResolutionError`` it never blocks resolution; it
points at attributes that are deprecated, ignored, or redundant.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

# Declaration order of attributes, used to sort findings.
ATTRIBUTE_ORDER: tuple[str, ...] = (
    "value",
    "name",
    "contextId",
    "qualifier",
    "qualifiers",
    "url",
    "path",
    "decode404",
    "configuration",
    "fallback",
    "fallbackFactory",
    "primary",
)


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"LINT-Q001"``.
    message:
        Human-readable description of the problem.
    attribute:
        Declaration attribute the finding concerns.
    client:
        Label of the declaration the finding belongs to.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The rule name that produced this diagnostic.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    attribute: str
    client: str = field(default="")
    suggestion: str | None = field(default=None)
    rule: str = field(default="")

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.name}"
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix} {self.client}.{self.attribute}: {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should fail a lint run."""
        return self.severity == DiagnosticSeverity.ERROR

    @property
    def sort_key(self) -> tuple[int, str]:
        """Order by attribute declaration order, then by code."""
        try:
            position = ATTRIBUTE_ORDER.index(self.attribute)
        except ValueError:
            position = len(ATTRIBUTE_ORDER)
        return (position, self.code)
