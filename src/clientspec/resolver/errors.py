"""Error types raised while resolving a client declaration.

Every error names the declaration attribute it concerns so that the CLI
and callers can point at the offending field.  Identity errors are
raised on their own; all other errors are gathered into a single
``DescriptorValidationFailed`` so one attempt reports every problem.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class ResolutionError(Exception):
    """Base class for a single resolution failure.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    attribute:
        Declaration attribute the problem was found on, e.g. ``"url"``.
    """

    code: ClassVar[str] = "CS000"

    message: str
    attribute: str = field(default="")

    def __str__(self) -> str:
        where = f" ({self.attribute})" if self.attribute else ""
        return f"[{self.code}]{where} {self.message}"

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))


@dataclass(frozen=True)
class IdentityMissing(ResolutionError):
    """Neither ``name`` nor ``value`` carries a usable service name."""

    code: ClassVar[str] = "CS001"


@dataclass(frozen=True)
class ConflictingIdentity(ResolutionError):
    """``name`` and ``value`` are both set but disagree."""

    code: ClassVar[str] = "CS002"


@dataclass(frozen=True)
class InvalidFallbackDeclaration(ResolutionError):
    """A fallback or fallback factory reference cannot denote a type."""

    code: ClassVar[str] = "CS003"


@dataclass(frozen=True)
class InvalidEndpointDeclaration(ResolutionError):
    """The declared URL is malformed once its protocol is composed."""

    code: ClassVar[str] = "CS004"


@dataclass
class DescriptorValidationFailed(Exception):
    """Aggregates every non-identity error from one resolution attempt.

    Parameters
    ----------
    client:
        Label of the declaration that failed.
    errors:
        Errors in the order the resolvers reported them.
    """

    code: ClassVar[str] = "CS100"

    client: str = ""
    errors: list[ResolutionError] = field(default_factory=list)

    def add(self, error: ResolutionError) -> None:
        """Append a new error to the collection."""
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were recorded."""
        return bool(self.errors)

    @property
    def attributes(self) -> list[str]:
        """Return the attribute names that failed, in report order."""
        return [e.attribute for e in self.errors]

    def __str__(self) -> str:
        if not self.errors:
            return f"DescriptorValidationFailed for {self.client!r} (no errors)"
        lines = [
            f"DescriptorValidationFailed for {self.client!r} "
            f"({len(self.errors)} error(s)):"
        ]
        for err in self.errors:
            lines.append(f"  {err}")
        return "\n".join(lines)
