"""Bean qualifier resolution.

The plural ``qualifiers`` attribute supersedes the deprecated singular
``qualifier`` only when it actually carries a usable value.  Precedence,
first match wins:

    1. non-blank entries of ``qualifiers``, in declaration order
    2. ``qualifier``, when non-blank
    3. ``context_id + suffix`` (``"FeignClient"`` by default)
"""
from __future__ import annotations

from collections.abc import Iterable

from clientspec.model.nodes import is_blank
from clientspec.settings import DEFAULT_QUALIFIER_SUFFIX


def clean_qualifiers(qualifiers: Iterable[str | None]) -> tuple[str, ...]:
    """Drop ``None``, empty and whitespace-only entries, keeping order."""
    return tuple(q for q in qualifiers if not is_blank(q))  # type: ignore[misc]


def default_qualifier(context_id: str, suffix: str = DEFAULT_QUALIFIER_SUFFIX) -> str:
    """Return the qualifier used when none is declared."""
    return f"{context_id}{suffix}"


def resolve_qualifiers(
    qualifier: str | None,
    qualifiers: Iterable[str | None],
    context_id: str,
    suffix: str = DEFAULT_QUALIFIER_SUFFIX,
) -> tuple[str, ...]:
    """Resolve the final, ordered qualifier list for one client."""
    cleaned = clean_qualifiers(qualifiers)
    if cleaned:
        return cleaned
    if not is_blank(qualifier):
        return (qualifier,)  # type: ignore[return-value]
    return (default_qualifier(context_id, suffix),)
