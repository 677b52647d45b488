"""Configuration-class aggregation."""
from __future__ import annotations

from collections.abc import Iterable

from clientspec.model.nodes import TypeRef


def aggregate_configuration(
    declared: Iterable[TypeRef],
    defaults: Iterable[TypeRef] = (),
) -> tuple[TypeRef, ...]:
    """Merge declared and default configuration references.

    Declared references come first, followed by any defaults supplied by
    the caller.  Repeats are dropped; the first occurrence keeps its
    position.  Nothing is injected when both inputs are empty.
    """
    merged: dict[TypeRef, None] = {}
    for ref in (*declared, *defaults):
        merged.setdefault(ref, None)
    return tuple(merged)
