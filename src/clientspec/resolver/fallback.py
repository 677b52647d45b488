"""Fallback and fallback-factory validation.

Only the shape of each reference is checked here.  Whether a fallback
implements the client interface, or exists as a bean at all, needs
runtime type information owned by the consumer of the descriptor.
"""
from __future__ import annotations

from clientspec.model.nodes import TypeRef, is_blank, is_import_path, is_placeholder
from clientspec.resolver.errors import InvalidFallbackDeclaration

_NONE_TYPE = type(None)


def resolve_fallback(attribute: str, reference: object) -> TypeRef | None:
    """Validate one fallback reference and return it unchanged.

    Parameters
    ----------
    attribute:
        ``"fallback"`` or ``"fallbackFactory"``; used in error messages.
    reference:
        ``None`` when unset, otherwise a class or an import-path string.

    Raises
    ------
    InvalidFallbackDeclaration
        If ``reference`` is the ``NoneType`` marker, a blank string, a
        string that is not an import path or placeholder, or any other
        object that cannot denote a type.
    """
    if reference is None:
        return None
    if reference is _NONE_TYPE:
        raise InvalidFallbackDeclaration(
            f"{attribute!r} is set to the 'no type' marker NoneType; "
            "leave it unset instead",
            attribute=attribute,
        )
    if isinstance(reference, type):
        return reference
    if isinstance(reference, str):
        if is_blank(reference):
            raise InvalidFallbackDeclaration(
                f"{attribute!r} is an empty type reference; leave it unset instead",
                attribute=attribute,
            )
        if is_placeholder(reference) or is_import_path(reference):
            return reference
        raise InvalidFallbackDeclaration(
            f"{attribute!r} value {reference!r} is not an import path "
            "such as 'package.module:ClassName'",
            attribute=attribute,
        )
    raise InvalidFallbackDeclaration(
        f"{attribute!r} must be a class or an import path, "
        f"got {type(reference).__name__} {reference!r}",
        attribute=attribute,
    )
