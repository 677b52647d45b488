"""Identity resolution for the ``name``/``value`` alias pair."""
from __future__ import annotations

from clientspec.model.nodes import is_blank
from clientspec.resolver.errors import ConflictingIdentity, IdentityMissing


def resolve_identity(value: str | None, name: str | None) -> str:
    """Collapse the ``value``/``name`` synonyms into one service identity.

    Exactly one of the two may be set, or both may be set to the same
    string.  A mismatch is a declaration error rather than a silent
    preference for either side.

    Raises
    ------
    IdentityMissing
        If both attributes are blank.
    ConflictingIdentity
        If both are non-blank and differ.
    """
    has_value = not is_blank(value)
    has_name = not is_blank(name)

    if has_value and has_name:
        if value != name:
            raise ConflictingIdentity(
                f"'name' ({name!r}) and its alias 'value' ({value!r}) disagree; "
                "declare only one of them",
                attribute="name",
            )
        return name  # type: ignore[return-value]
    if has_name:
        return name  # type: ignore[return-value]
    if has_value:
        return value  # type: ignore[return-value]
    raise IdentityMissing(
        "a client must declare 'name' or 'value', whether or not a url is provided",
        attribute="name",
    )


def resolve_context_id(context_id: str | None, identity: str) -> str:
    """Return the declared context id, or ``identity`` when it is blank."""
    if is_blank(context_id):
        return identity
    return context_id  # type: ignore[return-value]
