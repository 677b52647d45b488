"""Value objects for client declarations and resolved descriptors.

A ``RawAttributes`` value mirrors one client declaration exactly as it
was written: every attribute is present, redundant pairs are kept side
by side, and unresolved placeholders such as ``${service.url}`` are left
verbatim.  The resolver turns it into a ``ClientDescriptor``, the
canonical form consumed by proxy construction and resilience wiring.

Both types are frozen dataclasses so that declarations and descriptors
are immutable and hashable.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

# A type reference is opaque to the resolver: either a class object or an
# import-path string ("pkg.module:Name" / "pkg.module.Name").
TypeRef = Union[type, str]

_IMPORT_PATH = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*"
    r"(:[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*)?$"
)


# ---------------------------------------------------------------------------
# Helpers shared by the resolver and the linter
# ---------------------------------------------------------------------------


def is_blank(text: str | None) -> bool:
    """Return True for ``None``, the empty string, or whitespace only."""
    return text is None or not text.strip()


def is_placeholder(text: str) -> bool:
    """Return True if ``text`` carries an unresolved ``${...}`` or ``#{...}`` expression."""
    return ("${" in text or "#{" in text) and "}" in text


def is_import_path(text: str) -> bool:
    """Return True if ``text`` looks like ``pkg.module:Name`` or ``pkg.module.Name``."""
    return bool(_IMPORT_PATH.match(text.strip()))


def type_ref_name(ref: TypeRef) -> str:
    """Render a type reference as a stable ``module:QualName`` string."""
    if isinstance(ref, type):
        return f"{ref.__module__}:{ref.__qualname__}"
    return str(ref)


# ---------------------------------------------------------------------------
# Declaration input
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawAttributes:
    """One client declaration, attribute for attribute.

    Parameters
    ----------
    value:
        Service name; synonym for ``name``.
    name:
        Service name; synonym for ``value``.
    context_id:
        Bean/context name used instead of the service name when present.
    qualifier:
        Deprecated single qualifier, superseded by ``qualifiers``.
    qualifiers:
        Qualifier values in declaration order.  Entries may be blank or
        ``None``; those are dropped during resolution.
    url:
        Absolute URL or resolvable hostname; the protocol is optional.
    path:
        Path prefix shared by every method-level mapping.
    decode404:
        Whether 404 responses are decoded instead of raised.
    configuration:
        Configuration class references, possibly with repeats.
    fallback:
        Fallback implementation reference, ``None`` when unset.
    fallback_factory:
        Fallback factory reference, ``None`` when unset.
    primary:
        Whether the resulting proxy is marked as the primary bean.
    """

    value: str = ""
    name: str = ""
    context_id: str = ""
    qualifier: str = ""
    qualifiers: tuple[str | None, ...] = field(default=())
    url: str = ""
    path: str = ""
    decode404: bool = False
    configuration: tuple[TypeRef, ...] = field(default=())
    fallback: TypeRef | None = None
    fallback_factory: TypeRef | None = None
    primary: bool = True

    @property
    def label(self) -> str:
        """Best-effort human label for messages, even when identity is unresolved."""
        for candidate in (self.context_id, self.name, self.value):
            if not is_blank(candidate):
                return candidate
        return "<anonymous>"


# ---------------------------------------------------------------------------
# Resolved output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ClientDescriptor:
    """Canonical, fully resolved form of one client declaration.

    Parameters
    ----------
    identity:
        Service identity from the ``name``/``value`` alias pair.  Never blank.
    context_id:
        Declared context id, or ``identity`` when none was declared.
    bean_qualifiers:
        Final qualifier list; never contains blank entries.
    fallback_type:
        Fallback implementation reference, or ``None``.
    fallback_factory_type:
        Fallback factory reference, or ``None``.
    configuration_classes:
        Configuration references in first-occurrence order, without repeats.
    endpoint:
        Composed URL and path prefix.
    decode404:
        Whether 404 responses are decoded instead of raised.
    primary:
        Whether the proxy is the primary bean.
    """

    identity: str
    context_id: str
    bean_qualifiers: tuple[str, ...] = field(default=())
    fallback_type: TypeRef | None = None
    fallback_factory_type: TypeRef | None = None
    configuration_classes: tuple[TypeRef, ...] = field(default=())
    endpoint: str = ""
    decode404: bool = False
    primary: bool = True

    @property
    def has_fallback(self) -> bool:
        """Return True if either a fallback or a fallback factory is recorded."""
        return self.fallback_type is not None or self.fallback_factory_type is not None
