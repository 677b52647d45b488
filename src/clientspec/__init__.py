"""clientspec — resolves declarative HTTP client declarations into canonical descriptors.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import clientspec

    raw = clientspec.RawAttributes(name="catalog", path="/v1")
    descriptor = clientspec.resolve(raw)
    descriptor.bean_qualifiers
    ('catalogFeignClient',)

    # Advisory findings that do not block resolution
    findings = clientspec.lint(raw)

    # Declarations from a YAML/JSON file, resolved into a registry
    registry = clientspec.resolve_file("clients.yaml")

    clientspec.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from clientspec.model.nodes import ClientDescriptor, RawAttributes
from clientspec.settings import ResolverSettings

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from clientspec.linter.diagnostics import Diagnostic
    from clientspec.registry.registry import DescriptorRegistry


def resolve(raw: RawAttributes, settings: ResolverSettings | None = None) -> ClientDescriptor:
    """Resolve one declaration into a ``ClientDescriptor``.

    Parameters
    ----------
    raw:
        The declaration to resolve.
    settings:
        Optional resolver settings; defaults apply when omitted.

    Returns
    -------
    ClientDescriptor
        The canonical descriptor.

    Raises
    ------
    clientspec.resolver.IdentityMissing
        If neither ``name`` nor ``value`` is set.
    clientspec.resolver.ConflictingIdentity
        If ``name`` and ``value`` differ.
    clientspec.resolver.DescriptorValidationFailed
        If any other attribute is invalid; lists every such error.
    """
    from clientspec.resolver.builder import resolve as _resolve

    return _resolve(raw, settings)


def lint(raw: RawAttributes, include_hints: bool = True) -> list["Diagnostic"]:
    """Lint one declaration for deprecated, ignored, or redundant attributes.

    Parameters
    ----------
    raw:
        The declaration to lint.
    include_hints:
        If ``False``, HINT-level findings are suppressed.

    Returns
    -------
    list[Diagnostic]
        All findings, sorted by attribute.
    """
    from clientspec.linter.linter import lint as _lint

    return _lint(raw, include_hints=include_hints)


def resolve_file(path: str | Path, settings: ResolverSettings | None = None) -> "DescriptorRegistry":
    """Load a declaration file and resolve every client in it.

    Parameters
    ----------
    path:
        A ``.json`` or YAML declaration document.
    settings:
        Overrides the settings read from the document's ``defaults``.

    Raises
    ------
    clientspec.model.DeclarationError
        If the document is malformed.
    clientspec.registry.BatchResolutionError
        If any declaration fails to resolve.
    """
    from clientspec.model.serializer import DeclarationSerializer
    from clientspec.registry.registry import resolve_all
    from clientspec.resolver.builder import DescriptorBuilder

    declarations = DeclarationSerializer().load(path)
    builder = DescriptorBuilder(settings if settings is not None else declarations.settings)
    return resolve_all(declarations.clients, builder, name=str(path))


__all__ = [
    "__version__",
    "RawAttributes",
    "ClientDescriptor",
    "ResolverSettings",
    "resolve",
    "lint",
    "resolve_file",
]
