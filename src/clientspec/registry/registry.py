"""Descriptor registry keyed by context id.

A ``DescriptorRegistry`` owns the descriptors of one application: each
resolved client is stored under its ``context_id`` and looked up by it
later.  ``resolve_all`` fills a registry from a batch of declarations.

Example
-------
::

    from clientspec.model import RawAttributes
    from clientspec.registry import DescriptorRegistry

    registry = DescriptorRegistry("shop")
    registry.register_raw(RawAttributes(name="catalog", path="/v1"))
    registry.get("catalog").endpoint
    '/v1'

The registry is a plain mutable container and is not thread-safe.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from clientspec.model.nodes import ClientDescriptor, RawAttributes
from clientspec.resolver.builder import DescriptorBuilder
from clientspec.resolver.errors import DescriptorValidationFailed, ResolutionError

logger = logging.getLogger(__name__)


class DescriptorNotFoundError(KeyError):
    """Raised when no descriptor is registered under a context id."""

    def __init__(self, context_id: str, registry_name: str) -> None:
        self.context_id = context_id
        self.registry_name = registry_name
        super().__init__(
            f"No client is registered under context id {context_id!r} "
            f"in the {registry_name!r} registry."
        )


class DescriptorAlreadyRegisteredError(ValueError):
    """Raised when two clients resolve to the same context id."""

    def __init__(self, context_id: str, registry_name: str) -> None:
        self.context_id = context_id
        self.registry_name = registry_name
        super().__init__(
            f"A client is already registered under context id {context_id!r} "
            f"in the {registry_name!r} registry. "
            "Give one of the clients a distinct 'contextId'."
        )


class DescriptorRegistry:
    """Stores resolved descriptors by context id.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    builder:
        Builder used by ``register_raw``.  Defaults to ``DescriptorBuilder()``.
    """

    def __init__(self, name: str = "default", builder: DescriptorBuilder | None = None) -> None:
        self._name = name
        self._builder = builder if builder is not None else DescriptorBuilder()
        self._descriptors: dict[str, ClientDescriptor] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, descriptor: ClientDescriptor) -> ClientDescriptor:
        """Store ``descriptor`` under its context id and return it.

        Raises
        ------
        DescriptorAlreadyRegisteredError
            If the context id is already taken.
        """
        if descriptor.context_id in self._descriptors:
            raise DescriptorAlreadyRegisteredError(descriptor.context_id, self._name)
        self._descriptors[descriptor.context_id] = descriptor
        logger.debug(
            "Registered client %r (identity %r) in registry %r",
            descriptor.context_id,
            descriptor.identity,
            self._name,
        )
        return descriptor

    def register_raw(self, raw: RawAttributes) -> ClientDescriptor:
        """Resolve ``raw`` with this registry's builder and register the result."""
        return self.register(self._builder.build(raw))

    def deregister(self, context_id: str) -> None:
        """Remove a descriptor from the registry.

        Raises
        ------
        DescriptorNotFoundError
            If ``context_id`` is not currently registered.
        """
        if context_id not in self._descriptors:
            raise DescriptorNotFoundError(context_id, self._name)
        del self._descriptors[context_id]
        logger.debug("Deregistered client %r from registry %r", context_id, self._name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, context_id: str) -> ClientDescriptor:
        """Return the descriptor registered under ``context_id``.

        Raises
        ------
        DescriptorNotFoundError
            If nothing is registered under ``context_id``.
        """
        try:
            return self._descriptors[context_id]
        except KeyError:
            raise DescriptorNotFoundError(context_id, self._name) from None

    def find_by_qualifier(self, qualifier: str) -> list[ClientDescriptor]:
        """Return every descriptor that carries ``qualifier``, in registration order."""
        return [d for d in self._descriptors.values() if qualifier in d.bean_qualifiers]

    def list_context_ids(self) -> list[str]:
        """Return a sorted list of all registered context ids."""
        return sorted(self._descriptors)

    @property
    def name(self) -> str:
        """Return the registry name."""
        return self._name

    def __contains__(self, context_id: object) -> bool:
        """Support ``"catalog" in registry`` membership test."""
        return context_id in self._descriptors

    def __len__(self) -> int:
        """Return the number of registered descriptors."""
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ClientDescriptor]:
        """Iterate descriptors in registration order."""
        return iter(self._descriptors.values())

    def __repr__(self) -> str:
        return (
            f"DescriptorRegistry(name={self._name!r}, "
            f"clients={self.list_context_ids()})"
        )


class BatchResolutionError(Exception):
    """Raised by ``resolve_all`` when one or more declarations fail.

    Parameters
    ----------
    failures:
        ``(label, error)`` pairs in declaration order.
    """

    def __init__(self, failures: list[tuple[str, Exception]]) -> None:
        self.failures = failures
        lines = [f"{len(failures)} client declaration(s) failed to resolve:"]
        for label, error in failures:
            lines.append(f"  {label}: {error}")
        super().__init__("\n".join(lines))


def resolve_all(
    declarations: Iterable[RawAttributes],
    builder: DescriptorBuilder | None = None,
    name: str = "default",
) -> DescriptorRegistry:
    """Resolve every declaration into a new registry.

    Every declaration is attempted; if any fail, a single
    ``BatchResolutionError`` lists all of them and no registry is returned.
    """
    registry = DescriptorRegistry(name, builder)
    failures: list[tuple[str, Exception]] = []
    for raw in declarations:
        try:
            registry.register_raw(raw)
        except (ResolutionError, DescriptorValidationFailed, DescriptorAlreadyRegisteredError) as exc:
            logger.debug("Client %r failed: %s", raw.label, exc)
            failures.append((raw.label, exc))
    if failures:
        raise BatchResolutionError(failures)
    logger.debug("Resolved %d client(s) into registry %r", len(registry), name)
    return registry
