"""Descriptor builder: runs every resolver and assembles the result.

Resolution order
----------------
1. Identity (``name``/``value``).  Failure here is raised immediately;
   a declaration without identity cannot be keyed or registered, so
   nothing else is attempted.
2. Qualifiers, fallback, fallback factory, configuration and endpoint.
   These are independent; each one runs even when another has failed,
   and all failures are raised together as one
   ``DescriptorValidationFailed``.

No partial descriptor is ever returned.

Usage
-----
::

    from clientspec.model import RawAttributes
    from clientspec.resolver import DescriptorBuilder

    builder = DescriptorBuilder()
    descriptor = builder.build(RawAttributes(name="catalog", path="/v1"))
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

from clientspec.model.nodes import ClientDescriptor, RawAttributes
from clientspec.resolver.alias import resolve_context_id, resolve_identity
from clientspec.resolver.configuration import aggregate_configuration
from clientspec.resolver.endpoint import resolve_endpoint
from clientspec.resolver.errors import DescriptorValidationFailed, ResolutionError
from clientspec.resolver.fallback import resolve_fallback
from clientspec.resolver.qualifiers import resolve_qualifiers
from clientspec.settings import ResolverSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DescriptorBuilder:
    """Turns ``RawAttributes`` into ``ClientDescriptor`` values.

    A builder holds no per-declaration state, so one instance can be
    shared and called from several threads at once.

    Parameters
    ----------
    settings:
        Protocol, qualifier suffix and default configuration to apply.
        Defaults to ``ResolverSettings()``.
    """

    def __init__(self, settings: ResolverSettings | None = None) -> None:
        self._settings: ResolverSettings = settings if settings is not None else ResolverSettings()

    @property
    def settings(self) -> ResolverSettings:
        """Return the settings this builder applies."""
        return self._settings

    def build(self, raw: RawAttributes) -> ClientDescriptor:
        """Resolve ``raw`` into a descriptor.

        Raises
        ------
        IdentityMissing
            If neither ``name`` nor ``value`` is set.
        ConflictingIdentity
            If ``name`` and ``value`` are set and differ.
        DescriptorValidationFailed
            If any other attribute fails; carries every such failure.
        """
        identity = resolve_identity(raw.value, raw.name)
        context_id = resolve_context_id(raw.context_id, identity)

        failures = DescriptorValidationFailed(client=context_id)
        qualifiers = self._attempt(
            failures,
            lambda: resolve_qualifiers(
                raw.qualifier, raw.qualifiers, context_id, self._settings.qualifier_suffix
            ),
        )
        fallback = self._attempt(
            failures, lambda: resolve_fallback("fallback", raw.fallback)
        )
        fallback_factory = self._attempt(
            failures, lambda: resolve_fallback("fallbackFactory", raw.fallback_factory)
        )
        configuration = self._attempt(
            failures,
            lambda: aggregate_configuration(
                raw.configuration, self._settings.default_configuration
            ),
        )
        endpoint = self._attempt(
            failures,
            lambda: resolve_endpoint(raw.url, raw.path, self._settings.default_protocol),
        )

        if failures.has_errors:
            logger.debug(
                "Client %r failed with %d error(s): %s",
                context_id,
                len(failures.errors),
                ", ".join(failures.attributes),
            )
            raise failures

        if self._settings.log_advisories:
            self._log_advisories(raw)

        descriptor = ClientDescriptor(
            identity=identity,
            context_id=context_id,
            bean_qualifiers=qualifiers,  # type: ignore[arg-type]
            fallback_type=fallback,
            fallback_factory_type=fallback_factory,
            configuration_classes=configuration,  # type: ignore[arg-type]
            endpoint=endpoint,  # type: ignore[arg-type]
            decode404=bool(raw.decode404),
            primary=bool(raw.primary),
        )
        logger.debug(
            "Resolved client %r -> identity=%r endpoint=%r qualifiers=%s",
            context_id,
            identity,
            descriptor.endpoint,
            list(descriptor.bean_qualifiers),
        )
        return descriptor

    @staticmethod
    def _attempt(
        failures: DescriptorValidationFailed, step: Callable[[], T]
    ) -> T | None:
        try:
            return step()
        except ResolutionError as exc:
            failures.add(exc)
            return None

    @staticmethod
    def _log_advisories(raw: RawAttributes) -> None:
        from clientspec.linter.linter import DeclarationLinter

        for diagnostic in DeclarationLinter(include_hints=False).lint(raw):
            logger.warning("%s", diagnostic)


def resolve(raw: RawAttributes, settings: ResolverSettings | None = None) -> ClientDescriptor:
    """Convenience function: resolve one declaration with a fresh builder."""
    return DescriptorBuilder(settings).build(raw)
