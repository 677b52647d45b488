"""Resolver module.

Exports the ``DescriptorBuilder`` class, the ``resolve`` convenience
function, the individual resolvers, and all resolution error types.
"""
from __future__ import annotations

from clientspec.resolver.alias import resolve_context_id, resolve_identity
from clientspec.resolver.builder import DescriptorBuilder, resolve
from clientspec.resolver.configuration import aggregate_configuration
from clientspec.resolver.endpoint import resolve_endpoint
from clientspec.resolver.errors import (
    ConflictingIdentity,
    DescriptorValidationFailed,
    IdentityMissing,
    InvalidEndpointDeclaration,
    InvalidFallbackDeclaration,
    ResolutionError,
)
from clientspec.resolver.fallback import resolve_fallback
from clientspec.resolver.qualifiers import resolve_qualifiers

__all__ = [
    "DescriptorBuilder",
    "resolve",
    "resolve_identity",
    "resolve_context_id",
    "resolve_qualifiers",
    "resolve_fallback",
    "aggregate_configuration",
    "resolve_endpoint",
    "ResolutionError",
    "IdentityMissing",
    "ConflictingIdentity",
    "InvalidFallbackDeclaration",
    "InvalidEndpointDeclaration",
    "DescriptorValidationFailed",
]
