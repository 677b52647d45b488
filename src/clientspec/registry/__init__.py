"""Descriptor registry module."""
from __future__ import annotations

from clientspec.registry.registry import (
    BatchResolutionError,
    DescriptorAlreadyRegisteredError,
    DescriptorNotFoundError,
    DescriptorRegistry,
    resolve_all,
)

__all__ = [
    "DescriptorRegistry",
    "DescriptorNotFoundError",
    "DescriptorAlreadyRegisteredError",
    "BatchResolutionError",
    "resolve_all",
]
