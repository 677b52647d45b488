"""Declaration and descriptor model.

Exports the ``RawAttributes`` and ``ClientDescriptor`` value objects,
the ``TypeRef`` alias, and the serializers for both.
"""
from __future__ import annotations

from clientspec.model.nodes import (
    ClientDescriptor,
    RawAttributes,
    TypeRef,
    is_blank,
    is_placeholder,
    type_ref_name,
)
from clientspec.model.serializer import (
    DeclarationError,
    DeclarationSerializer,
    DeclarationSet,
    DescriptorSerializer,
)

__all__ = [
    "RawAttributes",
    "ClientDescriptor",
    "TypeRef",
    "is_blank",
    "is_placeholder",
    "type_ref_name",
    "DeclarationSerializer",
    "DescriptorSerializer",
    "DeclarationSet",
    "DeclarationError",
]
