"""Serialization for client declarations and descriptors.

Declarations are read from plain dict/list structures, JSON, or YAML.
A document may be a single declaration mapping, a list of them, or a
mapping with a ``clients`` list and an optional ``defaults`` section::

    defaults:
      configuration: [shared.feign:DefaultConfig]
    clients:
      - name: catalog
        path: /v1
      - name: orders
        url: orders.internal:8080
        qualifiers: [ordersClient]

Descriptors are written back out as JSON-compatible dicts with
camelCase keys; type references become ``module:QualName`` strings.

Usage
-----
::

    from clientspec.model.serializer import DeclarationSerializer, DescriptorSerializer

    declarations = DeclarationSerializer().from_yaml(text)
    data = DescriptorSerializer().to_dict(descriptor)
"""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from clientspec.model.nodes import ClientDescriptor, RawAttributes, TypeRef, type_ref_name
from clientspec.settings import ResolverSettings

# Declaration key -> RawAttributes field.  Both spellings are accepted.
_FIELD_ALIASES: dict[str, str] = {
    "value": "value",
    "name": "name",
    "contextId": "context_id",
    "context_id": "context_id",
    "qualifier": "qualifier",
    "qualifiers": "qualifiers",
    "url": "url",
    "path": "path",
    "decode404": "decode404",
    "configuration": "configuration",
    "fallback": "fallback",
    "fallbackFactory": "fallback_factory",
    "fallback_factory": "fallback_factory",
    "primary": "primary",
}

_STRING_FIELDS = frozenset({"value", "name", "context_id", "qualifier", "url", "path"})
_BOOL_FIELDS = frozenset({"decode404", "primary"})
_SEQUENCE_FIELDS = frozenset({"qualifiers", "configuration"})


class DeclarationError(ValueError):
    """Raised when a declaration document cannot be read into ``RawAttributes``.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    index:
        Position of the offending declaration in the document, if known.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        where = f"declaration #{index}: " if index is not None else ""
        super().__init__(f"{where}{message}")


@dataclass(frozen=True)
class DeclarationSet:
    """All declarations of one document plus its resolver settings."""

    clients: tuple[RawAttributes, ...] = field(default=())
    settings: ResolverSettings = field(default_factory=ResolverSettings)

    def __len__(self) -> int:
        return len(self.clients)


class DeclarationSerializer:
    """Reads declaration documents into ``RawAttributes`` values."""

    # ------------------------------------------------------------------
    # Single declarations
    # ------------------------------------------------------------------

    def from_dict(self, data: Mapping[str, Any], index: int | None = None) -> RawAttributes:
        """Build one ``RawAttributes`` from a declaration mapping.

        Raises
        ------
        DeclarationError
            On unknown keys or values of an impossible shape.
        """
        if not isinstance(data, Mapping):
            raise DeclarationError(
                f"expected a mapping, got {type(data).__name__}", index
            )
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            target = _FIELD_ALIASES.get(key)
            if target is None:
                raise DeclarationError(
                    f"unknown attribute {key!r}; expected one of "
                    f"{sorted(k for k in _FIELD_ALIASES if '_' not in k)}",
                    index,
                )
            if target in kwargs:
                raise DeclarationError(f"attribute {key!r} is declared twice", index)
            kwargs[target] = self._coerce(target, key, value, index)
        return RawAttributes(**kwargs)

    def to_dict(self, raw: RawAttributes) -> dict[str, object]:
        """Serialize a declaration back to a camelCase mapping."""
        return {
            "value": raw.value,
            "name": raw.name,
            "contextId": raw.context_id,
            "qualifier": raw.qualifier,
            "qualifiers": list(raw.qualifiers),
            "url": raw.url,
            "path": raw.path,
            "decode404": raw.decode404,
            "configuration": [type_ref_name(c) for c in raw.configuration],
            "fallback": _optional_ref(raw.fallback),
            "fallbackFactory": _optional_ref(raw.fallback_factory),
            "primary": raw.primary,
        }

    @staticmethod
    def _coerce(target: str, key: str, value: Any, index: int | None) -> Any:
        if target in _STRING_FIELDS:
            if value is None:
                return ""
            if isinstance(value, (str, int, float)) and not isinstance(value, bool):
                return str(value)
            raise DeclarationError(
                f"attribute {key!r} must be a string, got {type(value).__name__}", index
            )
        if target in _BOOL_FIELDS:
            if not isinstance(value, bool):
                raise DeclarationError(
                    f"attribute {key!r} must be true or false, got {value!r}", index
                )
            return value
        if target in _SEQUENCE_FIELDS:
            if value is None:
                return ()
            if isinstance(value, str):
                return (value,)
            if isinstance(value, Sequence):
                if target == "qualifiers":
                    return tuple(q if q is None or isinstance(q, str) else str(q) for q in value)
                for entry in value:
                    if not isinstance(entry, str):
                        raise DeclarationError(
                            f"attribute {key!r} entries must be import-path strings, "
                            f"got {type(entry).__name__}",
                            index,
                        )
                return tuple(value)
            raise DeclarationError(
                f"attribute {key!r} must be a list, got {type(value).__name__}", index
            )
        # fallback / fallbackFactory: shape is checked by the resolver
        return value

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def load_document(self, data: Any) -> DeclarationSet:
        """Read a whole document: one declaration, a list, or ``clients``/``defaults``."""
        if data is None:
            return DeclarationSet()
        if isinstance(data, Mapping) and ("clients" in data or "defaults" in data):
            extra = set(data) - {"clients", "defaults"}
            if extra:
                raise DeclarationError(
                    f"unknown top-level key(s) {sorted(extra)}; "
                    "expected 'clients' and 'defaults'"
                )
            try:
                settings = ResolverSettings.from_mapping(data.get("defaults"))
            except (TypeError, ValueError) as exc:
                raise DeclarationError(f"invalid defaults: {exc}") from exc
            entries = data.get("clients") or []
        elif isinstance(data, Mapping):
            settings = ResolverSettings()
            entries = [data]
        else:
            settings = ResolverSettings()
            entries = data
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            raise DeclarationError(
                f"'clients' must be a list, got {type(entries).__name__}"
            )
        clients = tuple(self.from_dict(entry, index=i) for i, entry in enumerate(entries))
        return DeclarationSet(clients=clients, settings=settings)

    def from_json(self, text: str) -> DeclarationSet:
        """Read a declaration document from a JSON string."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DeclarationError(f"invalid JSON: {exc}") from exc
        return self.load_document(data)

    def from_yaml(self, text: str) -> DeclarationSet:
        """Read a declaration document from a YAML string."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DeclarationError(f"invalid YAML: {exc}") from exc
        return self.load_document(data)

    def load(self, path: str | Path) -> DeclarationSet:
        """Read a declaration file; ``.json`` is parsed as JSON, anything else as YAML."""
        file_path = Path(path)
        text = file_path.read_text(encoding="utf-8")
        if file_path.suffix.lower() == ".json":
            return self.from_json(text)
        return self.from_yaml(text)


class DescriptorSerializer:
    """Converts ``ClientDescriptor`` objects to and from plain dicts."""

    def to_dict(self, descriptor: ClientDescriptor) -> dict[str, object]:
        """Serialize a descriptor to a JSON-compatible dict."""
        return {
            "identity": descriptor.identity,
            "contextId": descriptor.context_id,
            "beanQualifiers": list(descriptor.bean_qualifiers),
            "fallbackType": _optional_ref(descriptor.fallback_type),
            "fallbackFactoryType": _optional_ref(descriptor.fallback_factory_type),
            "configurationClasses": [
                type_ref_name(c) for c in descriptor.configuration_classes
            ],
            "endpoint": descriptor.endpoint,
            "decode404": descriptor.decode404,
            "primary": descriptor.primary,
        }

    def from_dict(self, data: Mapping[str, Any]) -> ClientDescriptor:
        """Rebuild a descriptor; type references stay as strings."""
        return ClientDescriptor(
            identity=str(data["identity"]),
            context_id=str(data["contextId"]),
            bean_qualifiers=tuple(data.get("beanQualifiers", ())),
            fallback_type=data.get("fallbackType"),
            fallback_factory_type=data.get("fallbackFactoryType"),
            configuration_classes=tuple(data.get("configurationClasses", ())),
            endpoint=str(data.get("endpoint", "")),
            decode404=bool(data.get("decode404", False)),
            primary=bool(data.get("primary", True)),
        )

    # ------------------------------------------------------------------
    # JSON / YAML helpers
    # ------------------------------------------------------------------

    def to_json(self, descriptors: Sequence[ClientDescriptor], indent: int = 2) -> str:
        """Serialize descriptors to a JSON array."""
        return json.dumps(
            [self.to_dict(d) for d in descriptors], indent=indent, ensure_ascii=False
        )

    def to_yaml(self, descriptors: Sequence[ClientDescriptor]) -> str:
        """Serialize descriptors to a YAML list."""
        return yaml.dump(
            [self.to_dict(d) for d in descriptors],
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def _optional_ref(ref: TypeRef | None) -> str | None:
    return type_ref_name(ref) if ref is not None else None
