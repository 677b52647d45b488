"""Resolver settings.

Settings hold the values the resolver does not own itself: the protocol
assumed for scheme-less URLs, the suffix of the default qualifier, and
configuration references contributed by the surrounding application.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from clientspec.model.nodes import TypeRef

DEFAULT_PROTOCOL = "http"
DEFAULT_QUALIFIER_SUFFIX = "FeignClient"


@dataclass(frozen=True)
class ResolverSettings:
    """Options shared by every resolution a ``DescriptorBuilder`` performs.

    Parameters
    ----------
    default_protocol:
        Scheme prefixed to URLs that do not declare one.
    qualifier_suffix:
        Appended to the context id to form the default qualifier.
    default_configuration:
        Configuration references merged after each client's own.
    log_advisories:
        When ``True``, lint findings are logged at WARNING on every build.
    """

    default_protocol: str = DEFAULT_PROTOCOL
    qualifier_suffix: str = DEFAULT_QUALIFIER_SUFFIX
    default_configuration: tuple[TypeRef, ...] = field(default=())
    log_advisories: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ResolverSettings":
        """Build settings from the ``defaults`` section of a declaration document.

        Both camelCase and snake_case keys are accepted, and a ``null``
        value counts as absent.  Unknown keys, non-string protocol or
        suffix values, and configuration entries that are neither classes
        nor strings raise ``ValueError``.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"settings must be a mapping, got {type(data).__name__}")
        aliases = {
            "protocol": "default_protocol",
            "defaultProtocol": "default_protocol",
            "default_protocol": "default_protocol",
            "qualifierSuffix": "qualifier_suffix",
            "qualifier_suffix": "qualifier_suffix",
            "configuration": "default_configuration",
            "defaultConfiguration": "default_configuration",
            "default_configuration": "default_configuration",
            "logAdvisories": "log_advisories",
            "log_advisories": "log_advisories",
        }
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in aliases:
                raise ValueError(
                    f"Unknown settings key {key!r}; expected one of {sorted(aliases)}"
                )
            if value is not None:
                kwargs[aliases[key]] = value
        for name in ("default_protocol", "qualifier_suffix"):
            if name in kwargs and not isinstance(kwargs[name], str):
                raise ValueError(
                    f"{name} must be a string, got {type(kwargs[name]).__name__}"
                )
        if "default_configuration" in kwargs:
            configuration = kwargs["default_configuration"]
            if isinstance(configuration, (str, type)):
                configuration = (configuration,)
            if not isinstance(configuration, (list, tuple)):
                raise ValueError(
                    f"default configuration must be a list, got {type(configuration).__name__}"
                )
            for entry in configuration:
                if not isinstance(entry, (str, type)):
                    raise ValueError(
                        "default configuration entries must be classes or import paths, "
                        f"got {type(entry).__name__}"
                    )
            kwargs["default_configuration"] = tuple(configuration)
        if "log_advisories" in kwargs:
            kwargs["log_advisories"] = bool(kwargs["log_advisories"])
        return cls(**kwargs)

    def with_overrides(self, **changes: Any) -> "ResolverSettings":
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
