"""Endpoint composition from ``url``, protocol and ``path``.

Rules:

* blank ``url``: the endpoint is the stripped ``path`` with a leading ``/``
  (service-name routing); placeholders are kept as declared;
* ``url`` without ``://``: ``<default_protocol>://`` is prefixed, unless
  the URL is an unresolved placeholder or a relative path;
* ``path`` is appended with exactly one ``/`` at the boundary.

Composition is idempotent: feeding an endpoint back in as ``url`` with an
empty ``path`` returns it unchanged.
"""
from __future__ import annotations

from urllib.parse import urlsplit

from clientspec.model.nodes import is_blank, is_placeholder
from clientspec.resolver.errors import InvalidEndpointDeclaration
from clientspec.settings import DEFAULT_PROTOCOL


def compose_url(url: str, default_protocol: str = DEFAULT_PROTOCOL) -> str:
    """Prefix ``default_protocol`` when ``url`` carries no scheme of its own."""
    url = url.strip()
    if "://" in url or url.startswith("/") or is_placeholder(url):
        return url
    return f"{default_protocol}://{url}"


def join_path(base: str, path: str) -> str:
    """Append ``path`` to ``base`` with a single ``/`` between them."""
    if not path:
        return base
    if not base:
        return path
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def anchor_path(path: str) -> str:
    """Prefix ``/`` to a non-empty path that lacks one; placeholders are left alone."""
    if not path or path.startswith("/") or is_placeholder(path):
        return path
    return f"/{path}"


def _check_url(url: str) -> None:
    if url.startswith("/") or is_placeholder(url):
        return
    if any(ch.isspace() for ch in url):
        raise InvalidEndpointDeclaration(
            f"url {url!r} contains whitespace", attribute="url"
        )
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidEndpointDeclaration(
            f"url {url!r} is malformed: {exc}", attribute="url"
        ) from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidEndpointDeclaration(
            f"url {url!r} is malformed: no host", attribute="url"
        )


def resolve_endpoint(
    url: str | None,
    path: str | None,
    default_protocol: str = DEFAULT_PROTOCOL,
) -> str:
    """Compose the endpoint for one client.

    Raises
    ------
    InvalidEndpointDeclaration
        If a placeholder-free URL has no host or contains whitespace.
    """
    path = (path or "").strip()
    if is_blank(url):
        return anchor_path(path)
    base = compose_url(url, default_protocol)  # type: ignore[arg-type]
    _check_url(base)
    return join_path(base, path)
