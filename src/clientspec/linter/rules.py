"""Built-in lint rules for client declarations.

Each rule is a callable that accepts a ``RawAttributes`` and returns a
list of ``Diagnostic`` objects.  Rules never raise for well-formed
input and never change what the resolver produces.

Rule codes:

    LINT-I001  name and value both declared with the same string
    LINT-Q001  deprecated ``qualifier`` supplies the qualifier
    LINT-Q002  ``qualifier`` ignored because ``qualifiers`` has values
    LINT-Q003  blank entries in ``qualifiers`` are dropped
    LINT-E001  url declared without a protocol
    LINT-E002  path without a leading ``/`` and no url
    LINT-C001  configuration reference listed more than once
    LINT-F001  both fallback and fallbackFactory declared
"""
from __future__ import annotations

from typing import Callable

from clientspec.linter.diagnostics import Diagnostic, DiagnosticSeverity
from clientspec.model.nodes import RawAttributes, is_blank, is_placeholder, type_ref_name
from clientspec.resolver.qualifiers import clean_qualifiers

Rule = Callable[[RawAttributes], list[Diagnostic]]


def _make(
    code: str,
    severity: DiagnosticSeverity,
    message: str,
    attribute: str,
    raw: RawAttributes,
    suggestion: str | None = None,
    rule: str = "",
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        attribute=attribute,
        client=raw.label,
        suggestion=suggestion,
        rule=rule,
    )


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


def rule_redundant_alias(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-I001: ``name`` and ``value`` are synonyms; one is enough."""
    if is_blank(raw.name) or is_blank(raw.value) or raw.name != raw.value:
        return []
    return [_make(
        "LINT-I001",
        DiagnosticSeverity.HINT,
        f"'name' and 'value' both declare {raw.name!r}",
        "value",
        raw,
        suggestion="Remove 'value' and keep 'name'",
        rule="redundant_alias",
    )]


# ---------------------------------------------------------------------------
# Qualifiers
# ---------------------------------------------------------------------------


def rule_deprecated_qualifier(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-Q001 / LINT-Q002: the singular ``qualifier`` is deprecated."""
    if is_blank(raw.qualifier):
        return []
    if clean_qualifiers(raw.qualifiers):
        return [_make(
            "LINT-Q002",
            DiagnosticSeverity.WARNING,
            f"deprecated 'qualifier' {raw.qualifier!r} is ignored because "
            "'qualifiers' declares values",
            "qualifier",
            raw,
            suggestion="Remove 'qualifier' or add its value to 'qualifiers'",
            rule="deprecated_qualifier",
        )]
    return [_make(
        "LINT-Q001",
        DiagnosticSeverity.WARNING,
        f"deprecated 'qualifier' {raw.qualifier!r} supplies the bean qualifier",
        "qualifier",
        raw,
        suggestion=f"Declare qualifiers: [{raw.qualifier!r}] instead",
        rule="deprecated_qualifier",
    )]


def rule_blank_qualifiers(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-Q003: blank ``qualifiers`` entries are silently dropped."""
    dropped = len(raw.qualifiers) - len(clean_qualifiers(raw.qualifiers))
    if not dropped:
        return []
    return [_make(
        "LINT-Q003",
        DiagnosticSeverity.HINT,
        f"{dropped} blank entr{'y' if dropped == 1 else 'ies'} in 'qualifiers' "
        "will be dropped",
        "qualifiers",
        raw,
        suggestion="Remove empty qualifier entries",
        rule="blank_qualifiers",
    )]


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------


def rule_url_without_protocol(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-E001: a scheme-less url gets the default protocol prefixed."""
    if is_blank(raw.url):
        return []
    url = raw.url.strip()
    if "://" in url or url.startswith("/") or is_placeholder(url):
        return []
    return [_make(
        "LINT-E001",
        DiagnosticSeverity.INFORMATION,
        f"url {url!r} has no protocol; the default protocol will be prefixed",
        "url",
        raw,
        suggestion=f"Write 'https://{url}' or 'http://{url}' explicitly",
        rule="url_without_protocol",
    )]


def rule_relative_path(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-E002: without a url a relative path is anchored at ``/`` in the endpoint."""
    if not is_blank(raw.url) or is_blank(raw.path) or raw.path.strip().startswith("/"):
        return []
    if is_placeholder(raw.path):
        return []
    return [_make(
        "LINT-E002",
        DiagnosticSeverity.HINT,
        f"path {raw.path!r} does not start with '/'; the endpoint adds one",
        "path",
        raw,
        suggestion=f"Use '/{raw.path.strip()}'",
        rule="relative_path",
    )]


# ---------------------------------------------------------------------------
# Configuration and fallbacks
# ---------------------------------------------------------------------------


def rule_duplicate_configuration(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-C001: repeated configuration references are collapsed."""
    diagnostics: list[Diagnostic] = []
    seen: set[object] = set()
    reported: set[object] = set()
    for ref in raw.configuration:
        if ref in seen and ref not in reported:
            reported.add(ref)
            diagnostics.append(_make(
                "LINT-C001",
                DiagnosticSeverity.HINT,
                f"configuration {type_ref_name(ref)!r} is listed more than once",
                "configuration",
                raw,
                suggestion="Remove the repeated entry",
                rule="duplicate_configuration",
            ))
        seen.add(ref)
    return diagnostics


def rule_both_fallbacks(raw: RawAttributes) -> list[Diagnostic]:
    """LINT-F001: precedence between fallback and fallbackFactory is up to the consumer."""
    if raw.fallback is None or raw.fallback_factory is None:
        return []
    return [_make(
        "LINT-F001",
        DiagnosticSeverity.WARNING,
        "both 'fallback' and 'fallbackFactory' are declared; the client "
        "factory decides which one applies",
        "fallbackFactory",
        raw,
        suggestion="Keep only one of 'fallback' and 'fallbackFactory'",
        rule="both_fallbacks",
    )]


DEFAULT_RULES: list[Rule] = [
    rule_redundant_alias,
    rule_deprecated_qualifier,
    rule_blank_qualifiers,
    rule_url_without_protocol,
    rule_relative_path,
    rule_duplicate_configuration,
    rule_both_fallbacks,
]
