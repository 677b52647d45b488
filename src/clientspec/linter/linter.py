"""Declaration linter: advisory checks for client declarations.

The ``DeclarationLinter`` runs a configurable set of rules against a
``RawAttributes`` and returns ``Diagnostic`` objects.  Unlike the
resolver (which fails on declarations it cannot turn into a
descriptor), the linter flags declarations that resolve fine but
probably do not say what their author meant.

Usage
-----
::

    from clientspec.linter import DeclarationLinter
    from clientspec.model import RawAttributes

    raw = RawAttributes(name="catalog", qualifier="legacy")
    diagnostics = DeclarationLinter().lint(raw)
"""
from __future__ import annotations

import logging

from clientspec.linter.diagnostics import Diagnostic, DiagnosticSeverity
from clientspec.linter.rules import DEFAULT_RULES, Rule
from clientspec.model.nodes import RawAttributes

logger = logging.getLogger(__name__)


class DeclarationLinter:
    """Configurable declaration linter.

    Parameters
    ----------
    rules:
        Lint rules to run.  Defaults to all built-in rules.
    include_hints:
        If ``False``, HINT-level diagnostics are suppressed.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        include_hints: bool = True,
    ) -> None:
        self._rules: list[Rule] = rules if rules is not None else list(DEFAULT_RULES)
        self._include_hints = include_hints

    def lint(self, raw: RawAttributes) -> list[Diagnostic]:
        """Run all lint rules against ``raw``.

        Returns
        -------
        list[Diagnostic]
            All findings, sorted by attribute declaration order.
        """
        all_diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                all_diagnostics.extend(rule(raw))
            except Exception as exc:  # noqa: BLE001
                # A broken rule is reported as a finding instead of aborting the run.
                logger.exception("Lint rule %r failed on %r", rule.__name__, raw.label)
                all_diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        code="LINT-999",
                        message=f"Internal linter error in rule {rule.__name__!r}: {exc}",
                        attribute="",
                        client=raw.label,
                        suggestion="Please report this as a bug",
                        rule=rule.__name__,
                    )
                )

        if not self._include_hints:
            all_diagnostics = [
                d for d in all_diagnostics if d.severity != DiagnosticSeverity.HINT
            ]

        all_diagnostics.sort(key=lambda d: d.sort_key)
        return all_diagnostics

    def add_rule(self, rule: Rule) -> None:
        """Add a custom lint rule.

        Parameters
        ----------
        rule:
            A callable ``(RawAttributes) -> list[Diagnostic]``.
        """
        self._rules.append(rule)

    @property
    def rule_count(self) -> int:
        """Return the number of rules currently registered."""
        return len(self._rules)


def lint(raw: RawAttributes, include_hints: bool = True) -> list[Diagnostic]:
    """Convenience function: lint one declaration with all default rules."""
    return DeclarationLinter(include_hints=include_hints).lint(raw)
