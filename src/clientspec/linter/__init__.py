"""Declaration linter module.

Exports the ``DeclarationLinter`` class, the ``lint`` convenience
function, ``Diagnostic`` types, and the built-in rules.
"""
from __future__ import annotations

from clientspec.linter.diagnostics import Diagnostic, DiagnosticSeverity
from clientspec.linter.linter import DeclarationLinter, lint
from clientspec.linter.rules import DEFAULT_RULES, Rule

__all__ = [
    "DeclarationLinter",
    "lint",
    "Diagnostic",
    "DiagnosticSeverity",
    "Rule",
    "DEFAULT_RULES",
]
