"""Unit tests for clientspec.linter — rules, DeclarationLinter and Diagnostic."""
from __future__ import annotations

import pytest

from clientspec.linter import DEFAULT_RULES, DeclarationLinter, Diagnostic, DiagnosticSeverity, lint
from clientspec.linter.rules import (
    rule_blank_qualifiers,
    rule_both_fallbacks,
    rule_deprecated_qualifier,
    rule_duplicate_configuration,
    rule_redundant_alias,
    rule_relative_path,
    rule_url_without_protocol,
)
from clientspec.model.nodes import RawAttributes


def _codes(diagnostics: list[Diagnostic]) -> list[str]:
    return [d.code for d in diagnostics]


# ===========================================================================
# Individual rules
# ===========================================================================


class TestIdentityRules:
    def test_redundant_alias(self) -> None:
        result = rule_redundant_alias(RawAttributes(name="a", value="a"))
        assert _codes(result) == ["LINT-I001"]
        assert result[0].severity == DiagnosticSeverity.HINT

    def test_single_alias_is_clean(self) -> None:
        assert rule_redundant_alias(RawAttributes(name="a")) == []


class TestQualifierRules:
    def test_deprecated_qualifier_in_use(self) -> None:
        result = rule_deprecated_qualifier(RawAttributes(name="a", qualifier="legacy", qualifiers=("",)))
        assert _codes(result) == ["LINT-Q001"]
        assert result[0].attribute == "qualifier"

    def test_deprecated_qualifier_ignored(self) -> None:
        result = rule_deprecated_qualifier(RawAttributes(name="a", qualifier="legacy", qualifiers=("q",)))
        assert _codes(result) == ["LINT-Q002"]
        assert result[0].severity == DiagnosticSeverity.WARNING

    def test_no_singular_qualifier(self) -> None:
        assert rule_deprecated_qualifier(RawAttributes(name="a", qualifiers=("q",))) == []

    def test_blank_qualifier_entries(self) -> None:
        result = rule_blank_qualifiers(RawAttributes(name="a", qualifiers=("", "q", None)))
        assert _codes(result) == ["LINT-Q003"]
        assert "2 blank entries" in result[0].message

    def test_one_blank_qualifier_entry(self) -> None:
        result = rule_blank_qualifiers(RawAttributes(name="a", qualifiers=(" ",)))
        assert "1 blank entry" in result[0].message


class TestEndpointRules:
    def test_url_without_protocol(self) -> None:
        result = rule_url_without_protocol(RawAttributes(name="a", url="orders:8080"))
        assert _codes(result) == ["LINT-E001"]

    @pytest.mark.parametrize("url", ["", "https://orders", "${orders.url}", "/local"])
    def test_url_with_protocol_is_clean(self, url: str) -> None:
        assert rule_url_without_protocol(RawAttributes(name="a", url=url)) == []

    def test_relative_path_without_url(self) -> None:
        result = rule_relative_path(RawAttributes(name="a", path="v1"))
        assert _codes(result) == ["LINT-E002"]
        assert result[0].suggestion == "Use '/v1'"

    def test_relative_path_with_url_is_clean(self) -> None:
        assert rule_relative_path(RawAttributes(name="a", url="http://h", path="v1")) == []


class TestConfigurationAndFallbackRules:
    def test_duplicate_configuration_reported_once(self) -> None:
        raw = RawAttributes(name="a", configuration=("pkg:A", "pkg:B", "pkg:A", "pkg:A"))
        result = rule_duplicate_configuration(raw)
        assert _codes(result) == ["LINT-C001"]
        assert "pkg:A" in result[0].message

    def test_both_fallbacks(self) -> None:
        raw = RawAttributes(name="a", fallback="pkg:F", fallback_factory="pkg:FF")
        assert _codes(rule_both_fallbacks(raw)) == ["LINT-F001"]

    def test_one_fallback_is_clean(self) -> None:
        assert rule_both_fallbacks(RawAttributes(name="a", fallback="pkg:F")) == []


# ===========================================================================
# DeclarationLinter
# ===========================================================================


class TestDeclarationLinter:
    def test_clean_declaration(self) -> None:
        assert lint(RawAttributes(name="catalog", path="/v1")) == []

    def test_sorted_by_attribute_order(self) -> None:
        raw = RawAttributes(
            name="a",
            value="a",
            qualifier="legacy",
            url="orders",
            fallback="pkg:F",
            fallback_factory="pkg:FF",
        )
        assert _codes(lint(raw)) == ["LINT-I001", "LINT-Q001", "LINT-E001", "LINT-F001"]

    def test_hints_suppressed(self) -> None:
        raw = RawAttributes(name="a", value="a", qualifier="legacy")
        assert _codes(lint(raw, include_hints=False)) == ["LINT-Q001"]

    def test_findings_carry_client_label(self) -> None:
        result = lint(RawAttributes(name="a", context_id="ctx", qualifier="legacy"))
        assert result[0].client == "ctx"

    def test_rule_count_and_add_rule(self) -> None:
        linter = DeclarationLinter()
        assert linter.rule_count == len(DEFAULT_RULES)
        linter.add_rule(lambda raw: [])
        assert linter.rule_count == len(DEFAULT_RULES) + 1

    def test_broken_rule_reported_as_error(self) -> None:
        def rule_broken(raw: RawAttributes) -> list[Diagnostic]:
            raise RuntimeError("boom")

        result = DeclarationLinter(rules=[rule_broken]).lint(RawAttributes(name="a"))
        assert _codes(result) == ["LINT-999"]
        assert result[0].is_error
        assert "boom" in result[0].message


class TestDiagnostic:
    def test_str(self) -> None:
        diag = Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code="LINT-Q001",
            message="deprecated",
            attribute="qualifier",
            client="catalog",
            suggestion="use qualifiers",
        )
        assert str(diag) == "[LINT-Q001] WARNING catalog.qualifier: deprecated (hint: use qualifiers)"

    def test_unknown_attribute_sorts_last(self) -> None:
        diag = Diagnostic(DiagnosticSeverity.HINT, "X", "m", attribute="other")
        assert diag.sort_key[0] > Diagnostic(DiagnosticSeverity.HINT, "X", "m", attribute="primary").sort_key[0]
