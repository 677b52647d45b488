"""Unit tests for clientspec.model.serializer — declaration loading and
descriptor output.
"""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from clientspec.model.nodes import ClientDescriptor, RawAttributes
from clientspec.model.serializer import (
    DeclarationError,
    DeclarationSerializer,
    DeclarationSet,
    DescriptorSerializer,
)
from clientspec.resolver import resolve


class OrdersFallback:
    pass


# ===========================================================================
# DeclarationSerializer.from_dict
# ===========================================================================


class TestDeclarationFromDict:
    def test_camel_case_keys(self) -> None:
        raw = DeclarationSerializer().from_dict(
            {"name": "orders", "contextId": "ordersCfg", "fallbackFactory": "pkg:F"}
        )
        assert raw == RawAttributes(name="orders", context_id="ordersCfg", fallback_factory="pkg:F")

    def test_snake_case_keys(self) -> None:
        raw = DeclarationSerializer().from_dict({"name": "orders", "context_id": "ordersCfg"})
        assert raw.context_id == "ordersCfg"

    def test_defaults(self) -> None:
        assert DeclarationSerializer().from_dict({}) == RawAttributes()

    def test_sequences_become_tuples(self) -> None:
        raw = DeclarationSerializer().from_dict(
            {"qualifiers": ["a", None, 7], "configuration": ["pkg:A"]}
        )
        assert raw.qualifiers == ("a", None, "7")
        assert raw.configuration == ("pkg:A",)

    def test_single_string_for_list(self) -> None:
        raw = DeclarationSerializer().from_dict({"qualifiers": "a"})
        assert raw.qualifiers == ("a",)

    def test_null_string_becomes_empty(self) -> None:
        assert DeclarationSerializer().from_dict({"url": None}).url == ""

    def test_numbers_become_strings(self) -> None:
        assert DeclarationSerializer().from_dict({"name": 42}).name == "42"

    def test_unknown_key(self) -> None:
        with pytest.raises(DeclarationError, match="unknown attribute 'nmae'"):
            DeclarationSerializer().from_dict({"nmae": "orders"}, index=3)

    def test_unknown_key_reports_index(self) -> None:
        with pytest.raises(DeclarationError) as excinfo:
            DeclarationSerializer().from_dict({"nmae": "orders"}, index=3)
        assert excinfo.value.index == 3
        assert "declaration #3" in str(excinfo.value)

    def test_duplicate_spelling(self) -> None:
        with pytest.raises(DeclarationError, match="declared twice"):
            DeclarationSerializer().from_dict({"contextId": "a", "context_id": "b"})

    def test_bool_must_be_bool(self) -> None:
        with pytest.raises(DeclarationError, match="true or false"):
            DeclarationSerializer().from_dict({"primary": "yes"})

    def test_string_must_be_scalar(self) -> None:
        with pytest.raises(DeclarationError, match="must be a string"):
            DeclarationSerializer().from_dict({"url": ["a"]})

    def test_list_must_be_sequence(self) -> None:
        with pytest.raises(DeclarationError, match="must be a list"):
            DeclarationSerializer().from_dict({"qualifiers": {"a": 1}})

    @pytest.mark.parametrize("entry", [{"a": 1}, ["pkg:A"], 7, None])
    def test_configuration_entries_must_be_strings(self, entry: object) -> None:
        with pytest.raises(DeclarationError, match="entries must be import-path strings"):
            DeclarationSerializer().from_dict({"configuration": ["pkg:A", entry]})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(DeclarationError, match="expected a mapping"):
            DeclarationSerializer().from_dict(["name"])  # type: ignore[arg-type]

    def test_fallback_passed_through_for_resolver(self) -> None:
        raw = DeclarationSerializer().from_dict({"fallback": 42})
        assert raw.fallback == 42

    def test_to_dict(self) -> None:
        raw = RawAttributes(name="orders", fallback=OrdersFallback)
        data = DeclarationSerializer().to_dict(raw)
        assert data["name"] == "orders"
        assert data["fallback"] == f"{__name__}:OrdersFallback"
        assert data["fallbackFactory"] is None


# ===========================================================================
# Documents
# ===========================================================================


class TestDocuments:
    def test_yaml_document_with_defaults(self, shop_yaml: str) -> None:
        declarations = DeclarationSerializer().from_yaml(shop_yaml)
        assert len(declarations) == 2
        assert declarations.settings.default_configuration == ("shop.feign:SharedConfig",)
        orders = declarations.clients[1]
        assert orders.value == "orders"
        assert orders.qualifiers == ("", "ordersClient")
        assert orders.decode404 is True

    def test_single_mapping(self) -> None:
        declarations = DeclarationSerializer().load_document({"name": "catalog"})
        assert declarations.clients == (RawAttributes(name="catalog"),)

    def test_list_of_mappings(self) -> None:
        declarations = DeclarationSerializer().load_document([{"name": "a"}, {"name": "b"}])
        assert [c.name for c in declarations.clients] == ["a", "b"]

    def test_empty_document(self) -> None:
        assert DeclarationSerializer().from_yaml("") == DeclarationSet()

    def test_json_document(self) -> None:
        text = json.dumps({"clients": [{"name": "a", "decode404": True}]})
        declarations = DeclarationSerializer().from_json(text)
        assert declarations.clients[0].decode404 is True

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(DeclarationError, match="unknown top-level"):
            DeclarationSerializer().load_document({"clients": [], "extra": 1})

    def test_clients_must_be_list(self) -> None:
        with pytest.raises(DeclarationError, match="must be a list"):
            DeclarationSerializer().load_document({"clients": {"name": "a"}})

    def test_invalid_defaults(self) -> None:
        with pytest.raises(DeclarationError, match="invalid defaults"):
            DeclarationSerializer().load_document({"defaults": {"colour": "red"}, "clients": []})

    def test_unhashable_configuration_in_yaml(self) -> None:
        with pytest.raises(DeclarationError, match="declaration #0"):
            DeclarationSerializer().from_yaml("name: c\nconfiguration:\n  - {a: 1}\n")

    def test_unhashable_default_configuration(self) -> None:
        with pytest.raises(DeclarationError, match="invalid defaults"):
            DeclarationSerializer().from_yaml(
                "defaults:\n  configuration:\n    - [nested]\nclients: []\n"
            )

    def test_invalid_yaml(self) -> None:
        with pytest.raises(DeclarationError, match="invalid YAML"):
            DeclarationSerializer().from_yaml("clients: [unclosed")

    def test_invalid_json(self) -> None:
        with pytest.raises(DeclarationError, match="invalid JSON"):
            DeclarationSerializer().from_json("{")

    def test_load_by_suffix(self, tmp_path: Path, shop_file: Path) -> None:
        json_file = tmp_path / "clients.json"
        json_file.write_text(json.dumps([{"name": "a"}]), encoding="utf-8")
        assert len(DeclarationSerializer().load(json_file)) == 1
        assert len(DeclarationSerializer().load(shop_file)) == 2


# ===========================================================================
# DescriptorSerializer
# ===========================================================================


class TestDescriptorSerializer:
    def test_to_dict(self) -> None:
        descriptor = resolve(
            RawAttributes(name="orders", fallback=OrdersFallback, configuration=("pkg:A",))
        )
        data = DescriptorSerializer().to_dict(descriptor)
        assert data == {
            "identity": "orders",
            "contextId": "orders",
            "beanQualifiers": ["ordersFeignClient"],
            "fallbackType": f"{__name__}:OrdersFallback",
            "fallbackFactoryType": None,
            "configurationClasses": ["pkg:A"],
            "endpoint": "",
            "decode404": False,
            "primary": True,
        }

    def test_from_dict(self) -> None:
        descriptor = resolve(RawAttributes(name="orders", fallback="pkg:F", url="orders"))
        serializer = DescriptorSerializer()
        assert serializer.from_dict(serializer.to_dict(descriptor)) == descriptor

    def test_to_json(self) -> None:
        descriptor = ClientDescriptor(identity="a", context_id="a")
        data = json.loads(DescriptorSerializer().to_json([descriptor]))
        assert data[0]["identity"] == "a"

    def test_to_yaml_keeps_key_order(self) -> None:
        descriptor = ClientDescriptor(identity="a", context_id="a")
        text = DescriptorSerializer().to_yaml([descriptor])
        assert text.startswith("- identity: a\n  contextId: a\n")
        assert yaml.safe_load(text)[0]["primary"] is True
