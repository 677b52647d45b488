#!/usr/bin/env python3
"""Example: Declaration files

Loads client declarations from YAML, resolves them into a registry
keyed by context id, and prints the descriptors as JSON.

Usage:
    python examples/02_declaration_file.py

Requirements:
    pip install clientspec
"""
from __future__ import annotations

from pathlib import Path

import clientspec
from clientspec.model import DescriptorSerializer

DECLARATIONS = Path(__file__).with_name("clients.yaml")


def main() -> None:
    registry = clientspec.resolve_file(DECLARATIONS)
    print(f"Registered clients: {registry.list_context_ids()}")

    orders = registry.get("ordersCfg")
    print(f"ordersCfg endpoint: {orders.endpoint}")
    print(f"ordersCfg qualifiers: {list(orders.bean_qualifiers)}")

    print(DescriptorSerializer().to_json(list(registry)))


if __name__ == "__main__":
    main()
