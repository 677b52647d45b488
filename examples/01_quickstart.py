#!/usr/bin/env python3
"""Example: Quickstart — clientspec

Minimal working example: resolve a client declaration into a
descriptor, then lint it for deprecated or redundant attributes.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install clientspec
"""
from __future__ import annotations

import clientspec
from clientspec.resolver import DescriptorValidationFailed, ResolutionError


class CatalogFallback:
    """Stand-in fallback implementation."""


def main() -> None:
    print(f"clientspec version: {clientspec.__version__}")

    # Step 1: Resolve a declaration that relies on every default
    raw = clientspec.RawAttributes(name="catalog", path="/v1")
    descriptor = clientspec.resolve(raw)
    print(f"Resolved {descriptor.context_id!r}: "
          f"qualifiers={list(descriptor.bean_qualifiers)}, "
          f"endpoint={descriptor.endpoint!r}")

    # Step 2: The deprecated singular qualifier only wins when the plural is empty
    legacy = clientspec.RawAttributes(
        value="orders",
        url="orders.internal:8080",
        path="api",
        qualifier="legacyOrders",
        qualifiers=("", "  "),
        fallback=CatalogFallback,
    )
    descriptor = clientspec.resolve(legacy)
    print(f"Resolved {descriptor.context_id!r}: "
          f"qualifiers={list(descriptor.bean_qualifiers)}, "
          f"endpoint={descriptor.endpoint!r}")

    # Step 3: Lint the same declaration
    for finding in clientspec.lint(legacy):
        print(f"  {finding}")

    # Step 4: A broken declaration reports every problem at once
    broken = clientspec.RawAttributes(name="billing", fallback="", url="http://")
    try:
        clientspec.resolve(broken)
    except DescriptorValidationFailed as exc:
        print(exc)
    except ResolutionError as exc:
        print(f"Identity error: {exc}")


if __name__ == "__main__":
    main()
