"""Shared test fixtures for clientspec.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "clientspec"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


SHOP_YAML = """\
defaults:
  configuration:
    - shop.feign:SharedConfig
clients:
  - name: catalog
    path: /v1
  - value: orders
    contextId: ordersCfg
    url: orders.internal:8080
    path: api/
    qualifiers: ["", "ordersClient"]
    fallback: shop.orders:OrdersFallback
    configuration:
      - shop.orders:OrdersConfig
      - shop.feign:SharedConfig
    decode404: true
"""


@pytest.fixture()
def shop_yaml() -> str:
    """Return a two-client declaration document."""
    return SHOP_YAML


@pytest.fixture()
def shop_file(tmp_path: Path, shop_yaml: str) -> Path:
    """Write the two-client document to a temporary YAML file."""
    path = tmp_path / "clients.yaml"
    path.write_text(shop_yaml, encoding="utf-8")
    return path
