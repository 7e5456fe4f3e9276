"""Global pytest configuration for DBSTRAP.

Shared fixtures live in the ``tests.fixtures`` plugins. Every test is also
marked with its tier (`unit`, `integration`, `e2e`, `functional`) from the
top-level folder it lives in, so ``pytest -m unit`` selects the fast suite.
"""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

pytest_plugins = [
    "tests.fixtures.orchestrator",
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
]

TESTS_ROOT = Path(__file__).parent.resolve()
TIERS = ("unit", "integration", "e2e", "functional")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the tier mark matching each item's top-level folder."""
    for item in items:
        try:
            tier = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if tier in TIERS and item.get_closest_marker(tier) is None:
            item.add_marker(getattr(pytest.mark, tier))
