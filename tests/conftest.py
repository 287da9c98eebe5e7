"""Global pytest fixtures and hooks for MULTISTARGATE."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.chain",
]

TESTS_ROOT = Path(__file__).parent.resolve()

# Top-level test directories and the mark every test below them gets
SUITE_MARKERS = {
    "unit": pytest.mark.unit,
    "contract": pytest.mark.contract,
    "integration": pytest.mark.integration,
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]  # pylint: disable=unused-argument
) -> None:
    """Mark each test with the suite it lives in (`tests/<suite>/...`)."""
    for item in items:
        try:
            suite = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        marker = SUITE_MARKERS.get(suite)
        if marker is not None and item.get_closest_marker(marker.name) is None:
            item.add_marker(marker)


# Helper to route to an existing fixture by name
@pytest.fixture
def chain(request: pytest.FixtureRequest):
    """Indirection fixture to parametrize over chain-providing fixtures.

    Example:
        ```py
        @pytest.mark.parametrize("chain", ["memory_chain", "sqlite_chain"], indirect=True)
        def test_something(chain): ...
        ```
    """
    return request.getfixturevalue(request.param)
