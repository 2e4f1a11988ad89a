"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_SDKGEN_NETWORK_TESTS=1
_SKIP_NETWORK = pytest.mark.skipif(
    os.environ.get("RUN_SDKGEN_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_SDKGEN_NETWORK_TESTS=1 to run",
)


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "integration" in item.nodeid.split("/"):
            item.add_marker(pytest.mark.integration)
            item.add_marker(_SKIP_NETWORK)
