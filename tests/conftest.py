"""Test configuration."""

from typing import List

from pytest import Config

from geoselect.core.logging import configure_logging

pytest_plugins: List[str] = [
    "tests.fixtures.selection",
]


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
    config.addinivalue_line("markers", "integration: mark test as an integration test")
