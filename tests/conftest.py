"""
Pytest configuration and fixtures for row validation tests.
Provides shared record builders and configuration fixtures.
"""

import pytest

from row_validation.compare import ComparisonConfig, Record


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "property: mark test as property-based test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def make_record(**columns) -> Record:
    """Build a record whose column order is the keyword order."""
    return Record.from_mapping(columns)


@pytest.fixture
def record():
    """Record builder: record(id=1, name="a")."""
    return make_record


@pytest.fixture
def default_config() -> ComparisonConfig:
    """Strict config: no timestamp comparison, small float tolerance."""
    return ComparisonConfig(
        writetime_cutoff=0,
        floating_point_tolerance=0.001,
        ttl_tolerance_millis=1000,
        writetime_tolerance_millis=1000,
        compare_timestamps=False,
    )


@pytest.fixture
def timestamps_config() -> ComparisonConfig:
    """Config comparing TTLs and writetimes."""
    return ComparisonConfig(
        writetime_cutoff=0,
        floating_point_tolerance=0.001,
        ttl_tolerance_millis=1000,
        writetime_tolerance_millis=1000,
        compare_timestamps=True,
    )
