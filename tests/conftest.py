"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from revive_roi.main import app
from revive_roi.calculations.analysis import analyze_deal
from revive_roi.calculations.parameters import DealParameters


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clear_analysis_cache():
    """Start every test with an empty analysis cache."""
    analyze_deal.cache_clear()
    yield
    analyze_deal.cache_clear()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def default_params():
    """The reference four-unit deal."""
    return DealParameters()
