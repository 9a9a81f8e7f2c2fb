import pytest

from portfolio_tools.common import ConfigLoader
from testsuites.unit.fakes import DummyConfig, FakePage


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def dummy_config() -> DummyConfig:
    return DummyConfig({"site.base_url": "https://example.test"})


@pytest.fixture
def reset_config():
    """Drop the shared ConfigLoader before and after the test."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
