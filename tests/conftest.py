"""Fixtures for Work Hours tests."""
import pytest

pytest_plugins = "pytest_homeassistant_custom_component"


@pytest.fixture
def custom_integrations(enable_custom_integrations):
    """Let Home Assistant load the integration from custom_components."""
    yield
