from __future__ import annotations

import pytest

from rackspace import settings
from rackspace import sdk
from rackspace.infrastructure import http, serialization
from rackspace.sdk import SdkConfiguration
from rackspace.settings import RackspaceNet


@pytest.fixture(autouse=True)
def _restore_global_configuration():
    """Every test starts and ends with unconfigured process-wide state."""
    yield
    settings.get_default().reset_defaults()
    sdk.get_default().reset_defaults()
    http.reset_defaults()
    serialization.set_default_settings(None)


@pytest.fixture
def sdk_configuration() -> SdkConfiguration:
    return SdkConfiguration()


@pytest.fixture
def gate(sdk_configuration: SdkConfiguration) -> RackspaceNet:
    return RackspaceNet(sdk_configuration)
