import pytest
from unittest.mock import AsyncMock

from lcrequest import Credentials, Dispatcher, GlobalConfig

BASE = "https://x.example/"


@pytest.fixture
def credentials():
    return Credentials(app_id="app-id", app_key="app-key", master_key="master-key")


@pytest.fixture
def config():
    return GlobalConfig(server_urls={"api": BASE}, user_agent="test-agent", client_platform=None)


@pytest.fixture
def transport():
    transport = AsyncMock()
    transport.send = AsyncMock(return_value={"ok": True})
    return transport


@pytest.fixture
def user_provider():
    provider = AsyncMock()
    provider.current_async = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def dispatcher(credentials, config, transport, user_provider):
    return Dispatcher(credentials, config, transport, current_user_provider=user_provider)
