"""Tests for signing, key selection and header building."""

import hashlib
import logging

import pytest
from unittest.mock import AsyncMock

from lcrequest import AuthOptions, Credentials, GlobalConfig, build_headers, resolve_auth_header, sign


class FakeUser:
    def __init__(self, session_token=None):
        self.session_token = session_token


def test_sign_format():
    digest = hashlib.md5(b"1700000000000secret").hexdigest()
    assert sign("secret", timestamp=1700000000000) == f"{digest},1700000000000"
    assert sign("secret", True, timestamp=1700000000000) == f"{digest},1700000000000,master"


def test_sign_is_deterministic_per_millisecond():
    assert sign("secret", timestamp=42) == sign("secret", timestamp=42)
    assert sign("secret", timestamp=42) != sign("secret", timestamp=43)


def test_sign_uses_current_time():
    digest, timestamp = sign("secret").split(",")
    assert len(digest) == 32
    assert int(timestamp) > 0


def test_app_key_by_default(credentials, config):
    assert resolve_auth_header(credentials, config) == ("X-LC-Key", "app-key")


def test_master_key_from_global_config(credentials, config):
    config = GlobalConfig(server_urls=config.server_urls, use_master_key=True)
    assert resolve_auth_header(credentials, config) == ("X-LC-Key", "master-key,master")


def test_explicit_false_overrides_global_master_key(credentials):
    config = GlobalConfig(use_master_key=True)
    options = AuthOptions(use_master_key=False)
    assert resolve_auth_header(credentials, config, options) == ("X-LC-Key", "app-key")


def test_auth_options_enable_master_key(credentials):
    config = GlobalConfig(use_master_key=False)
    options = AuthOptions(use_master_key=True)
    assert resolve_auth_header(credentials, config, options) == ("X-LC-Key", "master-key,master")


def test_signed_master_key_has_marker(credentials):
    name, value = resolve_auth_header(credentials, GlobalConfig(), AuthOptions(use_master_key=True), sign_key=True)
    assert name == "X-LC-Sign"
    assert value.endswith(",master")
    digest, timestamp, _ = value.split(",")
    assert digest == hashlib.md5(f"{timestamp}master-key".encode()).hexdigest()


def test_signed_app_key_has_no_marker(credentials):
    name, value = resolve_auth_header(credentials, GlobalConfig(), AuthOptions(use_master_key=False), sign_key=True)
    assert name == "X-LC-Sign"
    assert not value.endswith(",master")
    digest, timestamp = value.split(",")
    assert digest == hashlib.md5(f"{timestamp}app-key".encode()).hexdigest()


def test_missing_master_key_falls_back_with_warning(caplog):
    credentials = Credentials(app_id="app-id", app_key="app-key")
    with caplog.at_level(logging.WARNING, logger="lcrequest.client.auth"):
        header = resolve_auth_header(credentials, GlobalConfig(use_master_key=True))
    assert header == ("X-LC-Key", "app-key")
    assert "master_key is not set" in caplog.text


def test_master_key_only_credentials_warn_for_app_key(caplog):
    credentials = Credentials(app_id="app-id", master_key="master-key")
    with caplog.at_level(logging.WARNING, logger="lcrequest.client.auth"):
        header = resolve_auth_header(credentials, GlobalConfig(use_master_key=False))
    assert header == ("X-LC-Key", "")
    assert "app_key is not set" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="lcrequest.client.auth"):
        resolve_auth_header(credentials, GlobalConfig(use_master_key=True))
    assert "app_key is not set" not in caplog.text


@pytest.mark.asyncio
async def test_build_headers_basic(credentials, config, user_provider):
    headers = await build_headers(credentials, config, None, user_provider)
    assert headers == {
        "X-LC-Id": "app-id",
        "Content-Type": "application/json;charset=UTF-8",
        "X-LC-Key": "app-key",
        "User-Agent": "test-agent",
    }


@pytest.mark.asyncio
async def test_build_headers_optional_fields():
    credentials = Credentials(app_id="app-id", app_key="app-key", hook_key="hook")
    config = GlobalConfig(production=False, client_platform="Browser", user_agent="ua", sign_key=True)
    headers = await build_headers(credentials, config)
    assert headers["X-LC-Hook-Key"] == "hook"
    assert headers["X-LC-Prod"] == "false"
    assert headers["X-LC-UA"] == "ua"
    assert "User-Agent" not in headers
    assert "X-LC-Sign" in headers
    assert "X-LC-Key" not in headers


@pytest.mark.asyncio
async def test_production_header_omitted_when_unset(credentials):
    headers = await build_headers(credentials, GlobalConfig(production=None))
    assert "X-LC-Prod" not in headers

    headers = await build_headers(credentials, GlobalConfig(production=True))
    assert headers["X-LC-Prod"] == "true"


@pytest.mark.asyncio
async def test_explicit_session_token_skips_lookup(credentials, config, user_provider):
    headers = await build_headers(credentials, config, AuthOptions(session_token="tok"), user_provider)
    assert headers["X-LC-Session"] == "tok"
    user_provider.current_async.assert_not_called()


@pytest.mark.asyncio
async def test_explicit_user_session_token(credentials, config, user_provider):
    headers = await build_headers(credentials, config, AuthOptions(user=FakeUser("user-tok")), user_provider)
    assert headers["X-LC-Session"] == "user-tok"
    user_provider.current_async.assert_not_called()


@pytest.mark.asyncio
async def test_current_user_session_token(credentials, config):
    provider = AsyncMock()
    provider.current_async = AsyncMock(return_value=FakeUser("current-tok"))
    headers = await build_headers(credentials, config, None, provider)
    assert headers["X-LC-Session"] == "current-tok"
    provider.current_async.assert_awaited_once()


@pytest.mark.asyncio
async def test_current_user_without_token(credentials, config):
    provider = AsyncMock()
    provider.current_async = AsyncMock(return_value=FakeUser(""))
    headers = await build_headers(credentials, config, None, provider)
    assert "X-LC-Session" not in headers


@pytest.mark.asyncio
async def test_disable_current_user(credentials, user_provider):
    config = GlobalConfig(disable_current_user=True)
    headers = await build_headers(credentials, config, None, user_provider)
    assert "X-LC-Session" not in headers
    user_provider.current_async.assert_not_called()
