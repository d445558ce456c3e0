import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, TypedDict

from ..version import __version__

DEFAULT_SERVICE = "api"
DEFAULT_API_VERSION = "1.1"
DEFAULT_USER_AGENT = f"lcrequest-python/{__version__}"


class SDKOptionsType(TypedDict, total=False):
    app_id: str
    app_key: str
    master_key: str  # elevated key, bypasses ACL checks server-side
    hook_key: str
    server_url: str  # shorthand for server_urls={"api": ...}
    server_urls: Dict[str, str]
    use_master_key: bool
    production: bool
    user_agent: str
    disable_current_user: bool
    sign_key: bool  # send X-LC-Sign instead of the raw key
    client_platform: str
    timeout: float
    transport: Any  # Transport
    router: Any  # Router
    current_user_provider: Any  # CurrentUserProvider


@dataclass(frozen=True)
class Credentials:
    app_id: Optional[str] = None
    app_key: Optional[str] = None
    master_key: Optional[str] = None
    hook_key: Optional[str] = None

    @property
    def ready(self) -> bool:
        return bool(self.app_id and (self.app_key or self.master_key))


@dataclass(frozen=True)
class GlobalConfig:
    """Process-wide settings read once per request."""

    use_master_key: Optional[bool] = None
    production: Optional[bool] = None
    server_urls: Mapping[str, str] = field(default_factory=dict)
    user_agent: str = DEFAULT_USER_AGENT
    disable_current_user: bool = False
    sign_key: bool = False
    client_platform: Optional[str] = field(
        default_factory=lambda: os.environ.get("CLIENT_PLATFORM") or None
    )

    @property
    def is_server_side(self) -> bool:
        return not self.client_platform


@dataclass(frozen=True)
class AuthOptions:
    """Per-call overrides. ``None`` means "not set", not False."""

    session_token: Optional[str] = None
    use_master_key: Optional[bool] = None
    user: Optional[Any] = None  # CurrentUser


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    path: str = ""
    service: str = DEFAULT_SERVICE
    version: str = DEFAULT_API_VERSION
    query: Optional[Mapping[str, Any]] = None
    data: Any = field(default_factory=dict)
    auth_options: Optional[AuthOptions] = None
