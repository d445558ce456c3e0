from .auth import build_headers, resolve_auth_header, sign
from .dispatcher import Dispatcher
from .http import RequestsTransport
from .legacy import adapt_method, build_legacy_path
from .protocols import CurrentUser, CurrentUserProvider, NoCurrentUser, Router, Transport
from .routing import StaticRouter, build_url

__all__ = [
    "Dispatcher",
    "RequestsTransport",
    "StaticRouter",
    "NoCurrentUser",
    "CurrentUser",
    "CurrentUserProvider",
    "Router",
    "Transport",
    "sign",
    "resolve_auth_header",
    "build_headers",
    "build_url",
    "build_legacy_path",
    "adapt_method",
]
