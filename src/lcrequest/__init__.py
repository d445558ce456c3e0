"""
lcrequest - request dispatcher for LeanCloud-style backends

- Resolves credentials per call: app key or master key, plain or signed
- Attaches the session of the current user when one is available
- Routes logical (service, version, path) triples to absolute URLs
- Normalizes every failure into ApiError(code, error)
- Async/await support throughout
"""

from typing import Any, Awaitable, Iterable, List, Mapping, Optional, Tuple, Union

from .client import (
    CurrentUserProvider,
    Dispatcher,
    NoCurrentUser,
    RequestsTransport,
    Router,
    StaticRouter,
    Transport,
    adapt_method,
    build_headers,
    build_legacy_path,
    build_url,
    resolve_auth_header,
    sign,
)
from .errors import (
    ApiError,
    ConfigurationError,
    LeanCloudError,
    TransportError,
    ValidationError,
    normalize_error,
)
from .services import Leaderboard, LeaderboardService, Statistic
from .types import (
    DEFAULT_API_VERSION,
    DEFAULT_SERVICE,
    AuthOptions,
    Credentials,
    GlobalConfig,
    LeaderboardOrder,
    LeaderboardUpdateStrategy,
    LeaderboardVersionChangeInterval,
    RequestDescriptor,
    SDKOptionsType as SDKOptions,
)
from .version import __version__


def _from_options(options: SDKOptions) -> Tuple[Credentials, GlobalConfig]:
    credentials = Credentials(
        app_id=options.get("app_id"),
        app_key=options.get("app_key"),
        master_key=options.get("master_key"),
        hook_key=options.get("hook_key"),
    )
    server_urls = dict(options.get("server_urls") or {})
    if options.get("server_url"):
        server_urls.setdefault(DEFAULT_SERVICE, options["server_url"])

    config_fields = {
        key: options[key]
        for key in ("use_master_key", "production", "user_agent", "disable_current_user", "sign_key", "client_platform")
        if key in options
    }
    return credentials, GlobalConfig(server_urls=server_urls, **config_fields)


class LeanCloudClient:
    """lcrequest SDK client."""

    def __init__(self, options: SDKOptions = None) -> None:
        """Create a new LeanCloudClient.

        Args:
            options: SDK options including app_id, app_key, server_urls, etc.
        """
        if options is None:
            options = {}

        credentials, config = _from_options(options)
        transport = options.get("transport") or RequestsTransport(options.get("timeout", 10))
        self.dispatcher = Dispatcher(
            credentials,
            config,
            transport,
            router=options.get("router"),
            current_user_provider=options.get("current_user_provider"),
        )
        self.leaderboard_service = LeaderboardService(self.dispatcher)

    def init(self, options: SDKOptions) -> None:
        """Re-initialize credentials and configuration.

        Requests already in flight finish with the previous settings.
        """
        credentials, config = _from_options(options)
        self.dispatcher.configure(credentials, config)

    @property
    def app_id(self) -> Optional[str]:
        return self.dispatcher.credentials.app_id

    @property
    def config(self) -> GlobalConfig:
        return self.dispatcher.config

    def request(
        self,
        method: str,
        path: str = "",
        *,
        service: str = DEFAULT_SERVICE,
        version: str = DEFAULT_API_VERSION,
        query: Optional[Mapping[str, Any]] = None,
        data: Any = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> Awaitable[Any]:
        """Send a request to a REST endpoint.

        Args:
            method: HTTP method
            path: Path under the API version, e.g. '/classes/Post'
            service: Name of the service in server_urls
            version: API version
            query: Optional query parameters
            data: Optional JSON body
            auth_options: Optional per-call auth overrides

        Returns:
            Awaitable resolving to the decoded JSON response

        Raises:
            ConfigurationError: immediately, if the SDK is not initialized
        """
        return self.dispatcher.request(
            method,
            path,
            service=service,
            version=version,
            query=query,
            data=data,
            auth_options=auth_options,
        )

    def legacy_request(
        self,
        route: Optional[str],
        class_name: Optional[str],
        object_id: Optional[str],
        method: str,
        data: Any = None,
        auth_options: Optional[AuthOptions] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Awaitable[Any]:
        return self.dispatcher.legacy_request(
            route, class_name, object_id, method, data, auth_options, query
        )

    # Leaderboards
    def leaderboard(self, statistic_name: str) -> Leaderboard:
        """Leaderboard handle without fetching it."""
        return self.leaderboard_service.create_without_data(statistic_name)

    async def create_leaderboard(
        self,
        statistic_name: str,
        order: LeaderboardOrder,
        version_change_interval: Optional[LeaderboardVersionChangeInterval] = None,
        update_strategy: Optional[LeaderboardUpdateStrategy] = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> Leaderboard:
        return await self.leaderboard_service.create_leaderboard(
            statistic_name, order, version_change_interval, update_strategy, auth_options
        )

    async def get_leaderboard(
        self, statistic_name: str, auth_options: Optional[AuthOptions] = None
    ) -> Leaderboard:
        return await self.leaderboard_service.get_leaderboard(statistic_name, auth_options)

    async def get_statistics(
        self,
        user_id: str,
        statistic_names: Optional[Union[str, Iterable[str]]] = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> List[Statistic]:
        return await self.leaderboard_service.get_statistics(user_id, statistic_names, auth_options)

    async def update_statistics(
        self,
        user_id: str,
        statistics: Mapping[str, float],
        auth_options: Optional[AuthOptions] = None,
    ) -> List[Statistic]:
        return await self.leaderboard_service.update_statistics(user_id, statistics, auth_options)


__all__ = [
    # Main client
    "LeanCloudClient",
    "Dispatcher",
    "__version__",

    # Collaborators
    "RequestsTransport",
    "StaticRouter",
    "NoCurrentUser",
    "Transport",
    "Router",
    "CurrentUserProvider",

    # Building blocks
    "sign",
    "resolve_auth_header",
    "build_headers",
    "build_url",
    "build_legacy_path",
    "adapt_method",
    "normalize_error",

    # Types
    "SDKOptions",
    "Credentials",
    "GlobalConfig",
    "AuthOptions",
    "RequestDescriptor",
    "LeaderboardOrder",
    "LeaderboardUpdateStrategy",
    "LeaderboardVersionChangeInterval",
    "Leaderboard",
    "LeaderboardService",
    "Statistic",

    # Errors
    "LeanCloudError",
    "ApiError",
    "ConfigurationError",
    "TransportError",
    "ValidationError",
]
