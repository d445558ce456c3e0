"""
Request dispatcher.

Turns a logical operation into an authenticated HTTP call through the
configured transport. Anything that goes wrong after the call has been
scheduled is raised as ``ApiError``.
"""

import dataclasses
import logging
from typing import Any, Awaitable, Mapping, Optional, Tuple

from ..errors import normalize_error
from ..types.common import (
    DEFAULT_API_VERSION,
    DEFAULT_SERVICE,
    AuthOptions,
    Credentials,
    GlobalConfig,
    RequestDescriptor,
)
from ..utils.validation import validate_credentials, validate_legacy_data
from .auth import build_headers
from .legacy import adapt_method, build_legacy_path
from .protocols import CurrentUserProvider, NoCurrentUser, Router, Transport
from .routing import StaticRouter, build_url

logger = logging.getLogger(__name__)


class Dispatcher:
    """Single entry point the rest of the SDK sends requests through."""

    def __init__(
        self,
        credentials: Credentials,
        config: GlobalConfig,
        transport: Transport,
        router: Optional[Router] = None,
        current_user_provider: Optional[CurrentUserProvider] = None,
    ) -> None:
        self._state: Tuple[Credentials, GlobalConfig] = (credentials, config)
        self.transport = transport
        self.router = router or StaticRouter()
        self.current_user_provider = current_user_provider or NoCurrentUser()

    @property
    def credentials(self) -> Credentials:
        return self._state[0]

    @property
    def config(self) -> GlobalConfig:
        return self._state[1]

    def configure(
        self,
        credentials: Optional[Credentials] = None,
        config: Optional[GlobalConfig] = None,
        **changes: Any,
    ) -> None:
        """Replace credentials and/or config for subsequent requests.

        Keyword ``changes`` are applied to the config with
        ``dataclasses.replace``. In-flight requests keep the snapshot they
        started with.
        """
        current_credentials, current_config = self._state
        new_config = config or current_config
        if changes:
            new_config = dataclasses.replace(new_config, **changes)
        self._state = (credentials or current_credentials, new_config)

    def dispatch(self, descriptor: RequestDescriptor) -> Awaitable[Any]:
        """Send one request.

        Missing credentials or an unknown service raise ``ConfigurationError``
        right away, before anything is sent. The returned awaitable resolves
        to the decoded JSON payload or raises ``ApiError``.
        """
        credentials, config = self._state
        validate_credentials(credentials)
        self._refresh_routes()
        url = build_url(config, descriptor.service, descriptor.version, descriptor.path)
        return self._send(descriptor, url, credentials, config)

    def request(
        self,
        method: str,
        path: str = '',
        *,
        service: str = DEFAULT_SERVICE,
        version: str = DEFAULT_API_VERSION,
        query: Optional[Mapping[str, Any]] = None,
        data: Any = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> Awaitable[Any]:
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            service=service,
            version=version,
            query=query,
            data={} if data is None else data,
            auth_options=auth_options,
        )
        return self.dispatch(descriptor)

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
        """Send a request addressed as ``/route/class_name/object_id``.

        ``_fetchWhenSave`` and ``_where`` in ``data`` raise
        ``ValidationError`` immediately; pass them in ``query``.
        """
        path = build_legacy_path(route, class_name, object_id)
        if data is None:
            data = {}
        validate_legacy_data(data)
        data, query = adapt_method(method, data, query)
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            query=query,
            data=data,
            auth_options=auth_options,
        )
        return self.dispatch(descriptor)

    def _refresh_routes(self) -> None:
        try:
            self.router.refresh()
        except Exception:
            logger.warning('Failed to refresh server URLs, using the current ones', exc_info=True)

    async def _send(
        self,
        descriptor: RequestDescriptor,
        url: str,
        credentials: Credentials,
        config: GlobalConfig,
    ) -> Any:
        logger.debug('%s %s', descriptor.method, url)
        try:
            headers = await build_headers(
                credentials, config, descriptor.auth_options, self.current_user_provider
            )
            return await self.transport.send(
                descriptor.method, url, descriptor.query, descriptor.data, headers
            )
        except Exception as e:
            raise normalize_error(e) from e
