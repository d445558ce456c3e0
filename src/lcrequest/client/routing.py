from ..errors import ConfigurationError
from ..types.common import DEFAULT_API_VERSION, DEFAULT_SERVICE, GlobalConfig


def build_url(
    config: GlobalConfig,
    service: str = DEFAULT_SERVICE,
    version: str = DEFAULT_API_VERSION,
    path: str = '',
) -> str:
    """Map (service, version, path) to an absolute endpoint URL.

    ``path`` is appended verbatim and should start with ``/``.
    """
    base_url = config.server_urls.get(service)
    if not base_url:
        raise ConfigurationError(f'undefined server URL for {service}')
    if not base_url.endswith('/'):
        base_url += '/'
    url = base_url + version
    if path:
        url += path
    return url


class StaticRouter:
    """Router for deployments whose service URLs never change."""

    def refresh(self) -> None:
        pass
