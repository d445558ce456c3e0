import hashlib
import logging
import time
from typing import Dict, Optional, Tuple

from ..types.common import AuthOptions, Credentials, GlobalConfig
from .protocols import CurrentUserProvider

logger = logging.getLogger(__name__)

ID_HEADER = 'X-LC-Id'
KEY_HEADER = 'X-LC-Key'
SIGN_HEADER = 'X-LC-Sign'
HOOK_KEY_HEADER = 'X-LC-Hook-Key'
PROD_HEADER = 'X-LC-Prod'
SESSION_HEADER = 'X-LC-Session'
SERVER_UA_HEADER = 'User-Agent'
CLIENT_UA_HEADER = 'X-LC-UA'
CONTENT_TYPE = 'application/json;charset=UTF-8'
MASTER_SUFFIX = 'master'


def sign(key: str, is_master_key: bool = False, timestamp: Optional[int] = None) -> str:
    """
    Compute the X-LC-Sign value for a key.

    The digest is md5(timestamp + key), which only keeps the raw key out of
    request logs; it is not a security boundary.

    Args:
        key: application or master key
        is_master_key: append the ``master`` marker
        timestamp: milliseconds since the epoch, defaults to now

    Returns:
        ``"<digest>,<timestamp>"`` optionally followed by ``",master"``
    """
    now = int(time.time() * 1000) if timestamp is None else timestamp
    digest = hashlib.md5(f'{now}{key}'.encode('utf-8')).hexdigest()
    if is_master_key:
        return f'{digest},{now},{MASTER_SUFFIX}'
    return f'{digest},{now}'


def _use_master_key(config: GlobalConfig, auth_options: Optional[AuthOptions]) -> bool:
    if auth_options is not None and auth_options.use_master_key is not None:
        return auth_options.use_master_key
    if config.use_master_key is not None:
        return config.use_master_key
    return False


def resolve_auth_header(
    credentials: Credentials,
    config: GlobalConfig,
    auth_options: Optional[AuthOptions] = None,
    sign_key: bool = False,
) -> Tuple[str, str]:
    """Pick the key for one request and how to send it.

    Returns a ``(header_name, header_value)`` pair, either X-LC-Sign or
    X-LC-Key, never both.
    """
    if _use_master_key(config, auth_options):
        if credentials.master_key:
            if sign_key:
                return SIGN_HEADER, sign(credentials.master_key, True)
            return KEY_HEADER, f'{credentials.master_key},{MASTER_SUFFIX}'
        logger.warning('master_key is not set, fall back to use app_key')

    if not credentials.app_key:
        logger.warning('app_key is not set, sending an empty key')
    if sign_key:
        return SIGN_HEADER, sign(credentials.app_key or '')
    return KEY_HEADER, credentials.app_key or ''


def _session_token_of(user) -> Optional[str]:
    return getattr(user, 'session_token', None) if user is not None else None


async def build_headers(
    credentials: Credentials,
    config: GlobalConfig,
    auth_options: Optional[AuthOptions] = None,
    current_user_provider: Optional[CurrentUserProvider] = None,
) -> Dict[str, str]:
    """
    Build request headers for one dispatched call.

    Args:
        credentials: application credentials
        config: configuration snapshot for this call
        auth_options: optional per-call overrides
        current_user_provider: queried for a session token when neither
            auth_options nor the config rule it out

    Returns:
        headers dictionary
    """
    headers: Dict[str, str] = {
        ID_HEADER: credentials.app_id or '',
        'Content-Type': CONTENT_TYPE,
    }
    name, value = resolve_auth_header(credentials, config, auth_options, config.sign_key)
    headers[name] = value
    if credentials.hook_key:
        headers[HOOK_KEY_HEADER] = credentials.hook_key
    if config.production is not None:
        headers[PROD_HEADER] = 'true' if config.production else 'false'
    headers[SERVER_UA_HEADER if config.is_server_side else CLIENT_UA_HEADER] = config.user_agent

    session_token = None
    if auth_options is not None:
        session_token = auth_options.session_token or _session_token_of(auth_options.user)
    if not session_token and not config.disable_current_user and current_user_provider is not None:
        current_user = await current_user_provider.current_async()
        session_token = _session_token_of(current_user)
    if session_token:
        headers[SESSION_HEADER] = session_token
    return headers
