from typing import Any, Mapping

from ..errors import ConfigurationError, ValidationError
from ..types.common import Credentials

# Keys older SDK versions accepted in the body; the API wants them in the query.
RESERVED_BODY_KEYS = ('_fetchWhenSave', '_where')


def validate_credentials(credentials: Credentials) -> None:
    """Require an app id plus an app key or a master key."""
    if not credentials.ready:
        raise ConfigurationError('Not initialized')


def validate_legacy_data(data: Any) -> None:
    """Reject reserved keys that must be passed through the query."""
    if not isinstance(data, Mapping):
        return
    for key in RESERVED_BODY_KEYS:
        if key in data:
            raise ValidationError(f'{key} should be in the query')
