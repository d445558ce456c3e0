"""
Error classes for the lcrequest SDK.

Every failure that comes back from a dispatched call is surfaced as an
ApiError carrying the platform's ``{code, error}`` shape. Configuration and
caller mistakes are raised synchronously, before any network activity.
"""

import json
from typing import Any, Dict, Mapping, Optional


class LeanCloudError(Exception):
    """Base exception class for lcrequest."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message)
        self.message = message


class ConfigurationError(LeanCloudError):
    """SDK is not initialized or a service has no base URL."""


class ValidationError(LeanCloudError):
    """Caller passed arguments the SDK refuses to send."""


class TransportError(LeanCloudError):
    """Failure reported by a transport.

    A transport fills in whatever it knows: ``response`` for a structured
    error body, ``response_text`` for the raw body, ``code`` for a numeric
    error code and ``status_code`` for the HTTP status. Any of them may be
    missing, e.g. on timeouts or DNS failures only ``message`` is set.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[int] = None,
        response: Optional[Mapping[str, Any]] = None,
        response_text: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.code = code
        self.response = response
        self.response_text = response_text
        self.status_code = status_code


class ApiError(LeanCloudError):
    """Normalized error returned to callers of a dispatched request."""

    def __init__(self, code: int = -1, error: Optional[str] = None):
        """Initialize API error.

        Args:
            code: Platform error code, -1 when none could be recovered
            error: Human readable error message
        """
        super().__init__(error)
        self.code = code
        self.error = error

    def __str__(self) -> str:
        return f"{self.code}: {self.error}"

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "error": self.error}


def _int_code(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def normalize_error(raw: Any) -> ApiError:
    """Convert any failure raised by a transport into an ApiError.

    First match wins:

    1. a nested ``response`` mapping with a numeric ``code`` is used as is;
    2. a ``response_text`` body that parses to a JSON object is used;
    3. otherwise ``code`` (or -1) and ``message`` (or the raw text).

    Never raises.
    """
    response = getattr(raw, "response", None)
    if isinstance(response, Mapping) and _int_code(response.get("code")) is not None:
        return ApiError(response["code"], response.get("error"))

    response_text = getattr(raw, "response_text", None)
    if isinstance(response_text, str) and response_text:
        try:
            parsed = json.loads(response_text)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            code = _int_code(parsed.get("code"))
            return ApiError(-1 if code is None else code, parsed.get("error"))

    code = _int_code(getattr(raw, "code", None))
    message = getattr(raw, "message", None)
    if message is None and isinstance(raw, BaseException) and not isinstance(raw, LeanCloudError):
        message = str(raw) or None
    return ApiError(code or -1, message or response_text or None)
