import asyncio
import json
from typing import Any, Dict, Mapping, Optional

import requests

from ..errors import TransportError


def encode_query(query: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop unset values and JSON-encode nested objects (e.g. ``where``)."""
    if not query:
        return None
    params: Dict[str, Any] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            params[key] = json.dumps(value, separators=(',', ':'))
        elif isinstance(value, bool):
            params[key] = 'true' if value else 'false'
        else:
            params[key] = value
    return params


class RequestsTransport:
    """Default transport backed by ``requests``.

    Each call runs in a worker thread so concurrent requests don't block
    the event loop.
    """

    def __init__(self, timeout: float = 10) -> None:
        self.timeout = timeout

    async def send(
        self,
        method: str,
        url: str,
        query: Optional[Mapping[str, Any]],
        body: Any,
        headers: Dict[str, str],
    ) -> Any:
        return await asyncio.to_thread(self._send, method, url, query, body, headers)

    def _send(
        self,
        method: str,
        url: str,
        query: Optional[Mapping[str, Any]],
        body: Any,
        headers: Dict[str, str],
    ) -> Any:
        has_body = body is not None and method.upper() != 'GET'
        try:
            response = requests.request(
                method,
                url,
                params=encode_query(query),
                headers=headers,
                json=body if has_body else None,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f'Request failed: {e}') from e

        # Handle 204 No Content
        if response.ok and (response.status_code == 204 or not response.content):
            return None

        if not response.ok:
            raise TransportError(
                f'HTTP {response.status_code}',
                response=self._json_or_none(response),
                response_text=response.text,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f'Invalid JSON response: {e}',
                response_text=response.text,
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _json_or_none(response: requests.Response) -> Optional[Dict[str, Any]]:
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
