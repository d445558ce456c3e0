"""Interfaces of the collaborators the dispatcher talks to."""

from typing import Any, Awaitable, Dict, Mapping, Optional, Protocol


class CurrentUser(Protocol):
    session_token: Optional[str]


class CurrentUserProvider(Protocol):
    def current_async(self) -> Awaitable[Optional[CurrentUser]]:
        ...


class Router(Protocol):
    def refresh(self) -> None:
        """Update the service -> base URL table. Fire and forget."""
        ...


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        query: Optional[Mapping[str, Any]],
        body: Any,
        headers: Dict[str, str],
    ) -> Awaitable[Any]:
        """Perform one HTTP call and return the decoded JSON payload.

        Failures are raised, preferably as ``TransportError``.
        """
        ...


class NoCurrentUser:
    """Provider for processes that never have a logged-in user."""

    async def current_async(self) -> None:
        return None
