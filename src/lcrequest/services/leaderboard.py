"""Leaderboard service for the lcrequest SDK."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union
from urllib.parse import quote

from ..errors import ValidationError
from ..types.common import AuthOptions
from ..types.leaderboard import (
    LeaderboardDataType,
    LeaderboardOrder,
    LeaderboardUpdateStrategy,
    LeaderboardVersionChangeInterval,
    StatisticDataType,
    StatisticsResponseType,
)

if TYPE_CHECKING:
    from ..client.dispatcher import Dispatcher


def encode_url_component(component: str) -> str:
    """Encode URL component (similar to encodeURIComponent in JS)."""
    return quote(component, safe='')


def parse_date(value: str) -> datetime:
    """Parse the ISO 8601 timestamps the API returns (``...Z`` included)."""
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


def _ensure_list(value: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class Statistic:
    name: str
    value: float
    user: Any = None
    position: Optional[int] = None  # only set in leaderboard results
    version: Optional[int] = None

    @classmethod
    def from_data(cls, data: StatisticDataType, user: Any = None) -> "Statistic":
        return cls(
            name=data.get('statisticName'),
            value=data.get('statisticValue'),
            user=data.get('user', user),
            position=data.get('position'),
            version=data.get('version'),
        )


class Leaderboard:
    """A leaderboard bound to one statistic name."""

    def __init__(self, dispatcher: "Dispatcher", statistic_name: str) -> None:
        self.dispatcher = dispatcher
        self.statistic_name = statistic_name
        self.order: Optional[str] = None
        self.update_strategy: Optional[str] = None
        self.version_change_interval: Optional[str] = None
        self.version: Optional[int] = None
        self.next_reset_at: Optional[datetime] = None
        self.created_at: Optional[datetime] = None

    @property
    def _path(self) -> str:
        return f"/leaderboard/leaderboards/{encode_url_component(self.statistic_name)}"

    # Server field name -> attribute name
    _FIELDS = {
        'statisticName': 'statistic_name',
        'order': 'order',
        'updateStrategy': 'update_strategy',
        'versionChangeInterval': 'version_change_interval',
        'version': 'version',
        'expiredAt': 'next_reset_at',
        'createdAt': 'created_at',
    }

    def _finish_fetch(self, data: Optional[LeaderboardDataType]) -> "Leaderboard":
        for key, value in (data or {}).items():
            if key in ('updatedAt', 'objectId'):
                continue
            if isinstance(value, Mapping) and value.get('__type') == 'Date':
                value = parse_date(value['iso'])
            elif key == 'createdAt' and isinstance(value, str):
                value = parse_date(value)
            setattr(self, self._FIELDS.get(key, key), value)
        return self

    async def fetch(self, auth_options: Optional[AuthOptions] = None) -> "Leaderboard":
        data = await self.dispatcher.request('GET', self._path, auth_options=auth_options)
        return self._finish_fetch(data)

    async def _get_results(
        self,
        skip: Optional[int],
        limit: Optional[int],
        include_user_keys: Optional[Union[str, Iterable[str]]],
        auth_options: Optional[AuthOptions],
        around_self: bool = False,
    ) -> List[Statistic]:
        path = f"{self._path}/positions{'/self' if around_self else ''}"
        query = {
            'skip': skip,
            'limit': limit,
            'includeUser': ','.join(_ensure_list(include_user_keys)) if include_user_keys else None,
        }
        data: StatisticsResponseType = await self.dispatcher.request(
            'GET', path, query=query, auth_options=auth_options
        )
        return [Statistic.from_data(item) for item in data['results']]

    async def get_results(
        self,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
        include_user_keys: Optional[Union[str, Iterable[str]]] = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> List[Statistic]:
        """Retrieve ranked users for this leaderboard.

        Args:
            skip: Number of results to skip, for pagination
            limit: Maximum number of results
            include_user_keys: User keys to include in each result
            auth_options: Optional per-call auth overrides

        Returns:
            Statistics with their positions
        """
        return await self._get_results(skip, limit, include_user_keys, auth_options)

    async def get_results_around_user(
        self,
        limit: Optional[int] = None,
        include_user_keys: Optional[Union[str, Iterable[str]]] = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> List[Statistic]:
        """Retrieve ranked users centered on the current user."""
        return await self._get_results(None, limit, include_user_keys, auth_options, around_self=True)

    async def _update(self, data: Dict[str, Any], auth_options: Optional[AuthOptions]) -> "Leaderboard":
        result = await self.dispatcher.request('PUT', self._path, data=data, auth_options=auth_options)
        return self._finish_fetch(result)

    async def update_version_change_interval(
        self,
        version_change_interval: LeaderboardVersionChangeInterval,
        auth_options: Optional[AuthOptions] = None,
    ) -> "Leaderboard":
        """(master key required) Change how often the version rolls over."""
        return await self._update(
            {'versionChangeInterval': LeaderboardVersionChangeInterval(version_change_interval).value},
            auth_options,
        )

    async def update_update_strategy(
        self,
        update_strategy: LeaderboardUpdateStrategy,
        auth_options: Optional[AuthOptions] = None,
    ) -> "Leaderboard":
        """(master key required) Change which submitted statistic is kept."""
        return await self._update(
            {'updateStrategy': LeaderboardUpdateStrategy(update_strategy).value},
            auth_options,
        )

    async def reset(self, auth_options: Optional[AuthOptions] = None) -> "Leaderboard":
        """(master key required) Reset the leaderboard, incrementing its version."""
        data = await self.dispatcher.request(
            'PUT', f"{self._path}/incrementVersion", auth_options=auth_options
        )
        return self._finish_fetch(data)

    async def destroy(self, auth_options: Optional[AuthOptions] = None) -> None:
        """(master key required) Delete the leaderboard and all archived versions."""
        await self.dispatcher.request('DELETE', self._path, auth_options=auth_options)


class LeaderboardService:
    """Service for leaderboard and user statistic operations."""

    def __init__(self, dispatcher: "Dispatcher") -> None:
        """Initialize leaderboard service.

        Args:
            dispatcher: Dispatcher used for every request
        """
        self.dispatcher = dispatcher

    def create_without_data(self, statistic_name: str) -> Leaderboard:
        return Leaderboard(self.dispatcher, statistic_name)

    async def create_leaderboard(
        self,
        statistic_name: str,
        order: LeaderboardOrder,
        version_change_interval: Optional[LeaderboardVersionChangeInterval] = None,
        update_strategy: Optional[LeaderboardUpdateStrategy] = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> Leaderboard:
        """(master key required) Create a new leaderboard.

        The server defaults to a weekly version change interval and the
        ``better`` update strategy.
        """
        data = {
            'statisticName': statistic_name,
            'order': LeaderboardOrder(order).value,
        }
        if version_change_interval is not None:
            data['versionChangeInterval'] = LeaderboardVersionChangeInterval(version_change_interval).value
        if update_strategy is not None:
            data['updateStrategy'] = LeaderboardUpdateStrategy(update_strategy).value
        result = await self.dispatcher.request(
            'POST', '/leaderboard/leaderboards', data=data, auth_options=auth_options
        )
        return self.create_without_data(statistic_name)._finish_fetch(result)

    async def get_leaderboard(
        self, statistic_name: str, auth_options: Optional[AuthOptions] = None
    ) -> Leaderboard:
        return await self.create_without_data(statistic_name).fetch(auth_options)

    async def get_statistics(
        self,
        user_id: str,
        statistic_names: Optional[Union[str, Iterable[str]]] = None,
        auth_options: Optional[AuthOptions] = None,
    ) -> List[Statistic]:
        """Get statistics of a user.

        Args:
            user_id: Object id of the user
            statistic_names: Only fetch these statistics, all when omitted
            auth_options: Optional per-call auth overrides

        Returns:
            The user's statistics
        """
        if not user_id:
            raise ValidationError('user_id is required')
        query = {
            'statistics': ','.join(_ensure_list(statistic_names)) if statistic_names else None,
        }
        data: StatisticsResponseType = await self.dispatcher.request(
            'GET',
            f"/leaderboard/users/{encode_url_component(user_id)}/statistics",
            query=query,
            auth_options=auth_options,
        )
        return [Statistic.from_data(item, user_id) for item in data['results']]

    async def update_statistics(
        self,
        user_id: str,
        statistics: Mapping[str, float],
        auth_options: Optional[AuthOptions] = None,
    ) -> List[Statistic]:
        """Submit statistic values for a user.

        Args:
            user_id: Object id of the user
            statistics: Statistic name to value
            auth_options: Optional per-call auth overrides

        Returns:
            The statistics as stored by the server
        """
        if not user_id:
            raise ValidationError('user_id is required')
        data = [
            {'statisticName': name, 'statisticValue': value}
            for name, value in statistics.items()
        ]
        result: StatisticsResponseType = await self.dispatcher.request(
            'POST',
            f"/leaderboard/users/{encode_url_component(user_id)}/statistics",
            data=data,
            auth_options=auth_options,
        )
        return [Statistic.from_data(item, user_id) for item in result['results']]
