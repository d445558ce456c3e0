# Export all types
from .common import (
    DEFAULT_API_VERSION, DEFAULT_SERVICE, DEFAULT_USER_AGENT,
    AuthOptions, Credentials, GlobalConfig, RequestDescriptor, SDKOptionsType,
)
from .leaderboard import (
    LeaderboardDataType, LeaderboardOrder, LeaderboardUpdateStrategy,
    LeaderboardVersionChangeInterval, StatisticDataType, StatisticsResponseType,
)
