from enum import Enum
from typing import Any, List, TypedDict


class LeaderboardVersionChangeInterval(str, Enum):
    NEVER = "never"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class LeaderboardOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class LeaderboardUpdateStrategy(str, Enum):
    BETTER = "better"  # keep the best statistic according to the order
    LAST = "last"  # keep the last submitted statistic


class StatisticDataType(TypedDict, total=False):
    statisticName: str
    statisticValue: float
    version: int
    position: int
    user: Any


class StatisticsResponseType(TypedDict):
    results: List[StatisticDataType]


class LeaderboardDataType(TypedDict, total=False):
    objectId: str
    statisticName: str
    order: str
    updateStrategy: str
    versionChangeInterval: str
    version: int
    expiredAt: Any
    createdAt: Any
    updatedAt: Any
