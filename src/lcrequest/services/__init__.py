"""Services module for the lcrequest SDK."""

from .leaderboard import Leaderboard, LeaderboardService, Statistic

__all__ = ["Leaderboard", "LeaderboardService", "Statistic"]
