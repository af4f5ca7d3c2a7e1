from carnival.realtime.feed import LeaderboardFeed
from carnival.realtime.websocket import leaderboard_websocket

__all__ = ["LeaderboardFeed", "leaderboard_websocket"]
