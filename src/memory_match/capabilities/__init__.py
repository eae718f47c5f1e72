"""
Capability interfaces consumed by the presentation coordinator.
"""

from .game_model import GameModel
from .leaderboard import LeaderboardService
from .feedback import FeedbackPlayer, LoggingFeedbackPlayer

__all__ = ['GameModel', 'LeaderboardService', 'FeedbackPlayer', 'LoggingFeedbackPlayer']
