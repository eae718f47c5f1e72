"""
Feedback Capability Interface

Sound and haptic effects triggered by the presentation coordinator. Playback
itself belongs to the platform; this package only decides when to play.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class FeedbackPlayer(ABC):
    """Sound/haptic playback interface. Calls must return without blocking."""

    @abstractmethod
    def play_win_sound(self) -> None:
        pass

    @abstractmethod
    def play_mismatch_haptic(self) -> None:
        pass


class LoggingFeedbackPlayer(FeedbackPlayer):
    """Default player for headless runs: records effects in the log instead of playing them."""

    def play_win_sound(self) -> None:
        logger.info("Feedback: win sound")

    def play_mismatch_haptic(self) -> None:
        logger.debug("Feedback: mismatch haptic")
