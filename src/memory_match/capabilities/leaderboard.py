"""
Leaderboard Service Capability Interface

The platform leaderboard (authentication, score submission) as seen by the
presentation layer: an authentication flag and the leaderboard identifier.
"""

from abc import ABC, abstractmethod

from memory_match.events import EventBus, GameEvent, AUTHENTICATION_CHANGED


class LeaderboardService(ABC):
    """Leaderboard/authentication service interface."""

    def __init__(self, event_bus: EventBus, service_id: str):
        self.event_bus = event_bus
        self.service_id = service_id

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        pass

    @property
    @abstractmethod
    def leaderboard_id(self) -> str:
        """Identifier of the leaderboard the view should present."""
        pass

    async def notify_authentication_changed(self) -> None:
        await self.event_bus.publish(GameEvent(
            type=AUTHENTICATION_CHANGED,
            source_id=self.service_id,
            data={"is_authenticated": self.is_authenticated},
        ))
