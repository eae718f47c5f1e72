"""
Game Model Capability Interface

Defines what the presentation coordinator needs from the card-matching model
without coupling to its matching rules, scoring or persistence.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from memory_match.events import (
    EventBus,
    GameEvent,
    CARDS_CHANGED,
    FLIP_COUNT_CHANGED,
    PERSONAL_BEST_CHANGED,
    MODEL_CHANGED,
    WIN_CHANGED,
    CARDS_MATCHED,
    CARDS_MISMATCHED,
)
from memory_match.models import Card


class GameModel(ABC):
    """
    Card-matching game model interface.
    
    Implementations own the cards, the flip rules, win detection, the flip
    counter and the personal best. They report every change on the event bus
    using the ``notify_*`` helpers, tagging each event with ``model_id``.
    A change that only moves derived state (progress alone) is reported with
    ``notify_model_changed``; the other state helpers already imply it.
    """

    def __init__(self, event_bus: EventBus, model_id: str):
        self.event_bus = event_bus
        self.model_id = model_id

    @property
    @abstractmethod
    def cards(self) -> List[Card]:
        """Current cards in display order."""
        pass

    @property
    @abstractmethod
    def flip_count(self) -> int:
        pass

    @property
    @abstractmethod
    def personal_best(self) -> Optional[int]:
        pass

    @property
    @abstractmethod
    def progress(self) -> float:
        """Fraction of the board solved, in [0, 1]."""
        pass

    @property
    @abstractmethod
    def is_win(self) -> bool:
        pass

    @abstractmethod
    async def new_game(self) -> None:
        """Deal a fresh board and reset the flip counter."""
        pass

    @abstractmethod
    async def flip(self, index: int) -> None:
        """
        Flip the card at ``index``.
        
        The model decides whether the flip is legal (already matched, already
        face-up, two cards already selected, out of range).
        """
        pass

    # --- Event helpers for implementations ---

    async def _publish(self, event_type: str, **data: Any) -> None:
        await self.event_bus.publish(GameEvent(
            type=event_type,
            source_id=self.model_id,
            data=data,
        ))

    # Every state notification is followed by MODEL_CHANGED so derived
    # values (progress) follow without a separate call.

    async def notify_cards_changed(self) -> None:
        await self._publish(CARDS_CHANGED, cards=list(self.cards))
        await self.notify_model_changed()

    async def notify_flip_count_changed(self) -> None:
        await self._publish(FLIP_COUNT_CHANGED, flip_count=self.flip_count)
        await self.notify_model_changed()

    async def notify_personal_best_changed(self) -> None:
        await self._publish(PERSONAL_BEST_CHANGED, personal_best=self.personal_best)
        await self.notify_model_changed()

    async def notify_model_changed(self) -> None:
        """Aggregate "something changed" notification; observers re-read derived values."""
        await self._publish(MODEL_CHANGED)

    async def notify_win_changed(self) -> None:
        await self._publish(WIN_CHANGED, is_win=self.is_win)
        await self.notify_model_changed()

    async def notify_cards_matched(self, indices: Iterable[int]) -> None:
        await self._publish(CARDS_MATCHED, indices=frozenset(indices))

    async def notify_cards_mismatched(self, indices: Iterable[int]) -> None:
        await self._publish(CARDS_MISMATCHED, indices=frozenset(indices))
