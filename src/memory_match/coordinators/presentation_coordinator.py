import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, FrozenSet, List, Optional, Set, Tuple

from memory_match.capabilities import FeedbackPlayer, GameModel, LeaderboardService, LoggingFeedbackPlayer
from memory_match.config import CoordinatorConfig
from memory_match.events import (
    EventBus,
    EventHandler,
    GameEvent,
    CARDS_CHANGED,
    FLIP_COUNT_CHANGED,
    PERSONAL_BEST_CHANGED,
    MODEL_CHANGED,
    WIN_CHANGED,
    CARDS_MATCHED,
    CARDS_MISMATCHED,
    AUTHENTICATION_CHANGED,
    PRESENTATION_CHANGED,
)
from memory_match.models import Card, PresentationState

logger = logging.getLogger(__name__)


class PresentationCoordinator:
    """
    Brokers between the game model, the leaderboard service and the view.
    
    Responsibilities:
    - Mirror model and leaderboard state into view-facing fields
    - Turn model events into transient UI effects (confetti, wiggle, mismatch reveal)
    - Gate flip intents while a mismatched pair is on display
    - Republish every view-facing change as a ``presentation_changed`` event
    
    Does NOT handle:
    - Matching rules, win detection or scoring (handled by the GameModel)
    - Authentication or score submission (handled by the LeaderboardService)
    - Rendering or sound/haptic playback (handled by the view and FeedbackPlayer)
    
    Deferred resets are not cancelled by ``new_game()``. Each one only removes
    the indices of the event that scheduled it, or clears a flag, so a stale
    one firing against a fresh board has nothing left to undo.
    """
    
    def __init__(
        self,
        model: GameModel,
        leaderboard: LeaderboardService,
        event_bus: EventBus,
        config: Optional[CoordinatorConfig] = None,
        feedback: Optional[FeedbackPlayer] = None,
        coordinator_id: Optional[str] = None,
    ):
        self.model = model
        self.leaderboard = leaderboard
        self.event_bus = event_bus
        self.config = config or CoordinatorConfig()
        self.feedback = feedback or LoggingFeedbackPlayer()
        self.coordinator_id = coordinator_id or f"presentation_{model.model_id}"

        # View-facing state, seeded with the sources' current values
        self._cards: List[Card] = list(model.cards)
        self._flip_count: int = model.flip_count
        self._personal_best: Optional[int] = model.personal_best
        self._progress: float = model.progress
        self._is_authenticated: bool = leaderboard.is_authenticated

        # UI-only state
        self._show_confetti = False
        self._wiggling_indices: Set[int] = set()
        self._is_showing_leaderboard = False
        # Indices kept face-up after a mismatch, on top of the model's own flags
        self._transient_face_up: Set[int] = set()
        self._is_interaction_disabled = False

        self._last_win: bool = model.is_win
        self._pending: Set[asyncio.Task] = set()
        self._subscriptions: List[Tuple[str, EventHandler]] = []
        self._closed = False

        self._subscribe(CARDS_CHANGED, self._on_cards_changed, model.model_id)
        self._subscribe(FLIP_COUNT_CHANGED, self._on_flip_count_changed, model.model_id)
        self._subscribe(PERSONAL_BEST_CHANGED, self._on_personal_best_changed, model.model_id)
        self._subscribe(MODEL_CHANGED, self._on_model_changed, model.model_id)
        self._subscribe(AUTHENTICATION_CHANGED, self._on_authentication_changed, leaderboard.service_id)
        self._subscribe(WIN_CHANGED, self._on_win_changed, model.model_id)
        self._subscribe(CARDS_MATCHED, self._on_cards_matched, model.model_id)
        self._subscribe(CARDS_MISMATCHED, self._on_cards_mismatched, model.model_id)

        logger.debug(f"Coordinator {self.coordinator_id} attached to model {model.model_id}")

    # --- View-facing fields ---

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    @property
    def flip_count(self) -> int:
        return self._flip_count

    @property
    def personal_best(self) -> Optional[int]:
        return self._personal_best

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def is_authenticated(self) -> bool:
        return self._is_authenticated

    @property
    def show_confetti(self) -> bool:
        return self._show_confetti

    @property
    def wiggling_indices(self) -> FrozenSet[int]:
        return frozenset(self._wiggling_indices)

    @property
    def is_showing_leaderboard(self) -> bool:
        return self._is_showing_leaderboard

    @property
    def is_interaction_disabled(self) -> bool:
        return self._is_interaction_disabled

    @property
    def leaderboard_id(self) -> str:
        return self.leaderboard.leaderboard_id

    @property
    def pending_timer_count(self) -> int:
        """Number of deferred resets that have not fired yet."""
        return len(self._pending)

    @property
    def is_closed(self) -> bool:
        return self._closed

    # --- Intents ---

    async def new_game(self):
        """Start a new game and drop any transient presentation state."""
        if self._closed:
            logger.warning(f"new_game() called on closed coordinator {self.coordinator_id}")
            return

        logger.info(f"Starting new game on model {self.model.model_id}")
        # Cleared before the model deals, so views reacting to the fresh board
        # never see the old reveal or wiggle on it
        cleared = self._assign(
            transient_face_up=set(),
            is_interaction_disabled=False,
            wiggling_indices=set(),
            show_confetti=False,
        )
        await self.model.new_game()
        await self._publish_changes(cleared)

    async def flip(self, index: int):
        """Forward a flip to the model unless a mismatch is still on display."""
        if self._closed:
            logger.warning(f"flip({index}) called on closed coordinator {self.coordinator_id}")
            return
        if self._is_interaction_disabled:
            logger.debug(f"Ignoring flip of card {index}: interaction disabled")
            return
        await self.model.flip(index)

    async def show_leaderboard(self):
        await self._apply(is_showing_leaderboard=True)

    async def dismiss_leaderboard(self):
        await self._apply(is_showing_leaderboard=False)

    # --- Queries ---

    def is_presenting_face_up(self, index: int) -> bool:
        """
        Whether the view should draw the card at ``index`` face-up.
        
        True when the model has it face-up (selected or solved), or when it is
        part of a mismatched pair still on display. Out-of-range indices are
        presented face-down.
        """
        if not 0 <= index < len(self._cards):
            return False
        return self._cards[index].is_face_up or index in self._transient_face_up

    def state(self) -> PresentationState:
        """Snapshot of every view-facing field."""
        return PresentationState(
            cards=self.cards,
            flip_count=self._flip_count,
            personal_best=self._personal_best,
            progress=self._progress,
            is_authenticated=self._is_authenticated,
            show_confetti=self._show_confetti,
            wiggling_indices=set(self._wiggling_indices),
            is_showing_leaderboard=self._is_showing_leaderboard,
            is_interaction_disabled=self._is_interaction_disabled,
            face_up_indices={i for i in range(len(self._cards)) if self.is_presenting_face_up(i)},
        )

    # --- Lifecycle ---

    async def shutdown(self):
        """Detach from the event bus and cancel every pending deferred reset."""
        if self._closed:
            return
        logger.info(f"Shutting down coordinator {self.coordinator_id}...")
        self._closed = True

        for event_type, handler in self._subscriptions:
            self.event_bus.unsubscribe(event_type, handler)
        self._subscriptions.clear()

        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._pending.clear()

        logger.info(f"Coordinator {self.coordinator_id} shutdown complete ({len(pending)} timers cancelled)")

    # --- Event handlers ---

    async def _on_cards_changed(self, event: GameEvent):
        await self._apply(cards=list(event.data.get("cards", [])))

    async def _on_flip_count_changed(self, event: GameEvent):
        await self._apply(flip_count=event.data.get("flip_count", 0))

    async def _on_personal_best_changed(self, event: GameEvent):
        await self._apply(personal_best=event.data.get("personal_best"))

    async def _on_model_changed(self, event: GameEvent):
        # Progress has no event of its own; re-read it on every model change
        await self._apply(progress=self.model.progress)

    async def _on_authentication_changed(self, event: GameEvent):
        await self._apply(is_authenticated=bool(event.data.get("is_authenticated", False)))

    async def _on_win_changed(self, event: GameEvent):
        won = bool(event.data.get("is_win", False))
        if won == self._last_win:
            return
        self._last_win = won
        if not won:
            return

        logger.info(f"Model {self.model.model_id} won after {self._flip_count} flips")
        changed = self._assign(show_confetti=True)
        self._play(self.feedback.play_win_sound, "win sound")
        self._schedule(
            self.config.celebration_delay,
            lambda: self._apply(show_confetti=False),
            "celebration",
        )
        await self._publish_changes(changed)

    async def _on_cards_matched(self, event: GameEvent):
        indices = frozenset(event.data.get("indices", ()))
        changed = self._assign(wiggling_indices=self._wiggling_indices | indices)

        async def stop_wiggle():
            await self._apply(wiggling_indices=self._wiggling_indices - indices)

        self._schedule(self.config.wiggle_delay, stop_wiggle, f"wiggle {sorted(indices)}")
        await self._publish_changes(changed)

    async def _on_cards_mismatched(self, event: GameEvent):
        indices = frozenset(event.data.get("indices", ()))
        # Lock first so no flip can slip in while the pair is being shown
        changed = self._assign(
            is_interaction_disabled=True,
            transient_face_up=self._transient_face_up | indices,
        )
        self._play(self.feedback.play_mismatch_haptic, "mismatch haptic")

        async def end_reveal():
            await self._apply(
                transient_face_up=self._transient_face_up - indices,
                is_interaction_disabled=False,
            )

        self._schedule(self.config.mismatch_delay, end_reveal, f"mismatch {sorted(indices)}")
        await self._publish_changes(changed)

    # --- Internals ---

    def _subscribe(self, event_type: str, handler: EventHandler, source_id: str):
        """Subscribe ``handler`` to events of ``event_type`` emitted by ``source_id`` only."""
        @functools.wraps(handler)
        async def filtered(event: GameEvent):
            if event.source_id != source_id:
                return
            await handler(event)

        self.event_bus.subscribe(event_type, filtered)
        self._subscriptions.append((event_type, filtered))

    def _assign(self, **changes: Any) -> List[str]:
        """Write fields without notifying. Returns the names that actually changed."""
        changed = []
        for field, value in changes.items():
            attr = f"_{field}"
            if getattr(self, attr) == value:
                continue
            setattr(self, attr, value)
            changed.append(field)
        return changed

    async def _apply(self, **changes: Any):
        await self._publish_changes(self._assign(**changes))

    async def _publish_changes(self, fields: List[str]):
        for field in fields:
            value = getattr(self, f"_{field}")
            if isinstance(value, (set, frozenset)):
                value = frozenset(value)
            elif isinstance(value, list):
                value = list(value)
            logger.debug(f"{self.coordinator_id}: {field} -> {value!r}")
            await self.event_bus.publish(GameEvent(
                type=PRESENTATION_CHANGED,
                source_id=self.coordinator_id,
                data={"field": field, "value": value},
            ))

    def _play(self, effect: Callable[[], None], name: str):
        """Trigger a sound or haptic. Playback failures never affect presentation state."""
        try:
            effect()
        except Exception as e:
            logger.warning(f"{self.coordinator_id}: {name} failed: {e}", exc_info=True)

    def _schedule(self, delay: float, action: Callable[[], Awaitable[None]], label: str):
        """Run ``action`` once after ``delay`` seconds on the running loop."""
        if self._closed:
            return
        task = asyncio.create_task(self._run_after(delay, action, label))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_after(self, delay: float, action: Callable[[], Awaitable[None]], label: str):
        try:
            await asyncio.sleep(delay)
            logger.debug(f"{self.coordinator_id}: {label} timer fired")
            await action()
        except asyncio.CancelledError:
            logger.debug(f"{self.coordinator_id}: {label} timer cancelled")
        except Exception as e:
            logger.error(f"{self.coordinator_id}: {label} timer failed: {e}", exc_info=True)
