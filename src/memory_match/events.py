import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Callable, Awaitable, Any
from collections import defaultdict
from pydantic import BaseModel, ConfigDict, Field

# Model -> coordinator
CARDS_CHANGED = "cards_changed"
FLIP_COUNT_CHANGED = "flip_count_changed"
PERSONAL_BEST_CHANGED = "personal_best_changed"
MODEL_CHANGED = "model_changed"
WIN_CHANGED = "win_changed"
CARDS_MATCHED = "cards_matched"
CARDS_MISMATCHED = "cards_mismatched"

# Leaderboard service -> coordinator
AUTHENTICATION_CHANGED = "authentication_changed"

# Coordinator -> view layer
PRESENTATION_CHANGED = "presentation_changed"

EventHandler = Callable[["GameEvent"], Awaitable[None]]


class GameEvent(BaseModel):
    """Event emitted by the model, the leaderboard service or the coordinator."""
    model_config = ConfigDict(
        # Allow arbitrary types in data field (for Card lists, index sets)
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    type: str = Field(..., min_length=1, description="Event type identifier (e.g., 'cards_matched', 'win_changed')")
    source_id: str = Field(..., min_length=1, description="Identifier of the component that emitted the event")
    data: Dict[str, Any] = Field(default_factory=dict, description="Event payload containing relevant event data")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the event was created")


class EventBus:
    """
    Simple event bus connecting the game model and leaderboard service to the
    presentation coordinator, and the coordinator to the view layer.
    
    Supports async event handlers with error isolation - if one handler fails,
    others continue to run.
    """
    
    def __init__(self):
        self._subscribers: Dict[str, List[EventHandler]] = defaultdict(list)
        self.logger = logging.getLogger(__name__)
    
    def subscribe(self, event_type: str, handler: EventHandler):
        """Subscribe a handler to an event type."""
        self._subscribers[event_type].append(handler)
        self.logger.debug(f"Subscribed handler to {event_type}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        handlers = self._subscribers.get(event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        self.logger.debug(f"Unsubscribed handler from {event_type}")
        return True
    
    async def publish(self, event: GameEvent):
        """Publish an event to all subscribers."""
        # Copy so handlers can unsubscribe while we dispatch
        handlers = list(self._subscribers.get(event.type, []))
        if not handlers:
            self.logger.debug(f"No subscribers for event type: {event.type}")
            return
            
        self.logger.debug(f"Publishing {event.type} to {len(handlers)} handlers")
        
        # Run all handlers concurrently with error isolation
        results = await asyncio.gather(
            *[self._safe_handle(handler, event) for handler in handlers],
            return_exceptions=True
        )
        
        # Log any errors but don't fail the publish operation
        for i, result in enumerate(results):
            if isinstance(result, Exception):
                self.logger.error(f"Event handler {i} failed for {event.type}: {result}")
    
    async def _safe_handle(self, handler: EventHandler, event: GameEvent):
        """Run a handler with error isolation."""
        try:
            await handler(event)
        except Exception as e:
            name = getattr(handler, "__name__", repr(handler))
            self.logger.error(f"Handler {name} failed: {e}", exc_info=True)
            raise  # Re-raise so gather() can catch it as exception
    
    def get_subscriber_count(self, event_type: str) -> int:
        """Get number of subscribers for an event type (useful for testing)."""
        return len(self._subscribers.get(event_type, []))
