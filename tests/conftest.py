"""
Pytest configuration and shared fixtures for presentation-layer testing.
"""

import logging
from typing import List

import pytest
import pytest_asyncio

from memory_match import EventBus, GameEvent, CoordinatorConfig, PresentationCoordinator
from memory_match.events import PRESENTATION_CHANGED
from fakes import (
    FAST_CELEBRATION_DELAY,
    FAST_MISMATCH_DELAY,
    FAST_WIGGLE_DELAY,
    FakeLeaderboardService,
    RecordingFeedbackPlayer,
    ScriptedGameModel,
)

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

@pytest.fixture
def event_bus() -> EventBus:
    """Create a fresh EventBus for each test."""
    return EventBus()

@pytest.fixture
def game_model(event_bus: EventBus) -> ScriptedGameModel:
    return ScriptedGameModel(event_bus)

@pytest.fixture
def leaderboard(event_bus: EventBus) -> FakeLeaderboardService:
    return FakeLeaderboardService(event_bus)

@pytest.fixture
def feedback() -> RecordingFeedbackPlayer:
    return RecordingFeedbackPlayer()

@pytest.fixture
def fast_config() -> CoordinatorConfig:
    return CoordinatorConfig(
        celebration_delay=FAST_CELEBRATION_DELAY,
        wiggle_delay=FAST_WIGGLE_DELAY,
        mismatch_delay=FAST_MISMATCH_DELAY,
    )

@pytest_asyncio.fixture
async def coordinator(
    event_bus: EventBus,
    game_model: ScriptedGameModel,
    leaderboard: FakeLeaderboardService,
    fast_config: CoordinatorConfig,
    feedback: RecordingFeedbackPlayer,
):
    """Coordinator wired to the scripted model; shut down after each test."""
    coordinator = PresentationCoordinator(
        model=game_model,
        leaderboard=leaderboard,
        event_bus=event_bus,
        config=fast_config,
        feedback=feedback,
    )
    yield coordinator
    await coordinator.shutdown()

@pytest.fixture
def presentation_changes(event_bus: EventBus) -> List[GameEvent]:
    """Collects every presentation_changed event published on the bus."""
    received: List[GameEvent] = []

    async def record(event: GameEvent):
        received.append(event)

    event_bus.subscribe(PRESENTATION_CHANGED, record)
    return received
