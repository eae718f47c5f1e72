"""
Memory Match - presentation layer

Coordinates a memory-matching card game model and a leaderboard service with a
reactive view: mirrored display state, confetti, wiggle and mismatch reveal.
"""

from .events import EventBus, GameEvent
from .config import CoordinatorConfig
from .models import Card, PresentationState
from .coordinators import PresentationCoordinator

__all__ = ['EventBus', 'GameEvent', 'CoordinatorConfig', 'Card', 'PresentationState', 'PresentationCoordinator']
