"""
Presentation coordinators.

Coordinators sit between the game model and the view, owning the UI-only
state that neither of them should hold.
"""

from .presentation_coordinator import PresentationCoordinator

__all__ = ['PresentationCoordinator']
