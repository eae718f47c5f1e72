from typing import List, Optional, Set
from pydantic import BaseModel, ConfigDict, Field

# --- Model-owned data ---

class Card(BaseModel):
    """A single card as reported by the game model. Read-only to the presentation layer."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Stable identity of the card within a game")
    content: str = Field("", description="Face value shown when the card is face-up")
    is_face_up: bool = Field(False, description="Whether the model currently has this card face-up")
    is_matched: bool = Field(False, description="Whether this card has been matched with its pair")

# --- Presentation snapshot ---

class PresentationState(BaseModel):
    """Snapshot of every view-facing field of the presentation coordinator."""
    model_config = ConfigDict(frozen=True)

    # Mirrored from model / leaderboard service
    cards: List[Card] = Field(default_factory=list)
    flip_count: int = 0
    personal_best: Optional[int] = None
    progress: float = 0.0
    is_authenticated: bool = False

    # UI-only state
    show_confetti: bool = False
    wiggling_indices: Set[int] = Field(default_factory=set)
    is_showing_leaderboard: bool = False
    is_interaction_disabled: bool = False
    face_up_indices: Set[int] = Field(default_factory=set, description="Indices the view should render face-up")
