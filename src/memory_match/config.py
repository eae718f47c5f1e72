import os
from pydantic import BaseModel, Field, ValidationError

from memory_match.exceptions import ConfigurationError

ENV_PREFIX = "MEMORY_MATCH_"


class CoordinatorConfig(BaseModel):
    """Timing configuration for the presentation coordinator. All delays are in seconds."""
    
    # How long confetti stays up after a win
    celebration_delay: float = Field(2.5, ge=0.0)
    # How long matched cards wiggle
    wiggle_delay: float = Field(0.65, ge=0.0)
    # How long a mismatched pair stays visible (and taps stay locked)
    mismatch_delay: float = Field(1.5, ge=0.0)
    
    @classmethod
    def from_env(cls) -> "CoordinatorConfig":
        """Create config from environment variables."""
        try:
            return cls(
                celebration_delay=float(os.getenv(f"{ENV_PREFIX}CELEBRATION_DELAY", "2.5")),
                wiggle_delay=float(os.getenv(f"{ENV_PREFIX}WIGGLE_DELAY", "0.65")),
                mismatch_delay=float(os.getenv(f"{ENV_PREFIX}MISMATCH_DELAY", "1.5")),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid coordinator configuration: {e}")
        except ValueError as e:
            raise ConfigurationError(f"Coordinator delays must be numbers: {e}")
