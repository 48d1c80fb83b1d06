"""
Feed configuration: taste profile depth and the explore/exploit split.

FeedConfig defaults are defined here. Callers that pass no config get
DEFAULT_CONFIG via resolve_config().
"""

from typing import Optional

from pydantic import BaseModel, model_validator


class FeedConfig(BaseModel):
    """Configuration for the hybrid feed."""

    # -------------------------------------------------------------------------
    # Taste profile
    # -------------------------------------------------------------------------

    # Number of most recent likes averaged into the taste vector.
    taste_profile_size: int = 3

    # -------------------------------------------------------------------------
    # Explore / exploit blend (warm users)
    # feed = shuffle(top smart_feed_size by similarity + dumb_feed_size random)
    # -------------------------------------------------------------------------

    # Articles ranked by similarity to the taste vector.
    smart_feed_size: int = 7
    # Random unranked articles mixed in for exploration.
    dumb_feed_size: int = 3

    # -------------------------------------------------------------------------
    # Cold start / fill
    # -------------------------------------------------------------------------

    # Total feed length. Cold-start users get this many random articles; warm
    # users with an empty smart subset are filled up to this size.
    feed_size: int = 10

    @model_validator(mode="after")
    def sizes_fit_feed(self):
        if self.taste_profile_size < 1:
            raise ValueError("taste_profile_size must be at least 1")
        if min(self.smart_feed_size, self.dumb_feed_size, self.feed_size) < 0:
            raise ValueError("Feed sizes cannot be negative")
        if self.smart_feed_size + self.dumb_feed_size > self.feed_size:
            raise ValueError(
                f"smart_feed_size + dumb_feed_size must not exceed feed_size ({self.feed_size})"
            )
        return self


DEFAULT_CONFIG = FeedConfig()


def resolve_config(config: Optional["FeedConfig"]) -> "FeedConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
