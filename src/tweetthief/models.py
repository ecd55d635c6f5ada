"""Domain models used across the pipeline."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    tweet_id: str
    text: str
    author_name: str = ""
    author_username: str = ""
    created_at: datetime
    retweeted: bool = False
    retweeted_status_id: str | None = None

    @property
    def is_retweet(self) -> bool:
        return self.retweeted or self.retweeted_status_id is not None

    @property
    def author_display(self) -> str:
        return f"{self.author_name} (@{self.author_username})"


class Incident(BaseModel):
    """One scored (original, theft) pair."""

    model_config = ConfigDict(frozen=True)

    original: Post
    theft: Post
    scores: dict[str, float] = Field(default_factory=dict)  # metric name → [0, 1]
    confidence: float = 0.0
