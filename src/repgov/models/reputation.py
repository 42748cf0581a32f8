"""Reputation models and the opaque user identity type."""

from __future__ import annotations

from collections.abc import Hashable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

# User identities are opaque comparable tokens (account addresses, ints, ...).
# The core only hashes and compares them.
UserId = Hashable


class ReputationScore(BaseModel):
    """A user's reputation at the time it was read. Never negative."""

    user: UserId
    score: int = Field(default=0, ge=0)


class ReputationAdjustment(BaseModel):
    """One applied change to a user's score. ``score`` is after clamping at 0."""

    user: UserId
    delta: int
    previous: int = Field(ge=0)
    score: int = Field(ge=0)
    adjusted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
