"""Governance models — Proposals, vote records, tallies, and the audit log."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field

from repgov.models.reputation import UserId

ProposalStatus = Literal["active", "inactive"]

GovernanceEventType = Literal[
    "proposal.created",
    "proposal.closed",
    "vote.cast",
]


class Proposal(BaseModel):
    """A governance item with a bounded voting window and weighted tallies.

    ``creator`` and ``title`` are frozen once the proposal exists. Tallies only
    grow and status only moves from ``active`` to ``inactive``; the engine is
    the sole writer.
    """

    id: int = Field(ge=1, frozen=True)
    title: str = Field(frozen=True)
    creator: UserId = Field(frozen=True)
    votes_for: int = Field(default=0, ge=0)
    votes_against: int = Field(default=0, ge=0)
    status: ProposalStatus = "active"
    created_block: int = Field(default=0, frozen=True)
    end_block: int


class VoteRecord(BaseModel):
    """One accepted vote. Weight is the voter's reputation when the vote was cast."""

    proposal_id: int
    voter: UserId
    vote_for: bool
    weight: int = Field(ge=1)
    block: int
    cast_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class VoteTally(BaseModel):
    """Result of tallying the weighted votes on a single proposal."""

    proposal_id: int
    votes_for: int = 0
    votes_against: int = 0
    total_weight: int = 0
    threshold: float = 0.5
    passed: bool = False
    vote_count: int = 0
    status: ProposalStatus = "active"


class GovernanceEvent(BaseModel):
    """Append-only audit entry. Emitted for every successful state change."""

    sequence: int
    event_type: GovernanceEventType
    proposal_id: int
    actor: UserId = ""
    block: int | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    payload: dict = Field(default_factory=dict)
