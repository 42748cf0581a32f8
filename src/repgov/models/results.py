"""Tagged results returned across the engine boundary.

Every public engine operation returns exactly one of these models: a success
payload or a ``Rejected`` carrying an error code, never both.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel


class GovernanceErrorCode(StrEnum):
    INSUFFICIENT_REPUTATION = "InsufficientReputation"
    PROPOSAL_NOT_FOUND = "ProposalNotFound"
    NO_REPUTATION = "NoReputation"
    PROPOSAL_NOT_ACTIVE = "ProposalNotActive"
    PROPOSAL_EXPIRED = "ProposalExpired"
    ALREADY_VOTED = "AlreadyVoted"


class ProposalCreated(BaseModel):
    kind: Literal["proposal_created"] = "proposal_created"
    ok: Literal[True] = True
    proposal_id: int
    end_block: int


class VoteAccepted(BaseModel):
    kind: Literal["vote_accepted"] = "vote_accepted"
    ok: Literal[True] = True
    proposal_id: int
    weight: int
    votes_for: int
    votes_against: int


class ProposalClosed(BaseModel):
    kind: Literal["proposal_closed"] = "proposal_closed"
    ok: Literal[True] = True
    proposal_id: int


class Rejected(BaseModel):
    """A recoverable failure. State is untouched; the caller may retry."""

    kind: Literal["rejected"] = "rejected"
    ok: Literal[False] = False
    error: GovernanceErrorCode
    message: str = ""


CreateProposalResult = ProposalCreated | Rejected
VoteResult = VoteAccepted | Rejected
CloseProposalResult = ProposalClosed | Rejected
