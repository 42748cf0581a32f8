"""Governance lifecycle — proposal creation, reputation-weighted voting, tallying.

The engine holds no clock. Every state-changing call carries the caller's
current block height, and expiry is detected lazily by comparing it with the
proposal's ``end_block``. All state lives on an explicit ``EngineState`` owned
by one ``GovernanceEngine``; there are no module-level singletons.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from repgov.core.errors import (
    AlreadyVoted,
    GovernanceError,
    InsufficientReputation,
    NoReputation,
    ProposalExpired,
    ProposalNotActive,
    ProposalNotFound,
)
from repgov.core.reputation import ReputationStore
from repgov.models.constants import (
    FIRST_PROPOSAL_ID,
    PROPOSAL_REPUTATION_THRESHOLD,
    VOTING_WINDOW_BLOCKS,
)
from repgov.models.governance import (
    GovernanceEvent,
    GovernanceEventType,
    Proposal,
    VoteRecord,
    VoteTally,
)
from repgov.models.reputation import UserId
from repgov.models.results import (
    CloseProposalResult,
    CreateProposalResult,
    ProposalClosed,
    ProposalCreated,
    VoteAccepted,
    VoteResult,
)

logger = logging.getLogger(__name__)


@dataclass
class EngineState:
    """Everything the engine owns. Nothing in here is ever deleted."""

    proposals: dict[int, Proposal] = field(default_factory=dict)
    last_proposal_id: int = FIRST_PROPOSAL_ID - 1
    votes: dict[int, list[VoteRecord]] = field(default_factory=dict)
    events: list[GovernanceEvent] = field(default_factory=list)


# --- Tallying ---


def tally_votes(proposal: Proposal, threshold: float = 0.5, vote_count: int = 0) -> VoteTally:
    """Summarise a proposal's weighted tallies.

    Strictly greater-than: ties fail, and a proposal with no votes never passes.
    """
    total = proposal.votes_for + proposal.votes_against
    passed = total > 0 and (proposal.votes_for / total) > threshold
    return VoteTally(
        proposal_id=proposal.id,
        votes_for=proposal.votes_for,
        votes_against=proposal.votes_against,
        total_weight=total,
        threshold=threshold,
        passed=passed,
        vote_count=vote_count,
        status=proposal.status,
    )


def is_expired(proposal: Proposal, current_block: int) -> bool:
    """The window is closed once ``end_block`` is at or below the current height."""
    return proposal.end_block <= current_block


# --- Engine ---


class GovernanceEngine:
    """Reputation-gated proposals and reputation-weighted votes.

    Each public operation runs atomically under one engine-wide lock and
    returns a tagged result; rule violations never escape as exceptions.

    Usage:
        reputation = ReputationStore()
        engine = GovernanceEngine(reputation)

        reputation.initialize_reputation("alice")
        created = engine.create_proposal("alice", "Raise the cap", current_block=5)
        engine.vote("alice", created.proposal_id, True, current_block=6)
    """

    def __init__(
        self,
        reputation: ReputationStore,
        *,
        enforce_single_vote: bool = False,
        pass_threshold: float = 0.5,
    ) -> None:
        self.reputation = reputation
        self.enforce_single_vote = enforce_single_vote
        self.pass_threshold = pass_threshold
        self.state = EngineState()
        self._lock = threading.RLock()

    # --- Proposal lifecycle ---

    def create_proposal(
        self, creator: UserId, title: str, current_block: int
    ) -> CreateProposalResult:
        """Create a proposal whose window closes ``VOTING_WINDOW_BLOCKS`` after ``current_block``.

        Requires the creator's reputation to be at least the creation threshold.
        Ids are allocated sequentially from 1 with no gaps; a rejected call
        does not consume an id.
        """
        with self._lock:
            try:
                reputation = self.reputation.get_reputation(creator)
                if reputation < PROPOSAL_REPUTATION_THRESHOLD:
                    raise InsufficientReputation(
                        f"{creator} has reputation {reputation}, "
                        f"needs {PROPOSAL_REPUTATION_THRESHOLD} to create a proposal"
                    )
            except GovernanceError as exc:
                logger.info("create_proposal rejected: %s (%s)", exc.code, exc)
                return exc.to_result()

            proposal_id = self.state.last_proposal_id + 1
            proposal = Proposal(
                id=proposal_id,
                title=title,
                creator=creator,
                created_block=current_block,
                end_block=current_block + VOTING_WINDOW_BLOCKS,
            )
            event = self._event(
                "proposal.created",
                proposal_id,
                creator,
                current_block,
                {"title": title, "end_block": proposal.end_block},
            )

            self.state.proposals[proposal_id] = proposal
            self.state.votes[proposal_id] = []
            self.state.last_proposal_id = proposal_id
            self.state.events.append(event)

        logger.info(
            "proposal %d created by %s at block %d (voting ends at block %d)",
            proposal_id,
            creator,
            current_block,
            proposal.end_block,
        )
        return ProposalCreated(proposal_id=proposal_id, end_block=proposal.end_block)

    def vote(
        self, user: UserId, proposal_id: int, vote_for: bool, current_block: int
    ) -> VoteResult:
        """Cast a vote weighted by the voter's current reputation.

        Checks run in order: proposal exists, voter has reputation, proposal
        is active, window still open, then (if enabled) no prior vote. Voting
        never changes the proposal's status.
        """
        with self._lock:
            try:
                proposal = self._require_proposal(proposal_id)
                weight = self.reputation.get_reputation(user)
                if weight <= 0:
                    raise NoReputation(f"{user} has no reputation")
                if proposal.status != "active":
                    raise ProposalNotActive(f"Proposal {proposal_id} is {proposal.status}")
                if is_expired(proposal, current_block):
                    raise ProposalExpired(
                        f"Voting on proposal {proposal_id} ended at block "
                        f"{proposal.end_block} (current block {current_block})"
                    )
                if self.enforce_single_vote and self.has_voted(user, proposal_id):
                    raise AlreadyVoted(f"{user} has already voted on proposal {proposal_id}")
            except GovernanceError as exc:
                logger.info("vote by %s on %s rejected: %s (%s)", user, proposal_id, exc.code, exc)
                return exc.to_result()

            # Validate everything that will be stored before touching the tallies.
            record = VoteRecord(
                proposal_id=proposal_id,
                voter=user,
                vote_for=vote_for,
                weight=weight,
                block=current_block,
            )
            event = self._event(
                "vote.cast",
                proposal_id,
                user,
                current_block,
                {"vote_for": vote_for, "weight": weight},
            )

            if vote_for:
                proposal.votes_for += weight
            else:
                proposal.votes_against += weight
            self.state.votes[proposal_id].append(record)
            self.state.events.append(event)
            result = VoteAccepted(
                proposal_id=proposal_id,
                weight=weight,
                votes_for=proposal.votes_for,
                votes_against=proposal.votes_against,
            )

        logger.info(
            "vote on proposal %d by %s: %s with weight %d. Tally: FOR=%d AGAINST=%d",
            proposal_id,
            user,
            "FOR" if vote_for else "AGAINST",
            weight,
            result.votes_for,
            result.votes_against,
        )
        return result

    def close_proposal(
        self, proposal_id: int, actor: UserId = "", current_block: int | None = None
    ) -> CloseProposalResult:
        """Move an active proposal to ``inactive``. The transition is one-way.

        Does NOT check authorization — the caller decides who may close.
        """
        with self._lock:
            try:
                proposal = self._require_proposal(proposal_id)
                if proposal.status != "active":
                    raise ProposalNotActive(f"Proposal {proposal_id} is already {proposal.status}")
            except GovernanceError as exc:
                logger.info("close_proposal %s rejected: %s (%s)", proposal_id, exc.code, exc)
                return exc.to_result()

            event = self._event("proposal.closed", proposal_id, actor, current_block, {})
            proposal.status = "inactive"
            self.state.events.append(event)

        logger.info("proposal %d closed by %s", proposal_id, actor or "<external>")
        return ProposalClosed(proposal_id=proposal_id)

    # --- Reads ---

    def get_proposal(self, proposal_id: int) -> Proposal | None:
        """Return a copy of the proposal, or None if the id was never allocated."""
        with self._lock:
            proposal = self.state.proposals.get(proposal_id)
            return proposal.model_copy() if proposal is not None else None

    def list_proposals(self) -> list[Proposal]:
        with self._lock:
            return [self.state.proposals[pid].model_copy() for pid in sorted(self.state.proposals)]

    def is_open(self, proposal_id: int, current_block: int) -> bool:
        """True if the proposal exists, is active, and its window has not closed."""
        with self._lock:
            proposal = self.state.proposals.get(proposal_id)
            if proposal is None:
                return False
            return proposal.status == "active" and not is_expired(proposal, current_block)

    def has_voted(self, user: UserId, proposal_id: int) -> bool:
        with self._lock:
            return any(v.voter == user for v in self.state.votes.get(proposal_id, []))

    def get_votes(self, proposal_id: int) -> list[VoteRecord]:
        with self._lock:
            return [v.model_copy() for v in self.state.votes.get(proposal_id, [])]

    def tally(self, proposal_id: int) -> VoteTally | None:
        """Weighted tally against the configured pass threshold. None if not found."""
        with self._lock:
            proposal = self.state.proposals.get(proposal_id)
            if proposal is None:
                return None
            return tally_votes(
                proposal,
                threshold=self.pass_threshold,
                vote_count=len(self.state.votes.get(proposal_id, [])),
            )

    @property
    def events(self) -> list[GovernanceEvent]:
        with self._lock:
            return [e.model_copy(deep=True) for e in self.state.events]

    # --- Internals ---

    def _require_proposal(self, proposal_id: int) -> Proposal:
        proposal = self.state.proposals.get(proposal_id)
        if proposal is None:
            raise ProposalNotFound(f"Proposal {proposal_id} not found")
        return proposal

    def _event(
        self,
        event_type: GovernanceEventType,
        proposal_id: int,
        actor: UserId,
        block: int | None,
        payload: dict,
    ) -> GovernanceEvent:
        """Build the next audit event. The caller appends it once state has changed."""
        return GovernanceEvent(
            sequence=len(self.state.events) + 1,
            event_type=event_type,
            proposal_id=proposal_id,
            actor=actor,
            block=block,
            payload=payload,
        )
