"""Rule violations raised inside the engine.

These never cross the engine boundary: ``GovernanceEngine`` converts each one
into a ``Rejected`` result carrying the matching error code.
"""

from __future__ import annotations

from repgov.models.results import GovernanceErrorCode, Rejected


class GovernanceError(Exception):
    """Base class for recoverable governance rule violations."""

    code: GovernanceErrorCode

    def to_result(self) -> Rejected:
        return Rejected(error=self.code, message=str(self))


class InsufficientReputation(GovernanceError):
    """Raised when a creator's reputation is below the proposal threshold."""

    code = GovernanceErrorCode.INSUFFICIENT_REPUTATION


class ProposalNotFound(GovernanceError):
    """Raised when no proposal has the requested id."""

    code = GovernanceErrorCode.PROPOSAL_NOT_FOUND


class NoReputation(GovernanceError):
    """Raised when a voter has zero reputation."""

    code = GovernanceErrorCode.NO_REPUTATION


class ProposalNotActive(GovernanceError):
    """Raised when a proposal's status is ``inactive``."""

    code = GovernanceErrorCode.PROPOSAL_NOT_ACTIVE


class ProposalExpired(GovernanceError):
    """Raised when the voting window closed at or before the supplied block."""

    code = GovernanceErrorCode.PROPOSAL_EXPIRED


class AlreadyVoted(GovernanceError):
    """Raised on a repeat vote while the single-vote guard is enabled."""

    code = GovernanceErrorCode.ALREADY_VOTED
