"""Reputation store — per-user integer scores gating proposals and weighting votes.

A user with no recorded entry has an implicit score of 0. Scores are never
negative, even when the backing store holds a negative value. The governance
engine only reads from this store; mutation is a separate authority
(``initialize_reputation`` and ``adjust_reputation``).
"""

from __future__ import annotations

import logging
import threading

from repgov.core.storage import InMemoryStore, KeyValueStore
from repgov.models.constants import SEED_REPUTATION
from repgov.models.reputation import ReputationAdjustment, ReputationScore, UserId

logger = logging.getLogger(__name__)


class ReputationStore:
    """Mapping from opaque user identity to reputation score."""

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store: KeyValueStore = store if store is not None else InMemoryStore()
        self._adjustments: list[ReputationAdjustment] = []
        self._lock = threading.RLock()

    def initialize_reputation(self, user: UserId) -> None:
        """Set ``user``'s reputation to the seed value, overwriting any prior score."""
        with self._lock:
            self._store.set(user, SEED_REPUTATION)
        logger.info("reputation: initialized %s to %d", user, SEED_REPUTATION)

    def get_reputation(self, user: UserId) -> int:
        """Return the stored score, or 0 when the user has no entry or a negative one."""
        with self._lock:
            value = self._store.get(user)
        return max(0, value) if value is not None else 0

    def adjust_reputation(self, user: UserId, delta: int) -> int:
        """Add ``delta`` to the user's score, clamping at 0. Returns the new score.

        Each adjustment is recorded (see ``adjustments``). Not used by the
        engine; exists so a reputation authority can reward or penalise users
        without reaching into the store.
        """
        with self._lock:
            current = self.get_reputation(user)
            updated = max(0, current + delta)
            self._store.set(user, updated)
            self._adjustments.append(
                ReputationAdjustment(user=user, delta=delta, previous=current, score=updated)
            )
        logger.info("reputation: adjusted %s by %+d (%d -> %d)", user, delta, current, updated)
        return updated

    def adjustments(self, user: UserId | None = None) -> list[ReputationAdjustment]:
        """Applied adjustments in order, optionally only those for ``user``."""
        with self._lock:
            return [
                a.model_copy() for a in self._adjustments if user is None or a.user == user
            ]

    def score(self, user: UserId) -> ReputationScore:
        return ReputationScore(user=user, score=self.get_reputation(user))

    def snapshot(self) -> list[ReputationScore]:
        """All recorded scores, sorted by the identity's string form."""
        with self._lock:
            users = sorted(self._store.keys(), key=str)
            return [self.score(u) for u in users]
