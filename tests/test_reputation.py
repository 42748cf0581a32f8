"""Tests for the reputation store and its key-value backing."""

from repgov.core.reputation import ReputationStore
from repgov.core.storage import InMemoryStore, KeyValueStore
from repgov.models.constants import SEED_REPUTATION
from repgov.models.reputation import ReputationScore


class TestInitializeReputation:
    def test_sets_seed_value(self, reputation: ReputationStore):
        reputation.initialize_reputation("alice")
        assert reputation.get_reputation("alice") == 100

    def test_overwrites_higher_score(self, reputation: ReputationStore):
        reputation.adjust_reputation("alice", 250)
        reputation.initialize_reputation("alice")
        assert reputation.get_reputation("alice") == SEED_REPUTATION

    def test_overwrites_lower_score(self, reputation: ReputationStore):
        reputation.initialize_reputation("alice")
        reputation.adjust_reputation("alice", -40)
        reputation.initialize_reputation("alice")
        assert reputation.get_reputation("alice") == SEED_REPUTATION


class TestGetReputation:
    def test_unknown_user_is_zero(self, reputation: ReputationStore):
        assert reputation.get_reputation("nobody") == 0

    def test_read_does_not_create_entry(self):
        store = InMemoryStore()
        reputation = ReputationStore(store)
        reputation.get_reputation("nobody")
        assert len(store) == 0


class TestAdjustReputation:
    def test_adds_delta(self, reputation: ReputationStore):
        reputation.initialize_reputation("alice")
        assert reputation.adjust_reputation("alice", 15) == 115
        assert reputation.get_reputation("alice") == 115

    def test_clamps_at_zero(self, reputation: ReputationStore):
        reputation.initialize_reputation("alice")
        assert reputation.adjust_reputation("alice", -500) == 0
        assert reputation.get_reputation("alice") == 0

    def test_unknown_user_starts_from_zero(self, reputation: ReputationStore):
        assert reputation.adjust_reputation("bob", 7) == 7


class TestStorageBacking:
    def test_uses_supplied_store(self):
        store = InMemoryStore({"carol": 42})
        reputation = ReputationStore(store)
        assert reputation.get_reputation("carol") == 42
        reputation.initialize_reputation("dave")
        assert store.get("dave") == SEED_REPUTATION

    def test_in_memory_store_satisfies_protocol(self):
        assert isinstance(InMemoryStore(), KeyValueStore)

    def test_snapshot_sorted_by_user(self, reputation: ReputationStore):
        reputation.initialize_reputation("zed")
        reputation.adjust_reputation("amy", 3)
        assert reputation.snapshot() == [
            ReputationScore(user="amy", score=3),
            ReputationScore(user="zed", score=100),
        ]

    def test_negative_stored_value_reads_as_zero(self):
        """A store seeded out-of-band with a negative value never leaks it."""
        reputation = ReputationStore(InMemoryStore({"x": -5}))
        assert reputation.get_reputation("x") == 0
        assert reputation.snapshot() == [ReputationScore(user="x", score=0)]

    def test_negative_stored_value_adjusts_from_zero(self):
        reputation = ReputationStore(InMemoryStore({"x": -5}))
        assert reputation.adjust_reputation("x", 10) == 10

    def test_non_string_identities(self, reputation: ReputationStore):
        reputation.initialize_reputation(7)
        reputation.initialize_reputation(("chain", "0xabc"))
        assert reputation.get_reputation(7) == SEED_REPUTATION
        assert [s.user for s in reputation.snapshot()] == [("chain", "0xabc"), 7]


class TestAdjustmentHistory:
    def test_records_each_adjustment(self, reputation: ReputationStore):
        reputation.initialize_reputation("alice")
        reputation.adjust_reputation("alice", 25)
        reputation.adjust_reputation("alice", -200)
        history = reputation.adjustments("alice")
        assert [(a.delta, a.previous, a.score) for a in history] == [
            (25, 100, 125),
            (-200, 125, 0),
        ]

    def test_filters_by_user(self, reputation: ReputationStore):
        reputation.adjust_reputation("alice", 1)
        reputation.adjust_reputation("bob", 2)
        assert [a.user for a in reputation.adjustments()] == ["alice", "bob"]
        assert [a.delta for a in reputation.adjustments("bob")] == [2]

    def test_initialize_is_not_an_adjustment(self, reputation: ReputationStore):
        reputation.initialize_reputation("alice")
        assert reputation.adjustments() == []

    def test_history_is_a_copy(self, reputation: ReputationStore):
        reputation.adjust_reputation("alice", 5)
        reputation.adjustments()[0].score = 999
        assert reputation.adjustments()[0].score == 5
