"""Tests for the engine factory."""

from repgov.config import Settings
from repgov.core.storage import InMemoryStore
from repgov.main import build_engine
from repgov.models.results import GovernanceErrorCode


class TestBuildEngine:
    def test_applies_settings(self) -> None:
        settings = Settings(repgov_enforce_single_vote=True, repgov_pass_threshold=0.6)
        engine = build_engine(settings)
        assert engine.enforce_single_vote is True
        assert engine.pass_threshold == 0.6

    def test_uses_supplied_store(self, settings: Settings) -> None:
        store = InMemoryStore({"founder": 100})
        engine = build_engine(settings, store=store)
        assert engine.create_proposal("founder", "Charter", 0).ok is True

    def test_guard_wired_through(self) -> None:
        engine = build_engine(Settings(repgov_enforce_single_vote=True))
        engine.reputation.initialize_reputation("a")
        engine.create_proposal("a", "T", 0)
        engine.vote("a", 1, True, 1)
        assert engine.vote("a", 1, True, 2).error == GovernanceErrorCode.ALREADY_VOTED
