"""Shared test fixtures."""

import pytest

from repgov.config import Settings
from repgov.core.governance import GovernanceEngine
from repgov.core.reputation import ReputationStore


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(repgov_env="development", repgov_log_level="DEBUG")


@pytest.fixture
def reputation() -> ReputationStore:
    return ReputationStore()


@pytest.fixture
def engine(reputation: ReputationStore) -> GovernanceEngine:
    return GovernanceEngine(reputation)


@pytest.fixture
def member(reputation: ReputationStore) -> str:
    """A user seeded with the initial reputation."""
    reputation.initialize_reputation("wallet_1")
    return "wallet_1"
