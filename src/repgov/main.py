"""Engine factory — wires settings, logging, reputation store, and engine."""

from __future__ import annotations

import logging

from repgov.config import Settings
from repgov.core.governance import GovernanceEngine
from repgov.core.reputation import ReputationStore
from repgov.core.storage import KeyValueStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.repgov_log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_engine(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
) -> GovernanceEngine:
    """Create a GovernanceEngine backed by ``store`` (in-memory if omitted)."""
    if settings is None:
        settings = Settings()
    configure_logging(settings)

    engine = GovernanceEngine(
        ReputationStore(store),
        enforce_single_vote=settings.repgov_enforce_single_vote,
        pass_threshold=settings.repgov_pass_threshold,
    )
    logger.info(
        "governance engine ready (env=%s, single_vote=%s, pass_threshold=%.2f)",
        settings.repgov_env,
        settings.repgov_enforce_single_vote,
        settings.repgov_pass_threshold,
    )
    return engine
