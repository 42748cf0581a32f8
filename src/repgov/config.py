"""Engine settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """Governance engine configuration.

    All values can be overridden via environment variables or .env file.
    The reputation seed, creation threshold and voting window are design
    constants and deliberately absent here (see ``repgov.models.constants``).
    """

    # Environment
    repgov_env: str = "development"

    # Governance
    repgov_enforce_single_vote: bool = False  # Reject a second vote on the same proposal
    repgov_pass_threshold: float = 0.5  # votes_for share must strictly exceed this

    # Logging
    repgov_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_pass_threshold(self) -> Settings:
        """A threshold of 1.0 or more could never pass anything."""
        if not 0.0 <= self.repgov_pass_threshold < 1.0:
            msg = f"REPGOV_PASS_THRESHOLD must be in [0, 1), got {self.repgov_pass_threshold}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def _normalize_log_level(self) -> Settings:
        """Upper-case the log level and fall back to INFO for unknown names."""
        level = self.repgov_log_level.upper()
        self.repgov_log_level = level if level in VALID_LOG_LEVELS else "INFO"
        return self
