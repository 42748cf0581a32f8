"""Design constants shared by the reputation store and the governance engine.

Placed here so both ``core.reputation`` and ``core.governance`` can import
them without one core module depending on the other's internals.
"""

from __future__ import annotations

# Reputation granted by initialize_reputation (overwrites any prior value).
SEED_REPUTATION = 100

# Minimum reputation needed to create a proposal. Equal to the seed on purpose:
# only users who have never lost reputation qualify.
PROPOSAL_REPUTATION_THRESHOLD = SEED_REPUTATION

# Blocks between proposal creation and the end of its voting window.
VOTING_WINDOW_BLOCKS = 10

# Proposal ids start here and increase by one per created proposal.
FIRST_PROPOSAL_ID = 1
