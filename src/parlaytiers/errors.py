"""Exception hierarchy for parlay generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from parlaytiers.parlays.engine import RunSummary


class ParlayTiersError(Exception):
    """Base error for the parlay engine."""


class MalformedLegError(ParlayTiersError):
    """A candidate leg is missing a price or line and cannot be scored."""

    def __init__(self, leg_id: str, reason: str) -> None:
        super().__init__(f"Malformed leg {leg_id!r}: {reason}")
        self.leg_id = leg_id
        self.reason = reason


class InsufficientPoolError(ParlayTiersError):
    """The candidate pool is too thin to generate anything trustworthy."""

    def __init__(self, pool_size: int, minimum: int) -> None:
        super().__init__(f"Insufficient candidate pool: {pool_size} legs (minimum {minimum})")
        self.pool_size = pool_size
        self.minimum = minimum


class PersistenceError(ParlayTiersError):
    """Accepted parlays could not be handed to the sink.

    ``summary`` holds what the run achieved before the failure, including the
    tiers that were already persisted.
    """

    def __init__(self, tier: str, summary: RunSummary, cause: Exception | None = None) -> None:
        super().__init__(f"Failed to persist {tier} tier parlays: {cause}")
        self.tier = tier
        self.summary = summary
        self.cause = cause
