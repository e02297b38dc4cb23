"""Persistence sink and history reads for generated parlays."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from tenacity import RetryCallState, retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from parlaytiers.db.database import SessionLocal, get_session
from parlaytiers.db.models import CategoryWeightRow, GeneratedParlay
from parlaytiers.parlays.types import CategoryWeight, Parlay

logger = logging.getLogger(__name__)

MIN_ACTIVE_WEIGHT = 0.5


def _as_fraction(value: float | None) -> float | None:
    if value is None:
        return None
    return value / 100 if value > 1 else value


def _retry_log(retry_state: RetryCallState) -> None:  # pragma: no cover - logging helper
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Parlay insert retry attempt %d due to %s", retry_state.attempt_number, exception)


class ParlayRepository:
    """Reads history and writes accepted parlays through SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker | None = None) -> None:
        self.session_factory = session_factory or SessionLocal

    @retry(
        retry=retry_if_exception_type(OperationalError),
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        after=_retry_log,
        reraise=True,
    )
    def save_parlays(self, tier: str, parlays: Sequence[Parlay]) -> int:
        """Insert one tier's parlays in a single transaction."""

        with get_session(self.session_factory) as session:
            for parlay in parlays:
                session.add(GeneratedParlay(**parlay.to_record()))
        logger.info("Persisted %d %s parlays", len(parlays), tier)
        return len(parlays)

    def load_fingerprints(self, parlay_date: date) -> set[str]:
        with get_session(self.session_factory) as session:
            stmt = select(GeneratedParlay.fingerprint).where(GeneratedParlay.parlay_date == parlay_date)
            return set(session.scalars(stmt))

    def load_category_weights(self) -> list[CategoryWeight]:
        with get_session(self.session_factory) as session:
            stmt = select(CategoryWeightRow).where(
                CategoryWeightRow.is_blocked.is_(False),
                CategoryWeightRow.weight >= MIN_ACTIVE_WEIGHT,
            )
            weights = [
                CategoryWeight(
                    category=row.category,
                    side=row.side,
                    weight=row.weight,
                    calibrated_hit_rate=_as_fraction(row.current_hit_rate),
                    sport=row.sport,
                )
                for row in session.scalars(stmt)
            ]
        logger.info("Loaded %d category weights", len(weights))
        return weights

    def list_parlays(
        self,
        parlay_date: date | None = None,
        tier: str | None = None,
        limit: int = 50,
    ) -> list[GeneratedParlay]:
        with get_session(self.session_factory) as session:
            stmt = select(GeneratedParlay).order_by(
                GeneratedParlay.parlay_date.desc(),
                GeneratedParlay.created_at.desc(),
            )
            if parlay_date:
                stmt = stmt.where(GeneratedParlay.parlay_date == parlay_date)
            if tier:
                stmt = stmt.where(GeneratedParlay.tier == tier)
            return list(session.scalars(stmt.limit(limit)))
