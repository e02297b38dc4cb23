"""Persistence tests against a throwaway SQLite database."""

from __future__ import annotations

from datetime import date

from conftest import make_pool

from parlaytiers.db.database import get_session
from parlaytiers.db.models import CategoryWeightRow
from parlaytiers.db.repository import ParlayRepository
from parlaytiers.parlays.engine import generate_parlays
from parlaytiers.scheduling.jobs import run_daily_job

SLATE = date(2026, 3, 1)


def test_save_and_reload_fingerprints(session_factory) -> None:
    repository = ParlayRepository(session_factory)
    summary = generate_parlays(make_pool(24), SLATE, tiers=["exploration"])
    parlays = summary.tiers["exploration"].parlays
    assert repository.save_parlays("exploration", parlays) == len(parlays)
    assert repository.load_fingerprints(SLATE) == {parlay.fingerprint for parlay in parlays}
    assert repository.load_fingerprints(date(2026, 3, 2)) == set()

    rows = repository.list_parlays(parlay_date=SLATE, tier="exploration")
    assert len(rows) == len(parlays)
    assert rows[0].legs[0]["type"] == "player"
    assert all(row.is_simulated for row in rows)


def test_category_weights_skip_blocked_and_weak_rows(session_factory) -> None:
    with get_session(session_factory) as session:
        session.add_all(
            [
                CategoryWeightRow(category="POINTS", side="over", weight=1.2, current_hit_rate=62),
                CategoryWeightRow(category="THREES", side="over", weight=1.1, is_blocked=True),
                CategoryWeightRow(category="BLOCKS", side="under", weight=0.3),
            ]
        )
    [weight] = ParlayRepository(session_factory).load_category_weights()
    assert weight.category == "POINTS"
    assert weight.calibrated_hit_rate == 0.62


def test_daily_job_is_idempotent(session_factory, pool_file) -> None:
    repository = ParlayRepository(session_factory)
    path = pool_file()
    first = run_daily_job(path, repository=repository)
    assert first["parlay_date"] == "2026-03-01"
    assert first["parlays_generated"] > 0
    assert first["persisted_tiers"]

    second = run_daily_job(path, repository=repository)
    assert second["parlays_generated"] == 0
    assert len(repository.list_parlays(parlay_date=SLATE, limit=200)) == first["parlays_generated"]
