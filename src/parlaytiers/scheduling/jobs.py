"""Scheduling entry points."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path
from typing import Any, Dict, Sequence

from parlaytiers.config import get_settings
from parlaytiers.data.ingestion import build_pool, pool_weights, read_pool_payload
from parlaytiers.db.repository import ParlayRepository
from parlaytiers.parlays.engine import RunSummary, generate_parlays
from parlaytiers.parlays.types import CategoryWeights

logger = logging.getLogger(__name__)


def run_daily_job(
    pool_path: Path | str,
    target_date: date | None = None,
    tiers: Sequence[str] | None = None,
    repository: ParlayRepository | None = None,
) -> Dict[str, Any]:
    """Run the full daily workflow: load inputs -> generate -> persist."""

    settings = get_settings()
    repository = repository or ParlayRepository()

    # Input reads are independent; construction below stays single-threaded.
    with ThreadPoolExecutor(max_workers=3) as executor:
        payload_future = executor.submit(read_pool_payload, pool_path)
        weights_future = executor.submit(repository.load_category_weights)
        payload = payload_future.result()
        target_date = target_date or payload.slate_date or date.today()
        history_future = executor.submit(repository.load_fingerprints, target_date)
        stored_weights = weights_future.result()
        history = history_future.result()

    pool = build_pool(payload)
    # Stored weights override the pool file's.
    weights = CategoryWeights(pool_weights(payload) + stored_weights)
    logger.info(
        "Generating tiered parlays for %s (%d prior fingerprints, %d weights)",
        target_date,
        len(history),
        len(weights),
    )
    summary: RunSummary = generate_parlays(
        pool,
        target_date,
        weights=weights,
        history=history,
        tiers=tiers,
        sink=repository.save_parlays,
        settings=settings,
    )
    return summary.to_dict()
