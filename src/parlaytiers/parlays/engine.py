"""Tiered parlay generation."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List

from parlaytiers.config import Settings, get_settings
from parlaytiers.errors import InsufficientPoolError, PersistenceError
from parlaytiers.parlays.builder import ParlayBuilder
from parlaytiers.parlays.dedup import Deduplicator, fingerprint
from parlaytiers.parlays.evaluator import ParlayEvaluator
from parlaytiers.parlays.scoring import score_pool
from parlaytiers.parlays.tiers import TIER_ORDER, TierConfig, get_tier
from parlaytiers.parlays.types import CandidatePool, CategoryWeights, Parlay
from parlaytiers.parlays.usage import UsageTracker

logger = logging.getLogger(__name__)

ParlaySink = Callable[[str, List[Parlay]], None]


@dataclass
class TierResult:
    tier: str
    parlays: List[Parlay] = field(default_factory=list)
    drafts: int = 0
    duplicates: int = 0
    rejections: Counter[str] = field(default_factory=Counter)

    @property
    def count(self) -> int:
        return len(self.parlays)

    def leg_distribution(self) -> Dict[int, int]:
        return dict(sorted(Counter(parlay.leg_count for parlay in self.parlays).items()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "drafts": self.drafts,
            "duplicates": self.duplicates,
            "leg_distribution": self.leg_distribution(),
            "rejections": dict(self.rejections),
        }


@dataclass
class RunSummary:
    parlay_date: date
    pool_size: int
    player_legs: int
    team_legs: int
    tiers: Dict[str, TierResult] = field(default_factory=dict)
    persisted_tiers: List[str] = field(default_factory=list)
    failed_tier: str | None = None

    @property
    def parlays(self) -> List[Parlay]:
        return [parlay for result in self.tiers.values() for parlay in result.parlays]

    @property
    def total(self) -> int:
        return sum(result.count for result in self.tiers.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parlay_date": self.parlay_date.isoformat(),
            "parlays_generated": self.total,
            "pool_size": self.pool_size,
            "player_legs": self.player_legs,
            "team_legs": self.team_legs,
            "tiers": {name: result.to_dict() for name, result in self.tiers.items()},
            "persisted_tiers": list(self.persisted_tiers),
            "failed_tier": self.failed_tier,
        }


def generate_tier(
    tier: TierConfig,
    pool: CandidatePool,
    parlay_date: date,
    deduplicator: Deduplicator,
    weights: CategoryWeights | None = None,
    *,
    bankroll: float | None = None,
    strategy_name: str | None = None,
    settings: Settings | None = None,
) -> TierResult:
    """Walk a tier's profiles in order against a fresh usage tracker.

    ``pool`` must already be scored. Duplicates of previously persisted
    parlays count toward the tier's target so that re-runs stop at the same
    point as the run that produced them.
    """

    settings = settings or get_settings()
    bankroll = settings.default_bankroll if bankroll is None else bankroll
    strategy_name = strategy_name or settings.strategy_name

    builder = ParlayBuilder(tier, UsageTracker(tier), weights)
    evaluator = ParlayEvaluator(
        tier,
        pool.golden_categories,
        min_combined_probability=settings.min_combined_probability,
        edge_floor=settings.positive_signal_edge_floor,
        max_expected_odds=settings.max_expected_odds,
    )
    result = TierResult(tier=tier.name)
    logger.info("Generating %s tier (%d target)", tier.name, tier.count)

    for profile in tier.profiles:
        if result.count + result.duplicates >= tier.count:
            break
        legs = builder.build(profile, pool)
        if legs is None:
            result.rejections["short_draft"] += 1
            continue
        result.drafts += 1

        evaluation = evaluator.evaluate(profile, legs)
        if not evaluation.accepted:
            logger.debug("%s/%s rejected: %s", tier.name, profile.strategy, evaluation.rejection)
            result.rejections[evaluation.rejection] += 1
            continue

        parlay_fingerprint = fingerprint(legs)
        if not deduplicator.accept(parlay_fingerprint):
            logger.debug("%s/%s duplicate: %s", tier.name, profile.strategy, parlay_fingerprint)
            result.duplicates += 1
            continue

        metrics = evaluation.metrics
        result.parlays.append(
            Parlay(
                parlay_date=parlay_date,
                tier=tier.name,
                strategy_name=f"{strategy_name}_{tier.name}_{profile.strategy}",
                legs=legs,
                combined_probability=metrics.combined_probability,
                implied_probability=metrics.implied_probability,
                edge=metrics.edge,
                effective_edge=metrics.effective_edge,
                sharpe=metrics.sharpe,
                combined_decimal_odds=metrics.combined_decimal_odds,
                expected_odds=metrics.expected_odds,
                stake=evaluator.stake(metrics, bankroll, settings.max_kelly_risk),
                is_simulated=tier.is_simulated,
                selection_rationale=f"{tier.name} tier: {profile.strategy} ({profile.legs}-leg)",
                fingerprint=parlay_fingerprint,
            )
        )
        logger.info(
            "Created %s/%s %d-leg parlay #%d", tier.name, profile.strategy, len(legs), result.count
        )

    if not result.parlays:
        logger.info("%s tier produced no parlays", tier.name)
    return result


def generate_parlays(
    pool: CandidatePool,
    parlay_date: date,
    *,
    weights: CategoryWeights | None = None,
    history: Iterable[str] = (),
    tiers: Sequence[str] | None = None,
    sink: ParlaySink | None = None,
    bankroll: float | None = None,
    strategy_name: str | None = None,
    settings: Settings | None = None,
) -> RunSummary:
    """Score the pool and generate every requested tier in order.

    ``history`` seeds the deduplicator with fingerprints already persisted for
    ``parlay_date``. Each tier's parlays are handed to ``sink`` before the next
    tier starts; a sink failure aborts the run with :class:`PersistenceError`.
    """

    settings = settings or get_settings()
    selected = [get_tier(name) for name in tiers or TIER_ORDER]
    weights = weights or CategoryWeights()
    scored = score_pool(pool, weights)
    summary = RunSummary(
        parlay_date=parlay_date,
        pool_size=scored.total,
        player_legs=len(scored.player_legs),
        team_legs=len(scored.team_legs),
    )
    if scored.total < settings.min_pool_size:
        logger.warning("Insufficient pool for %s: %d legs", parlay_date, scored.total)
        raise InsufficientPoolError(scored.total, settings.min_pool_size)

    deduplicator = Deduplicator(history)
    for tier in selected:
        name = tier.name
        result = generate_tier(
            tier,
            scored,
            parlay_date,
            deduplicator,
            weights,
            bankroll=bankroll,
            strategy_name=strategy_name,
            settings=settings,
        )
        summary.tiers[name] = result
        if sink is None or not result.parlays:
            continue
        try:
            sink(name, result.parlays)
        except Exception as exc:
            summary.failed_tier = name
            logger.error("Persisting %s tier failed: %s", name, exc)
            raise PersistenceError(name, summary, exc) from exc
        summary.persisted_tiers.append(name)

    logger.info("Total parlays created for %s: %d", parlay_date, summary.total)
    return summary
