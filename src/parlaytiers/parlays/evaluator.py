"""Aggregate parlay metrics and tier acceptance gates."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from parlaytiers.parlays.odds import american_to_implied, combine_decimal_odds, decimal_to_american
from parlaytiers.parlays.tiers import PLAYER_MIX, ProfileTemplate, TierConfig
from parlaytiers.parlays.types import PLAYER, ResolvedLeg

POSITIVE_COMPOSITE_SIGNAL = 50
POSITIVE_SHARP_SIGNAL = 55


@dataclass(frozen=True)
class ParlayMetrics:
    combined_probability: float
    implied_probability: float
    edge: float
    effective_edge: float
    sharpe: float
    combined_decimal_odds: float
    expected_odds: int


@dataclass(frozen=True)
class Evaluation:
    metrics: ParlayMetrics
    rejection: str | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


def combined_probability(legs: Iterable[ResolvedLeg]) -> float:
    # Legs are treated as independent; correlated same-game legs are overstated.
    prob = 1.0
    for resolved in legs:
        prob *= resolved.leg.hit_rate
    return prob


def implied_probability(legs: Iterable[ResolvedLeg]) -> float:
    prob = 1.0
    for resolved in legs:
        prob *= american_to_implied(resolved.american_odds)
    return prob


def has_positive_signal(legs: Iterable[ResolvedLeg]) -> bool:
    return any(
        resolved.leg.composite_score > POSITIVE_COMPOSITE_SIGNAL
        or (resolved.leg.sharp_score or 0) > POSITIVE_SHARP_SIGNAL
        for resolved in legs
    )


def sharpe_ratio(edge: float, leg_count: int) -> float:
    return edge / (0.5 * math.sqrt(leg_count))


def compute_metrics(
    legs: Sequence[ResolvedLeg],
    edge_floor: float = 0.005,
    max_expected_odds: int = 10000,
) -> ParlayMetrics:
    combined = combined_probability(legs)
    implied = implied_probability(legs)
    edge = combined - implied
    effective_edge = max(edge, edge_floor) if has_positive_signal(legs) else edge
    decimal = combine_decimal_odds(resolved.american_odds for resolved in legs)
    return ParlayMetrics(
        combined_probability=combined,
        implied_probability=implied,
        edge=edge,
        effective_edge=effective_edge,
        sharpe=sharpe_ratio(effective_edge, len(legs)),
        combined_decimal_odds=decimal,
        expected_odds=min(decimal_to_american(decimal), max_expected_odds),
    )


def kelly_stake(
    win_probability: float,
    decimal_odds: float,
    bankroll: float,
    max_risk: float = 0.03,
) -> float:
    """Half-Kelly stake capped at ``max_risk`` of the bankroll."""

    b = decimal_odds - 1
    if b <= 0:
        return 0.0
    kelly = (b * win_probability - (1 - win_probability)) / b
    half_kelly = max(0.0, kelly / 2)
    return round(min(half_kelly, max_risk) * bankroll, 2)


class ParlayEvaluator:
    """Compute aggregate metrics for a draft and apply the tier's gates."""

    def __init__(
        self,
        tier: TierConfig,
        golden_categories: Iterable[str] = (),
        *,
        min_combined_probability: float = 0.001,
        edge_floor: float = 0.005,
        max_expected_odds: int = 10000,
    ) -> None:
        self.tier = tier
        self.golden_categories = frozenset(category.upper() for category in golden_categories)
        self.min_combined_probability = min_combined_probability
        self.edge_floor = edge_floor
        self.max_expected_odds = max_expected_odds

    def _golden_rejection(self, profile: ProfileTemplate, legs: Sequence[ResolvedLeg]) -> str | None:
        if not self.tier.top_tier or not self.golden_categories or profile.kind != PLAYER_MIX:
            return None
        player_legs = [resolved for resolved in legs if resolved.kind == PLAYER]
        golden = sum(1 for resolved in player_legs if resolved.leg.category.upper() in self.golden_categories)
        if golden < len(player_legs) - 1:
            return "golden_category"
        return None

    @staticmethod
    def _cross_sport_rejection(profile: ProfileTemplate, legs: Sequence[ResolvedLeg]) -> str | None:
        named = profile.named_sports
        if len(named) < 2:
            return None
        present = {resolved.leg.sport for resolved in legs}
        if not all(sport in present for sport in named):
            return "cross_sport"
        return None

    def evaluate(self, profile: ProfileTemplate, legs: Sequence[ResolvedLeg]) -> Evaluation:
        metrics = compute_metrics(legs, self.edge_floor, self.max_expected_odds)
        if metrics.combined_probability < self.min_combined_probability:
            return Evaluation(metrics, "combined_probability")
        if metrics.effective_edge < self.tier.min_edge_for(profile):
            return Evaluation(metrics, "edge")
        if metrics.sharpe < self.tier.min_sharpe:
            return Evaluation(metrics, "sharpe")
        reason = self._golden_rejection(profile, legs) or self._cross_sport_rejection(profile, legs)
        return Evaluation(metrics, reason)

    def stake(self, metrics: ParlayMetrics, bankroll: float, max_risk: float = 0.03) -> float:
        if self.tier.stake == "kelly":
            return kelly_stake(metrics.combined_probability, metrics.combined_decimal_odds, bankroll, max_risk)
        return float(self.tier.stake)
