"""Composite quality scoring for candidate legs."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from parlaytiers.errors import MalformedLegError
from parlaytiers.parlays.odds import american_to_implied, is_valid_american
from parlaytiers.parlays.types import (
    CandidatePool,
    CategoryWeights,
    Leg,
    PlayerLeg,
    TeamLeg,
)

logger = logging.getLogger(__name__)

JUICE_BREAKEVEN = 0.524
MIN_PLAYER_ODDS = -200
MAX_PLAYER_ODDS = 200
WEIGHT_SCALE = 66.67

PROP_TYPE_CATEGORIES = {
    "player_points": "POINTS",
    "player_rebounds": "REBOUNDS",
    "player_assists": "ASSISTS",
    "player_threes": "THREES",
    "player_blocks": "BLOCKS",
    "player_steals": "STEALS",
    "player_goals": "NHL_GOALS",
    "player_shots_on_goal": "NHL_SHOTS",
    "player_saves": "NHL_SAVES",
    "player_pass_yds": "NFL_PASS_YDS",
    "player_rush_yds": "NFL_RUSH_YDS",
    "player_reception_yds": "NFL_REC_YDS",
    "player_receptions": "NFL_RECEPTIONS",
}

TEAM_BET_CATEGORIES = {
    "spread": {"home": "SHARP_SPREAD", "away": "SHARP_SPREAD"},
    "total": {"over": "OVER_TOTAL", "under": "UNDER_TOTAL"},
    "moneyline": {"home": "ML_FAVORITE", "away": "ML_UNDERDOG"},
}


@dataclass(frozen=True)
class ScoringRule:
    """Named predicate with the contribution it makes when it matches."""

    name: str
    applies: Callable[[float], bool]
    value: float


# Evaluated in order; the first matching rule wins.
CALIBRATION_RULES: tuple[ScoringRule, ...] = (
    ScoringRule("elite_category", lambda hit_rate: hit_rate >= 65, 1.5),
    ScoringRule("strong_category", lambda hit_rate: hit_rate >= 55, 1.2),
    ScoringRule("weak_category", lambda hit_rate: hit_rate < 45, 0.5),
)


@dataclass(frozen=True)
class TeamScoringRule:
    name: str
    applies: Callable[[TeamLeg], bool]
    bonus: float


TEAM_SCORING_RULES: tuple[TeamScoringRule, ...] = (
    TeamScoringRule("sharp_spread", lambda leg: leg.bet_type == "spread", 20),
    TeamScoringRule("sharp_moneyline", lambda leg: leg.bet_type == "moneyline", 20),
    TeamScoringRule("sharp_total", lambda leg: leg.bet_type == "total", 15),
)


def category_for_prop_type(prop_type: str) -> str:
    return PROP_TYPE_CATEGORIES.get(prop_type, prop_type.upper())


def category_for_team_bet(bet_type: str, side: str) -> str:
    return TEAM_BET_CATEGORIES.get(bet_type, {}).get(side, "TEAM_PROP")


def odds_value_score(american_odds: int, estimated_hit_rate: float) -> float:
    """Score a price against the estimated hit rate on a 0-100 scale.

    Prices heavier than the standard -110 break-even are penalised, plus-side
    prices earn a smaller bonus, and the raw edge contribution is capped at 40.
    """

    implied = american_to_implied(american_odds)
    edge = estimated_hit_rate - implied
    juice_penalty = max(0.0, implied - JUICE_BREAKEVEN) * 100
    juice_bonus = max(0.0, JUICE_BREAKEVEN - implied) * 80
    edge_score = min(40.0, edge * 400)
    score = 50 + edge_score - juice_penalty + juice_bonus
    return max(0.0, min(100.0, score))


def calibration_rule(calibrated_hit_rate: float | None) -> ScoringRule | None:
    """Return the calibration rule matching a category hit rate, if any.

    Accepts either a fraction (0.62) or a percentage (62).
    """

    if calibrated_hit_rate is None:
        return None
    percent = calibrated_hit_rate * 100 if calibrated_hit_rate <= 1 else calibrated_hit_rate
    for rule in CALIBRATION_RULES:
        if rule.applies(percent):
            return rule
    return None


def calibration_multiplier(calibrated_hit_rate: float | None) -> float:
    rule = calibration_rule(calibrated_hit_rate)
    return rule.value if rule else 1.0


def composite_score(
    hit_rate_percent: float,
    edge: float,
    odds_value: float,
    category_weight: float,
    calibrated_hit_rate: float | None = None,
) -> float:
    """Blend hit rate, edge, price value and category weight into one score."""

    hit_rate_part = min(100.0, hit_rate_percent)
    edge_part = min(100.0, max(0.0, edge * 20 + 50))
    weight_part = category_weight * WEIGHT_SCALE
    blended = (
        hit_rate_part * 0.30
        + edge_part * 0.25
        + odds_value * 0.25
        + weight_part * 0.20
    )
    return round(blended * calibration_multiplier(calibrated_hit_rate))


def _validate(leg: Leg) -> None:
    if leg.american_odds is None or leg.american_odds == 0:
        raise MalformedLegError(leg.id, "missing price")
    if not is_valid_american(leg.american_odds):
        raise MalformedLegError(leg.id, f"invalid price {leg.american_odds}")
    if leg.line is None:
        raise MalformedLegError(leg.id, "missing line")


def score_player_leg(leg: PlayerLeg, weights: CategoryWeights) -> PlayerLeg:
    _validate(leg)
    weight = weights.weight(leg.category, leg.side)
    calibrated = weights.calibrated_hit_rate(leg.category, leg.side)
    leg.odds_value_score = odds_value_score(leg.american_odds, leg.hit_rate)
    leg.composite_score = composite_score(
        leg.hit_rate * 100,
        leg.projection_edge(),
        leg.odds_value_score,
        weight,
        calibrated,
    )
    return leg


def score_team_leg(leg: TeamLeg) -> TeamLeg:
    _validate(leg)
    if not leg.category or leg.category == "TEAM_PROP":
        leg.category = category_for_team_bet(leg.bet_type, leg.side)
    bonus = next((rule.bonus for rule in TEAM_SCORING_RULES if rule.applies(leg)), 0.0)
    leg.composite_score = min(100.0, leg.sharp_score + bonus)
    return leg


def interleave_by_category(legs: list[PlayerLeg]) -> list[PlayerLeg]:
    """Round-robin legs across categories, strongest category first.

    Input must already be sorted by composite score.
    """

    groups: dict[str, list[PlayerLeg]] = {}
    for leg in legs:
        groups.setdefault(leg.category, []).append(leg)
    ordered = sorted(groups.values(), key=lambda group: group[0].composite_score, reverse=True)
    result: list[PlayerLeg] = []
    depth = max((len(group) for group in ordered), default=0)
    for idx in range(depth):
        for group in ordered:
            if idx < len(group):
                result.append(group[idx])
    return result


def _score_all(legs: Iterable[Leg], scorer: Callable[[Leg], Leg]) -> list:
    scored = []
    for leg in legs:
        try:
            scored.append(scorer(leg))
        except MalformedLegError as exc:
            logger.warning("Skipping leg: %s", exc)
    return scored


def score_pool(pool: CandidatePool, weights: CategoryWeights | None = None) -> CandidatePool:
    """Annotate every leg with its scores and return the re-ranked pool."""

    weights = weights or CategoryWeights()
    players = _score_all(pool.player_legs, lambda leg: score_player_leg(leg, weights))
    priced = [
        leg
        for leg in players
        if MIN_PLAYER_ODDS <= leg.american_odds <= MAX_PLAYER_ODDS and leg.line > 0
    ]
    if len(priced) < len(players):
        logger.info("Dropped %d player legs outside price/line bounds", len(players) - len(priced))
    priced.sort(key=lambda leg: leg.composite_score, reverse=True)

    teams = _score_all(pool.team_legs, score_team_leg)
    teams.sort(key=lambda leg: leg.composite_score, reverse=True)

    logger.info("Scored pool: %d player legs, %d team legs", len(priced), len(teams))
    return CandidatePool(
        player_legs=interleave_by_category(priced),
        team_legs=teams,
        golden_categories=pool.golden_categories,
    )
