"""Static tier and profile configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

TierName = Literal["exploration", "validation", "execution"]
TIER_ORDER: tuple[TierName, ...] = ("exploration", "validation", "execution")

PLAYER_MIX = "player"
TEAM_MIX = "team"
HYBRID_MIX = "hybrid"

SORT_COMPOSITE = "composite"
SORT_HIT_RATE = "hit_rate"
SORT_CATEGORY_WEIGHT = "category_weight"

ALL_SPORTS = "all"
DEFAULT_MIN_ODDS_VALUE = 35.0
TEAM_EDGE_MULTIPLIER = 1.5

Stake = Union[float, Literal["kelly"]]


@dataclass(frozen=True)
class ProfileTemplate:
    legs: int
    strategy: str
    sports: tuple[str, ...] = (ALL_SPORTS,)
    bet_types: tuple[str, ...] = ()
    mix: str | None = None
    sort_mode: str = SORT_COMPOSITE
    min_odds_value: float | None = None
    min_hit_rate: float | None = None
    use_alt_lines: bool = False
    min_buffer_multiplier: float = 1.0
    prefer_plus_money: bool = False

    @property
    def kind(self) -> str:
        if self.mix:
            return self.mix
        return TEAM_MIX if self.bet_types else PLAYER_MIX

    @property
    def named_sports(self) -> tuple[str, ...]:
        return tuple(sport for sport in self.sports if sport != ALL_SPORTS)

    def allows_sport(self, sport: str) -> bool:
        return ALL_SPORTS in self.sports or sport in self.sports

    def allows_bet_type(self, bet_type: str) -> bool:
        return not self.bet_types or bet_type in self.bet_types


@dataclass(frozen=True)
class TierConfig:
    name: TierName
    count: int
    max_player_usage: int
    max_team_usage: int
    max_category_usage: int
    min_hit_rate: float
    min_edge: float
    min_sharpe: float
    min_confidence: float
    stake: Stake
    top_tier: bool = False
    profiles: tuple[ProfileTemplate, ...] = field(default_factory=tuple)

    @property
    def is_simulated(self) -> bool:
        return not self.top_tier

    def min_edge_for(self, profile: ProfileTemplate) -> float:
        if profile.kind in (TEAM_MIX, HYBRID_MIX):
            return self.min_edge * TEAM_EDGE_MULTIPLIER
        return self.min_edge

    def hit_rate_floor(self, profile: ProfileTemplate) -> float:
        return profile.min_hit_rate or max(self.min_hit_rate, self.min_confidence * 100)

    def odds_value_floor(self, profile: ProfileTemplate) -> float:
        return profile.min_odds_value or DEFAULT_MIN_ODDS_VALUE


NBA = "basketball_nba"
NHL = "icehockey_nhl"
ATP = "tennis_atp"
WTA = "tennis_wta"

P = ProfileTemplate


def _repeat(profile: ProfileTemplate, times: int) -> tuple[ProfileTemplate, ...]:
    return (profile,) * times


EXPLORATION = TierConfig(
    name="exploration",
    count=50,
    max_player_usage=5,
    max_team_usage=3,
    max_category_usage=4,
    min_hit_rate=45,
    min_edge=0.003,
    min_sharpe=0.01,
    min_confidence=0.45,
    stake=0.0,
    profiles=(
        *_repeat(P(3, "explore_safe", sports=(NBA,)), 2),
        P(3, "explore_safe", sports=(NHL,)),
        *_repeat(P(3, "explore_mixed", sports=(NBA, NHL)), 2),
        *_repeat(P(4, "explore_balanced", sports=(NBA,)), 2),
        P(4, "explore_balanced", sports=(NHL,)),
        *_repeat(P(4, "explore_mixed"), 2),
        P(5, "explore_aggressive", sports=(NBA,)),
        *_repeat(P(5, "explore_aggressive"), 2),
        *_repeat(P(6, "explore_longshot"), 2),
        *_repeat(P(3, "team_spreads", bet_types=("spread",)), 2),
        *_repeat(P(3, "team_totals", bet_types=("total",)), 2),
        *_repeat(P(4, "team_mixed", bet_types=("spread", "total")), 2),
        P(4, "team_mixed", bet_types=("spread", "total", "moneyline")),
        *_repeat(P(3, "team_ml", bet_types=("moneyline",)), 2),
        P(4, "team_all", bet_types=("spread", "total", "moneyline")),
        *_repeat(P(4, "hybrid_mixed", bet_types=("spread", "total"), mix=HYBRID_MIX), 2),
        P(5, "hybrid_mixed", bet_types=("spread", "total", "moneyline"), mix=HYBRID_MIX),
        *_repeat(P(3, "cross_sport", sports=(NBA, NHL)), 3),
        *_repeat(P(4, "cross_sport_4"), 4),
        *_repeat(P(5, "cross_sport_5"), 3),
        *_repeat(P(3, "tennis_focus", sports=(ATP, WTA)), 2),
        *_repeat(P(4, "nhl_focus", sports=(NHL,)), 3),
        *_repeat(P(5, "max_diversity"), 3),
        *_repeat(P(6, "max_diversity"), 2),
        P(3, "props_only", sports=(NBA,)),
        P(3, "props_only", sports=(NHL,)),
        P(4, "props_mixed", sports=(NBA, NHL)),
        P(4, "props_mixed"),
        P(5, "props_mixed"),
    ),
)

VALIDATION = TierConfig(
    name="validation",
    count=15,
    max_player_usage=4,
    max_team_usage=2,
    max_category_usage=3,
    min_hit_rate=52,
    min_edge=0.008,
    min_sharpe=0.02,
    min_confidence=0.52,
    stake=50.0,
    profiles=(
        *_repeat(
            P(3, "validated_conservative", sports=(NBA,), sort_mode=SORT_HIT_RATE,
              min_odds_value=45, min_hit_rate=55),
            2,
        ),
        P(3, "validated_conservative", sports=(NHL,), sort_mode=SORT_HIT_RATE,
          min_odds_value=45, min_hit_rate=55),
        *_repeat(P(4, "validated_balanced", sports=(NBA,), min_odds_value=42, min_hit_rate=55), 2),
        P(4, "validated_balanced", sports=(NBA, NHL), min_odds_value=42, min_hit_rate=55),
        P(5, "validated_standard", sports=(NBA,), min_odds_value=40, min_hit_rate=52),
        P(5, "validated_standard", min_odds_value=40, min_hit_rate=52),
        P(5, "validated_standard_alt", min_odds_value=40, min_hit_rate=52, use_alt_lines=True),
        *_repeat(
            P(3, "validated_team", bet_types=("spread", "total"), min_odds_value=45, min_hit_rate=55),
            2,
        ),
        P(4, "validated_team", bet_types=("spread", "total"), min_odds_value=42, min_hit_rate=52),
        P(4, "validated_hybrid", bet_types=("spread", "total"), mix=HYBRID_MIX,
          min_odds_value=42, min_hit_rate=52),
        *_repeat(P(4, "validated_cross", min_odds_value=42, min_hit_rate=52), 2),
        P(5, "validated_aggressive", min_odds_value=40, min_hit_rate=50, use_alt_lines=True),
    ),
)

EXECUTION = TierConfig(
    name="execution",
    count=8,
    max_player_usage=3,
    max_team_usage=2,
    max_category_usage=2,
    min_hit_rate=55,
    min_edge=0.012,
    min_sharpe=0.03,
    min_confidence=0.55,
    stake="kelly",
    top_tier=True,
    profiles=(
        *_repeat(
            P(3, "elite_conservative", sports=(NBA,), sort_mode=SORT_CATEGORY_WEIGHT,
              min_odds_value=50, min_hit_rate=56),
            2,
        ),
        P(4, "elite_balanced", sports=(NBA,), min_odds_value=45, min_hit_rate=55),
        P(4, "elite_balanced", sports=(NBA, NHL), min_odds_value=45, min_hit_rate=55),
        P(5, "elite_standard_alt", sports=(NBA,), min_odds_value=42, min_hit_rate=55,
          use_alt_lines=True, min_buffer_multiplier=1.5),
        P(5, "elite_standard_alt", min_odds_value=42, min_hit_rate=55,
          use_alt_lines=True, min_buffer_multiplier=1.5),
        P(6, "elite_aggressive", sports=(NBA,), min_odds_value=40, min_hit_rate=52,
          use_alt_lines=True, prefer_plus_money=True),
        P(6, "elite_aggressive", min_odds_value=40, min_hit_rate=52,
          use_alt_lines=True, prefer_plus_money=True),
    ),
)

TIER_POLICY: dict[str, TierConfig] = {
    tier.name: tier for tier in (EXPLORATION, VALIDATION, EXECUTION)
}


def get_tier(name: str) -> TierConfig:
    try:
        return TIER_POLICY[name]
    except KeyError as exc:
        raise ValueError(f"Unknown tier {name!r}; expected one of {', '.join(TIER_ORDER)}") from exc
