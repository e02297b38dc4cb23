"""Dataclasses for legs, pools and parlays."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Literal, Union

PLAYER = "player"
TEAM = "team"

OVER = "over"
UNDER = "under"


@dataclass(frozen=True)
class AlternateLine:
    line: float
    over_odds: int
    under_odds: int
    bookmaker: str | None = None

    def odds_for(self, side: str) -> int:
        return self.over_odds if side == OVER else self.under_odds


@dataclass(frozen=True)
class SelectedLine:
    """Outcome of line shopping for one player leg."""

    line: float
    odds: int
    reason: str
    original_line: float | None = None
    odds_improvement: int = 0


@dataclass
class PlayerLeg:
    """Player stat over/under proposition."""

    id: str
    player_name: str
    prop_type: str
    line: float
    side: str
    american_odds: int
    hit_rate: float
    category: str
    projected_value: float | None = None
    team_name: str | None = None
    sport: str = "basketball_nba"
    alternate_lines: List[AlternateLine] = field(default_factory=list)
    has_real_line: bool = False
    line_source: str = "projected"
    odds_value_score: float = 0.0
    composite_score: float = 0.0
    kind: Literal["player"] = field(default=PLAYER, init=False)

    @property
    def key(self) -> str:
        return f"{self.player_name}_{self.prop_type}_{self.side}".lower()

    @property
    def sharp_score(self) -> float | None:
        return None

    @property
    def teams(self) -> tuple[str, ...]:
        return (self.team_name,) if self.team_name else ()

    def fingerprint_key(self, line: float | None = None) -> str:
        value = self.line if line is None else line
        return f"{self.player_name}_{self.prop_type}_{self.side}_{value:g}".lower()

    def projection_edge(self, line: float | None = None) -> float:
        """Signed distance between projection and line in the bet's favour."""

        if self.projected_value is None:
            return 0.0
        value = self.line if line is None else line
        edge = self.projected_value - value
        return -edge if self.side == UNDER else edge


@dataclass
class TeamLeg:
    """Team spread, total or moneyline proposition on a single event."""

    id: str
    event_id: str
    home_team: str
    away_team: str
    bet_type: str
    side: str
    line: float
    american_odds: int
    sport: str = "basketball_nba"
    sharp_score: float = 50.0
    category: str = "TEAM_PROP"
    composite_score: float = 0.0
    kind: Literal["team"] = field(default=TEAM, init=False)

    @property
    def key(self) -> str:
        return f"team_{self.event_id}_{self.bet_type}_{self.side}".lower()

    @property
    def hit_rate(self) -> float:
        return self.sharp_score / 100

    @property
    def odds_value_score(self) -> float | None:
        return None

    @property
    def teams(self) -> tuple[str, ...]:
        return (self.home_team, self.away_team)

    def fingerprint_key(self, line: float | None = None) -> str:
        return self.key


Leg = Union[PlayerLeg, TeamLeg]


@dataclass
class ResolvedLeg:
    """A leg as committed to a parlay, with its final line and price."""

    leg: Leg
    line: float
    american_odds: int
    selection: SelectedLine | None = None

    @property
    def kind(self) -> str:
        return self.leg.kind

    @property
    def key(self) -> str:
        return self.leg.key

    @property
    def fingerprint_key(self) -> str:
        return self.leg.fingerprint_key(self.line)

    @property
    def projection_buffer(self) -> float | None:
        if not isinstance(self.leg, PlayerLeg) or self.leg.projected_value is None:
            return None
        return self.leg.projection_edge(self.line)

    def to_record(self) -> dict[str, Any]:
        leg = self.leg
        record: dict[str, Any] = {
            "id": leg.id,
            "type": leg.kind,
            "sport": leg.sport,
            "category": leg.category,
            "side": leg.side,
            "line": self.line,
            "american_odds": self.american_odds,
            "hit_rate": round(leg.hit_rate * 100, 2),
            "composite_score": leg.composite_score,
            "outcome": "pending",
        }
        if isinstance(leg, TeamLeg):
            record.update(
                event_id=leg.event_id,
                home_team=leg.home_team,
                away_team=leg.away_team,
                bet_type=leg.bet_type,
                sharp_score=leg.sharp_score,
            )
        else:
            selection = self.selection
            record.update(
                player_name=leg.player_name,
                team_name=leg.team_name,
                prop_type=leg.prop_type,
                odds_value_score=leg.odds_value_score,
                original_line=leg.line,
                line_selection_reason=selection.reason if selection else "main_line",
                odds_improvement=selection.odds_improvement if selection else 0,
                projected_value=leg.projected_value,
                projection_buffer=self.projection_buffer,
                line_source=leg.line_source,
                has_real_line=leg.has_real_line,
            )
        return record


@dataclass
class Parlay:
    parlay_date: date
    tier: str
    strategy_name: str
    legs: List[ResolvedLeg]
    combined_probability: float
    implied_probability: float
    edge: float
    effective_edge: float
    sharpe: float
    combined_decimal_odds: float
    expected_odds: int
    stake: float
    is_simulated: bool
    selection_rationale: str = ""
    fingerprint: str = ""
    status: str = "pending"

    @property
    def leg_count(self) -> int:
        return len(self.legs)

    def to_record(self) -> dict[str, Any]:
        return {
            "parlay_date": self.parlay_date,
            "tier": self.tier,
            "strategy_name": self.strategy_name,
            "legs": [leg.to_record() for leg in self.legs],
            "leg_count": self.leg_count,
            "combined_probability": self.combined_probability,
            "implied_probability": self.implied_probability,
            "edge": self.edge,
            "simulated_edge": self.effective_edge,
            "simulated_sharpe": self.sharpe,
            "expected_odds": self.expected_odds,
            "simulated_stake": self.stake,
            "is_simulated": self.is_simulated,
            "selection_rationale": self.selection_rationale,
            "fingerprint": self.fingerprint,
            "outcome": self.status,
        }


@dataclass
class CandidatePool:
    player_legs: List[PlayerLeg] = field(default_factory=list)
    team_legs: List[TeamLeg] = field(default_factory=list)
    golden_categories: frozenset[str] = field(default_factory=frozenset)

    @property
    def total(self) -> int:
        return len(self.player_legs) + len(self.team_legs)


@dataclass(frozen=True)
class CategoryWeight:
    category: str
    weight: float = 1.0
    side: str | None = None
    calibrated_hit_rate: float | None = None
    is_blocked: bool = False
    sport: str | None = None


class CategoryWeights:
    """Lookup of learned weights keyed by ``category`` or ``category_side``.

    Later entries override earlier ones for the same key. Side-specific
    entries only answer lookups for that side; the bare category key comes
    from entries without a side.
    """

    def __init__(self, weights: Iterable[CategoryWeight] = ()) -> None:
        self._entries: dict[str, CategoryWeight] = {}
        for entry in weights:
            key = f"{entry.category}_{entry.side}" if entry.side else entry.category
            if entry.is_blocked:
                self._entries.pop(key.upper(), None)
                continue
            self._entries[key.upper()] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, category: str, side: str | None = None) -> CategoryWeight | None:
        if side:
            entry = self._entries.get(f"{category}_{side}".upper())
            if entry is not None:
                return entry
        return self._entries.get(category.upper())

    def weight(self, category: str, side: str | None = None) -> float:
        entry = self.lookup(category, side)
        return entry.weight if entry else 1.0

    def calibrated_hit_rate(self, category: str, side: str | None = None) -> float | None:
        entry = self.lookup(category, side)
        return entry.calibrated_hit_rate if entry else None
