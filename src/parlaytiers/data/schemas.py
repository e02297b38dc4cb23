"""Pydantic schemas for candidate pool payloads."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from parlaytiers.errors import MalformedLegError
from parlaytiers.parlays.odds import is_valid_american
from parlaytiers.parlays.scoring import category_for_prop_type
from parlaytiers.parlays.types import AlternateLine, CategoryWeight, PlayerLeg, TeamLeg


def _as_fraction(value: float) -> float:
    return value / 100 if value > 1 else value


class AlternateLineSchema(BaseModel):
    line: float
    over_odds: int
    under_odds: int
    bookmaker: str | None = None

    @field_validator("over_odds", "under_odds")
    @classmethod
    def check_price(cls, value: int) -> int:
        if not is_valid_american(value):
            raise ValueError(f"invalid American odds {value}")
        return value

    def to_alternate(self) -> AlternateLine:
        return AlternateLine(self.line, self.over_odds, self.under_odds, self.bookmaker)


class PlayerLegSchema(BaseModel):
    id: str
    player_name: str
    prop_type: str
    line: float | None = None
    side: str = Field(default="over", validation_alias="recommended_side")
    american_odds: int | None = None
    hit_rate: float | None = Field(default=None, description="fraction or percent")
    confidence_score: float | None = None
    category: str | None = None
    projected_value: float | None = None
    team_name: str | None = None
    sport: str = "basketball_nba"
    alternate_lines: list[AlternateLineSchema] = Field(default_factory=list)
    has_real_line: bool = False
    line_source: str = "projected"

    model_config = ConfigDict(populate_by_name=True)

    def to_leg(self) -> PlayerLeg:
        if self.american_odds is None:
            raise MalformedLegError(self.id, "missing price")
        if self.line is None:
            raise MalformedLegError(self.id, "missing line")
        hit_rate = self.hit_rate or self.confidence_score or 0.5
        return PlayerLeg(
            id=self.id,
            player_name=self.player_name,
            prop_type=self.prop_type,
            line=self.line,
            side=self.side.lower(),
            american_odds=self.american_odds,
            hit_rate=_as_fraction(hit_rate),
            category=self.category or category_for_prop_type(self.prop_type),
            projected_value=self.projected_value,
            team_name=self.team_name,
            sport=self.sport,
            alternate_lines=[alt.to_alternate() for alt in self.alternate_lines],
            has_real_line=self.has_real_line,
            line_source=self.line_source,
        )


class TeamLegSchema(BaseModel):
    id: str
    event_id: str
    home_team: str
    away_team: str
    bet_type: str
    side: str
    line: float | None = None
    american_odds: int | None = None
    sport: str = "basketball_nba"
    sharp_score: float = 50.0
    category: str = "TEAM_PROP"

    def to_leg(self) -> TeamLeg:
        if self.american_odds is None:
            raise MalformedLegError(self.id, "missing price")
        if self.line is None and self.bet_type != "moneyline":
            raise MalformedLegError(self.id, "missing line")
        return TeamLeg(
            id=self.id,
            event_id=self.event_id,
            home_team=self.home_team,
            away_team=self.away_team,
            bet_type=self.bet_type.lower(),
            side=self.side.lower(),
            line=self.line or 0.0,
            american_odds=self.american_odds,
            sport=self.sport,
            sharp_score=self.sharp_score,
            category=self.category,
        )


class TeamEventSchema(BaseModel):
    """One game row carrying spread, total and moneyline prices."""

    id: str
    home_team: str
    away_team: str
    sport: str = "basketball_nba"
    line: float | None = None
    total_line: float | None = None
    home_odds: int | None = None
    away_odds: int | None = None
    over_odds: int | None = None
    under_odds: int | None = None
    home_ml_odds: int | None = None
    away_ml_odds: int | None = None
    sharp_score: float | None = None

    def _leg(self, bet_type: str, side: str, line: float, odds: int) -> TeamLeg:
        return TeamLeg(
            id=f"{self.id}_{bet_type}_{side}",
            event_id=self.id,
            home_team=self.home_team,
            away_team=self.away_team,
            bet_type=bet_type,
            side=side,
            line=line,
            american_odds=odds,
            sport=self.sport,
            sharp_score=self.sharp_score or 50.0,
        )

    def to_legs(self) -> list[TeamLeg]:
        legs: list[TeamLeg] = []
        if self.line is not None:
            if self.home_odds:
                legs.append(self._leg("spread", "home", self.line, self.home_odds))
            if self.away_odds:
                legs.append(self._leg("spread", "away", -self.line, self.away_odds))
        if self.over_odds and self.under_odds:
            total = self.total_line if self.total_line is not None else (self.line or 0.0)
            legs.append(self._leg("total", "over", total, self.over_odds))
            legs.append(self._leg("total", "under", total, self.under_odds))
        if self.home_ml_odds:
            legs.append(self._leg("moneyline", "home", 0.0, self.home_ml_odds))
        if self.away_ml_odds:
            legs.append(self._leg("moneyline", "away", 0.0, self.away_ml_odds))
        return legs


class CategoryWeightSchema(BaseModel):
    category: str
    side: str | None = None
    weight: float = 1.0
    current_hit_rate: float | None = Field(default=None, description="fraction or percent")
    is_blocked: bool = False
    sport: str | None = None

    def to_weight(self) -> CategoryWeight:
        calibrated = None if self.current_hit_rate is None else _as_fraction(self.current_hit_rate)
        return CategoryWeight(
            category=self.category,
            side=self.side,
            weight=self.weight,
            calibrated_hit_rate=calibrated,
            is_blocked=self.is_blocked,
            sport=self.sport,
        )


class CandidatePoolSchema(BaseModel):
    """Raw pool file; individual legs are validated one by one."""

    slate_date: date | None = Field(default=None, validation_alias="date")
    player_legs: list[dict[str, Any]] = Field(default_factory=list)
    team_legs: list[dict[str, Any]] = Field(default_factory=list)
    team_events: list[dict[str, Any]] = Field(default_factory=list)
    golden_categories: list[str] = Field(default_factory=list)
    category_weights: list[CategoryWeightSchema] = Field(default_factory=list)
