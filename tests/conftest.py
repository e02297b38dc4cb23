"""Shared factories for parlay engine tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from parlaytiers.db.models import Base
from parlaytiers.parlays.types import CandidatePool, PlayerLeg, ResolvedLeg, TeamLeg

NBA = "basketball_nba"
NHL = "icehockey_nhl"
CATEGORIES = ("POINTS", "REBOUNDS", "ASSISTS", "THREES")
PROP_TYPES = {
    "POINTS": "player_points",
    "REBOUNDS": "player_rebounds",
    "ASSISTS": "player_assists",
    "THREES": "player_threes",
}


def make_player_leg(
    idx: int,
    *,
    category: str = "POINTS",
    sport: str = NBA,
    hit_rate: float = 0.6,
    odds: int = -110,
    line: float = 20.5,
    projected: float | None = 26.0,
    side: str = "over",
    team: str | None = None,
    composite: float = 0.0,
) -> PlayerLeg:
    return PlayerLeg(
        id=f"p{idx}",
        player_name=f"Player {idx}",
        prop_type=PROP_TYPES.get(category, category.lower()),
        line=line,
        side=side,
        american_odds=odds,
        hit_rate=hit_rate,
        category=category,
        projected_value=projected,
        team_name=team,
        sport=sport,
        odds_value_score=80.0,
        composite_score=composite,
    )


def make_team_leg(
    event: int,
    *,
    bet_type: str = "spread",
    side: str = "home",
    line: float = -3.5,
    odds: int = -110,
    sharp: float = 60.0,
    sport: str = NBA,
) -> TeamLeg:
    return TeamLeg(
        id=f"e{event}_{bet_type}_{side}",
        event_id=f"e{event}",
        home_team=f"Home {event}",
        away_team=f"Away {event}",
        bet_type=bet_type,
        side=side,
        line=line,
        american_odds=odds,
        sport=sport,
        sharp_score=sharp,
    )


def resolve(leg: PlayerLeg | TeamLeg) -> ResolvedLeg:
    return ResolvedLeg(leg=leg, line=leg.line, american_odds=leg.american_odds)


def make_pool(player_count: int = 24, team_events: int = 0, golden: frozenset[str] = frozenset()) -> CandidatePool:
    players = [
        make_player_leg(idx, category=CATEGORIES[idx % len(CATEGORIES)]) for idx in range(player_count)
    ]
    teams: list[TeamLeg] = []
    for event in range(team_events):
        teams.append(make_team_leg(event, bet_type="spread", side="home", line=-3.5))
        teams.append(make_team_leg(event, bet_type="total", side="over", line=221.5))
    return CandidatePool(player_legs=players, team_legs=teams, golden_categories=golden)


def pool_payload(player_count: int = 24) -> dict[str, Any]:
    rows = []
    for idx in range(player_count):
        category = CATEGORIES[idx % len(CATEGORIES)]
        rows.append(
            {
                "id": f"p{idx}",
                "player_name": f"Player {idx}",
                "prop_type": PROP_TYPES[category],
                "line": 20.5,
                "recommended_side": "over",
                "american_odds": -110,
                "hit_rate": 60,
                "projected_value": 26.0,
            }
        )
    return {"date": "2026-03-01", "player_legs": rows}


@pytest.fixture
def pool_file(tmp_path: Path) -> Callable[..., Path]:
    def _write(payload: dict[str, Any] | None = None) -> Path:
        path = tmp_path / "pool.json"
        path.write_text(json.dumps(payload or pool_payload()), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker:
    engine = create_engine(f"sqlite:///{tmp_path / 'parlays.db'}")
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)
