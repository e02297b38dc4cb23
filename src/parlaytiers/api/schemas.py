"""Pydantic schemas for the parlay API."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParlayResponse(BaseModel):
    id: int
    parlay_date: date
    tier: str
    strategy_name: str
    legs: list[dict[str, Any]]
    leg_count: int
    combined_probability: float
    implied_probability: float
    edge: float
    simulated_edge: float
    simulated_sharpe: float
    expected_odds: int
    simulated_stake: float
    is_simulated: bool
    outcome: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GenerateRequest(BaseModel):
    pool_path: str
    target_date: date | None = None
    tiers: list[str] | None = Field(default=None, description="exploration, validation, execution")


class TierSummary(BaseModel):
    count: int
    drafts: int
    duplicates: int
    leg_distribution: dict[int, int]
    rejections: dict[str, int]


class GenerateResponse(BaseModel):
    success: bool = True
    parlay_date: date
    parlays_generated: int
    pool_size: int
    player_legs: int
    team_legs: int
    tiers: dict[str, TierSummary]
    persisted_tiers: list[str]
    failed_tier: str | None = None
