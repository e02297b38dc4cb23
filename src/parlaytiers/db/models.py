"""ORM models for generated parlays and learned category weights."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base declarative class."""


class GeneratedParlay(Base):
    """A parlay accepted by one tier run."""

    __tablename__ = "generated_parlays"
    __table_args__ = (UniqueConstraint("parlay_date", "fingerprint", name="uq_parlay_fingerprint"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parlay_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    tier: Mapped[str] = mapped_column(String(32), nullable=False)
    strategy_name: Mapped[str] = mapped_column(String(128), nullable=False)
    fingerprint: Mapped[str] = mapped_column(String(2048), nullable=False)
    legs: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    leg_count: Mapped[int] = mapped_column(Integer, nullable=False)
    combined_probability: Mapped[float] = mapped_column(Float, nullable=False)
    implied_probability: Mapped[float] = mapped_column(Float, nullable=False)
    edge: Mapped[float] = mapped_column(Float, nullable=False)
    simulated_edge: Mapped[float] = mapped_column(Float, nullable=False)
    simulated_sharpe: Mapped[float] = mapped_column(Float, nullable=False)
    expected_odds: Mapped[int] = mapped_column(Integer, nullable=False)
    simulated_stake: Mapped[float] = mapped_column(Float, default=0.0)
    is_simulated: Mapped[bool] = mapped_column(Boolean, default=True)
    selection_rationale: Mapped[str | None] = mapped_column(String(512))
    outcome: Mapped[str] = mapped_column(String(32), default="pending")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class CategoryWeightRow(Base):
    """Weight and calibrated hit rate maintained by the feedback loop."""

    __tablename__ = "category_weights"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    side: Mapped[str | None] = mapped_column(String(16))
    sport: Mapped[str | None] = mapped_column(String(64))
    weight: Mapped[float] = mapped_column(Float, default=1.0)
    current_hit_rate: Mapped[float | None] = mapped_column(Float)
    is_blocked: Mapped[bool] = mapped_column(Boolean, default=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
