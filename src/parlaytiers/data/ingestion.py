"""Candidate pool loading for the parlay engine."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from parlaytiers.data.schemas import (
    CandidatePoolSchema,
    PlayerLegSchema,
    TeamEventSchema,
    TeamLegSchema,
)
from parlaytiers.errors import MalformedLegError
from parlaytiers.parlays.types import CandidatePool, CategoryWeight, PlayerLeg, TeamLeg

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _parse_rows(
    rows: Iterable[dict[str, Any]],
    schema: type[SchemaT],
    convert: Callable[[SchemaT], Any],
) -> list:
    parsed: list = []
    for idx, row in enumerate(rows):
        try:
            result = convert(schema.model_validate(row))
        except (ValidationError, MalformedLegError) as exc:
            logger.warning("Skipping %s row %d (%s): %s", schema.__name__, idx, row.get("id"), exc)
            continue
        if isinstance(result, list):
            parsed.extend(result)
        else:
            parsed.append(result)
    return parsed


def build_pool(payload: CandidatePoolSchema) -> CandidatePool:
    """Convert a validated payload into legs, skipping malformed rows."""

    player_legs: list[PlayerLeg] = _parse_rows(
        payload.player_legs, PlayerLegSchema, lambda schema: schema.to_leg()
    )
    team_legs: list[TeamLeg] = _parse_rows(
        payload.team_legs, TeamLegSchema, lambda schema: schema.to_leg()
    )
    team_legs.extend(
        _parse_rows(payload.team_events, TeamEventSchema, lambda schema: schema.to_legs())
    )
    logger.info(
        "Loaded pool: %d player legs, %d team legs, %d golden categories",
        len(player_legs),
        len(team_legs),
        len(payload.golden_categories),
    )
    return CandidatePool(
        player_legs=player_legs,
        team_legs=team_legs,
        golden_categories=frozenset(payload.golden_categories),
    )


def read_pool_payload(path: Path | str) -> CandidatePoolSchema:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return CandidatePoolSchema.model_validate(data)


def pool_weights(payload: CandidatePoolSchema) -> list[CategoryWeight]:
    """Category weights bundled in a pool file, if any."""

    return [schema.to_weight() for schema in payload.category_weights]
