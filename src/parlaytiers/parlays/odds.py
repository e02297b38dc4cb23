"""American/decimal odds conversions."""

from __future__ import annotations

from collections.abc import Iterable


def is_valid_american(odds: int | None) -> bool:
    """American prices live at or beyond +/-100; anything between is not a price."""

    return odds is not None and (odds >= 100 or odds <= -100)


def _require_valid(odds: int) -> None:
    if not is_valid_american(odds):
        raise ValueError(f"Invalid American odds: {odds}")


def american_to_implied(odds: int) -> float:
    """Convert American odds into the break-even (implied) probability."""

    _require_valid(odds)
    if odds > 0:
        return 100 / (odds + 100)
    return -odds / (-odds + 100)


def american_to_decimal(odds: int) -> float:
    _require_valid(odds)
    return 1 + (odds / 100) if odds > 0 else 1 + (100 / abs(odds))


def decimal_to_american(decimal_odds: float) -> int:
    """Convert decimal odds back to American odds, rounded to whole points."""

    if decimal_odds <= 1.0:
        raise ValueError(f"Decimal odds must exceed 1.0, got {decimal_odds}")
    if decimal_odds >= 2.0:
        return int(round((decimal_odds - 1.0) * 100))
    return int(round(-100 / (decimal_odds - 1.0)))


def combine_decimal_odds(american_odds: Iterable[int]) -> float:
    decimal = 1.0
    for odds in american_odds:
        decimal *= american_to_decimal(odds)
    return decimal
