"""Same-event contradiction checks within a single parlay."""

from __future__ import annotations

from collections.abc import Iterable

from parlaytiers.parlays.types import Leg, TeamLeg

DUPLICATE_LEG = "duplicate_leg"
SAME_EVENT_BET_TYPE = "same_event_bet_type"


def conflict_reason(leg: Leg, draft: Iterable[Leg]) -> str | None:
    """Return why ``leg`` cannot join ``draft``, or ``None`` if it can.

    Two team legs from one event may not share a bet type, whichever sides
    they take: no stacking two spreads or two totals from the same game.
    """

    for existing in draft:
        if existing.key == leg.key:
            return DUPLICATE_LEG
        if (
            isinstance(leg, TeamLeg)
            and isinstance(existing, TeamLeg)
            and existing.event_id == leg.event_id
            and existing.bet_type == leg.bet_type
        ):
            return SAME_EVENT_BET_TYPE
    return None
