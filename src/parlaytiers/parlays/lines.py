"""Alternate line shopping for player legs."""

from __future__ import annotations

from collections.abc import Sequence

from parlaytiers.parlays.odds import is_valid_american
from parlaytiers.parlays.types import OVER, AlternateLine, PlayerLeg, SelectedLine

MIN_BUFFER_BY_PROP = {
    "points": 4.0,
    "rebounds": 2.5,
    "assists": 2.0,
    "threes": 1.0,
    "pra": 6.0,
    "pts_rebs": 4.5,
    "pts_asts": 4.5,
    "rebs_asts": 3.0,
    "steals": 0.8,
    "blocks": 0.8,
    "turnovers": 1.0,
    "goals": 0.5,
    "assists_nhl": 0.5,
    "shots": 2.0,
    "saves": 5.0,
    "aces": 2.0,
    "games": 1.0,
}
DEFAULT_MIN_BUFFER = 3.0

MIN_ALT_ODDS = -150
MAX_ALT_ODDS = 200
MIN_ODDS_IMPROVEMENT = 15
ALT_LINE_STRATEGY_MARKERS = ("aggressive", "alt")

_COMPACT_BUFFERS = {key.replace("_", ""): value for key, value in MIN_BUFFER_BY_PROP.items()}


def min_buffer(prop_type: str) -> float:
    name = prop_type.lower().strip()
    if name.startswith("player_"):
        name = name[len("player_"):]
    if name in MIN_BUFFER_BY_PROP:
        return MIN_BUFFER_BY_PROP[name]
    compact = name.replace("_", "").replace(" ", "")
    return _COMPACT_BUFFERS.get(compact, DEFAULT_MIN_BUFFER)


def wants_alt_lines(strategy: str, use_alt_lines: bool) -> bool:
    return use_alt_lines and any(marker in strategy for marker in ALT_LINE_STRATEGY_MARKERS)


def _is_viable(alt: AlternateLine, leg: PlayerLeg, projection: float, margin: float) -> bool:
    odds = alt.odds_for(leg.side)
    if not is_valid_american(odds) or not MIN_ALT_ODDS <= odds <= MAX_ALT_ODDS:
        return False
    if leg.side == OVER:
        return leg.line < alt.line <= projection - margin
    return projection + margin <= alt.line < leg.line


def select_line(
    leg: PlayerLeg,
    alternates: Sequence[AlternateLine] | None,
    strategy: str,
    *,
    use_alt_lines: bool,
    prefer_plus_money: bool = False,
    min_buffer_multiplier: float = 1.0,
) -> SelectedLine:
    """Choose between the primary line and a shopped alternate."""

    primary = SelectedLine(line=leg.line, odds=leg.american_odds, reason="safe_profile")
    if not wants_alt_lines(strategy, use_alt_lines):
        return primary

    required = min_buffer(leg.prop_type) * min_buffer_multiplier
    if leg.projection_edge() < required:
        return SelectedLine(leg.line, leg.american_odds, "insufficient_buffer")
    if not alternates:
        return SelectedLine(leg.line, leg.american_odds, "no_alternates")

    projection = leg.projected_value or 0.0
    viable = [alt for alt in alternates if _is_viable(alt, leg, projection, required * 0.5)]
    if not viable:
        return SelectedLine(leg.line, leg.american_odds, "no_viable_alts")

    if prefer_plus_money:
        plus_money = [alt for alt in viable if alt.odds_for(leg.side) > 0]
        if plus_money:
            # Furthest from the primary line in the bet's direction.
            if leg.side == OVER:
                chosen = max(plus_money, key=lambda alt: alt.line)
            else:
                chosen = min(plus_money, key=lambda alt: alt.line)
            odds = chosen.odds_for(leg.side)
            return SelectedLine(
                line=chosen.line,
                odds=odds,
                reason="aggressive_plus_money",
                original_line=leg.line,
                odds_improvement=odds - leg.american_odds,
            )

    best = max(viable, key=lambda alt: alt.odds_for(leg.side))
    best_odds = best.odds_for(leg.side)
    if best_odds > leg.american_odds + MIN_ODDS_IMPROVEMENT:
        return SelectedLine(
            line=best.line,
            odds=best_odds,
            reason="best_ev_alt",
            original_line=leg.line,
            odds_improvement=best_odds - leg.american_odds,
        )
    return SelectedLine(leg.line, leg.american_odds, "main_line_best")
