"""Alternate line selection tests."""

from __future__ import annotations

from conftest import make_player_leg

from parlaytiers.parlays import lines
from parlaytiers.parlays.types import AlternateLine


def _over_leg():
    return make_player_leg(1, line=20.5, projected=27.5)


def test_min_buffer_lookup() -> None:
    assert lines.min_buffer("player_points") == 4.0
    assert lines.min_buffer("player_pts_rebs") == 4.5
    assert lines.min_buffer("PtsRebs") == 4.5
    assert lines.min_buffer("player_fantasy_score") == lines.DEFAULT_MIN_BUFFER


def test_alt_lines_disabled_keeps_primary() -> None:
    alternates = [AlternateLine(22.5, 120, -150)]
    selected = lines.select_line(_over_leg(), alternates, "elite_aggressive", use_alt_lines=False)
    assert (selected.line, selected.odds, selected.reason) == (20.5, -110, "safe_profile")


def test_strategy_without_alt_marker_keeps_primary() -> None:
    alternates = [AlternateLine(22.5, 120, -150)]
    selected = lines.select_line(_over_leg(), alternates, "explore_safe", use_alt_lines=True)
    assert selected.reason == "safe_profile"
    assert selected.line == 20.5


def test_insufficient_buffer_keeps_primary() -> None:
    leg = make_player_leg(1, line=20.5, projected=22.0)
    selected = lines.select_line(leg, [AlternateLine(21.5, 120, -150)], "aggressive", use_alt_lines=True)
    assert selected.reason == "insufficient_buffer"
    assert selected.line == 20.5


def test_no_alternates() -> None:
    selected = lines.select_line(_over_leg(), [], "aggressive", use_alt_lines=True)
    assert selected.reason == "no_alternates"


def test_best_ev_alternate_respects_projection_margin() -> None:
    alternates = [AlternateLine(22.5, 120, -150), AlternateLine(26.5, 180, -220)]
    selected = lines.select_line(_over_leg(), alternates, "validated_standard_alt", use_alt_lines=True)
    assert selected.reason == "best_ev_alt"
    assert selected.line == 22.5
    assert selected.odds == 120
    assert selected.original_line == 20.5
    assert selected.odds_improvement == 230


def test_plus_money_picks_furthest_viable_line() -> None:
    alternates = [AlternateLine(21.5, 105, -125), AlternateLine(23.5, 140, -170)]
    selected = lines.select_line(
        _over_leg(), alternates, "elite_aggressive", use_alt_lines=True, prefer_plus_money=True
    )
    assert selected.reason == "aggressive_plus_money"
    assert selected.line == 23.5


def test_small_improvement_keeps_main_line() -> None:
    selected = lines.select_line(
        _over_leg(), [AlternateLine(21.5, -105, -115)], "aggressive", use_alt_lines=True
    )
    assert selected.reason == "main_line_best"
    assert selected.line == 20.5


def test_under_side_moves_line_down() -> None:
    leg = make_player_leg(1, line=20.5, projected=14.0, side="under")
    alternates = [AlternateLine(18.5, -140, 110), AlternateLine(22.5, -200, -130)]
    selected = lines.select_line(leg, alternates, "aggressive", use_alt_lines=True)
    assert selected.reason == "best_ev_alt"
    assert selected.line == 18.5
    assert selected.odds == 110


def test_buffer_multiplier_tightens_requirement() -> None:
    leg = make_player_leg(1, line=20.5, projected=25.5)
    alternates = [AlternateLine(21.5, 120, -150)]
    assert lines.select_line(leg, alternates, "alt", use_alt_lines=True).reason != "insufficient_buffer"
    tightened = lines.select_line(leg, alternates, "alt", use_alt_lines=True, min_buffer_multiplier=1.5)
    assert tightened.reason == "insufficient_buffer"


def test_zero_priced_alternate_is_not_viable() -> None:
    leg = make_player_leg(1, line=20.5, projected=30.0)
    selected = lines.select_line(leg, [AlternateLine(23.5, 0, -150)], "aggressive", use_alt_lines=True)
    assert selected.reason == "no_viable_alts"
    assert selected.odds == -110
