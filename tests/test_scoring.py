"""Leg scoring tests."""

from __future__ import annotations

from conftest import make_player_leg, make_team_leg

from parlaytiers.parlays import scoring
from parlaytiers.parlays.types import CandidatePool, CategoryWeight, CategoryWeights


def test_odds_value_is_monotonic_in_hit_rate() -> None:
    assert scoring.odds_value_score(-110, 0.55) > scoring.odds_value_score(-110, 0.45)


def test_odds_value_rewards_hit_rate_and_cheaper_prices() -> None:
    base = scoring.odds_value_score(-110, 0.55)
    assert scoring.odds_value_score(-110, 0.65) > base
    assert scoring.odds_value_score(110, 0.55) > base
    assert scoring.odds_value_score(-250, 0.55) < base


def test_odds_value_is_clamped() -> None:
    assert scoring.odds_value_score(-1000, 0.1) == 0.0
    assert scoring.odds_value_score(300, 0.99) <= 100.0


def test_calibration_rules_accept_fractions_and_percentages() -> None:
    assert scoring.calibration_multiplier(0.70) == 1.5
    assert scoring.calibration_multiplier(58) == 1.2
    assert scoring.calibration_multiplier(0.40) == 0.5
    assert scoring.calibration_multiplier(0.50) == 1.0
    assert scoring.calibration_multiplier(None) == 1.0
    assert scoring.calibration_rule(0.66).name == "elite_category"


def test_composite_increases_with_each_component() -> None:
    base = scoring.composite_score(55, 1.0, 60, 1.0)
    assert scoring.composite_score(65, 1.0, 60, 1.0) > base
    assert scoring.composite_score(55, 3.0, 60, 1.0) > base
    assert scoring.composite_score(55, 1.0, 70, 1.0) > base
    assert scoring.composite_score(55, 1.0, 60, 1.3) > base
    assert scoring.composite_score(55, 1.0, 60, 1.0, calibrated_hit_rate=0.7) > base


def test_projection_edge_is_direction_aware() -> None:
    over = make_player_leg(1, line=20.5, projected=24.5)
    under = make_player_leg(2, line=20.5, projected=24.5, side="under")
    assert over.projection_edge() == 4.0
    assert under.projection_edge() == -4.0
    assert over.projection_edge(line=22.5) == 2.0
    assert scoring.score_player_leg(under, CategoryWeights()).composite_score < (
        scoring.score_player_leg(over, CategoryWeights()).composite_score
    )


def test_team_bonus_by_bet_type() -> None:
    spread = scoring.score_team_leg(make_team_leg(1, bet_type="spread", sharp=60))
    total = scoring.score_team_leg(make_team_leg(2, bet_type="total", side="over", sharp=60))
    moneyline = scoring.score_team_leg(make_team_leg(3, bet_type="moneyline", side="away", sharp=60))
    assert spread.composite_score == 80
    assert total.composite_score == 75
    assert moneyline.category == "ML_UNDERDOG"
    assert total.category == "OVER_TOTAL"


def test_category_weight_lifts_player_score() -> None:
    plain = scoring.score_player_leg(make_player_leg(1), CategoryWeights())
    weighted = scoring.score_player_leg(
        make_player_leg(2),
        CategoryWeights([CategoryWeight("POINTS", weight=1.4, side="over")]),
    )
    assert weighted.composite_score > plain.composite_score


def test_score_pool_skips_malformed_and_out_of_range_legs() -> None:
    pool = CandidatePool(
        player_legs=[
            make_player_leg(1),
            make_player_leg(2, odds=0),
            make_player_leg(3, odds=-260),
            make_player_leg(4, line=0.0),
            make_player_leg(5, odds=50),
        ],
        team_legs=[make_team_leg(1)],
    )
    scored = scoring.score_pool(pool)
    assert [leg.id for leg in scored.player_legs] == ["p1"]
    assert scored.team_legs[0].composite_score == 80


def test_interleave_round_robins_categories() -> None:
    legs = [
        make_player_leg(1, category="POINTS", composite=90),
        make_player_leg(2, category="POINTS", composite=85),
        make_player_leg(3, category="POINTS", composite=80),
        make_player_leg(4, category="REBOUNDS", composite=70),
    ]
    ordered = scoring.interleave_by_category(legs)
    assert [leg.id for leg in ordered] == ["p1", "p4", "p2", "p3"]


def test_later_weight_sources_override_earlier_ones() -> None:
    pool_file_weights = [
        CategoryWeight("POINTS", weight=1.1),
        CategoryWeight("POINTS", weight=1.2, side="over", calibrated_hit_rate=0.58),
    ]
    stored_weights = [
        CategoryWeight("POINTS", weight=1.4),
        CategoryWeight("POINTS", weight=0.9, side="over", calibrated_hit_rate=0.47),
    ]
    weights = CategoryWeights(pool_file_weights + stored_weights)
    assert weights.weight("POINTS") == 1.4
    assert weights.weight("POINTS", "over") == 0.9
    assert weights.calibrated_hit_rate("POINTS", "over") == 0.47
    assert weights.weight("POINTS", "under") == 1.4


def test_side_weight_does_not_leak_to_other_side() -> None:
    weights = CategoryWeights([CategoryWeight("REBOUNDS", weight=1.5, side="over", calibrated_hit_rate=0.7)])
    assert weights.weight("REBOUNDS", "under") == 1.0
    assert weights.calibrated_hit_rate("REBOUNDS", "under") is None


def test_blocked_stored_weight_removes_file_weight() -> None:
    weights = CategoryWeights(
        [CategoryWeight("THREES", weight=1.3), CategoryWeight("THREES", weight=1.3, is_blocked=True)]
    )
    assert len(weights) == 0
