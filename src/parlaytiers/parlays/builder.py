"""Greedy per-profile leg selection."""

from __future__ import annotations

import logging
import math

from parlaytiers.parlays.conflicts import conflict_reason
from parlaytiers.parlays.lines import select_line
from parlaytiers.parlays.tiers import (
    HYBRID_MIX,
    PLAYER_MIX,
    SORT_CATEGORY_WEIGHT,
    SORT_HIT_RATE,
    TEAM_MIX,
    ProfileTemplate,
    TierConfig,
)
from parlaytiers.parlays.types import (
    CandidatePool,
    CategoryWeights,
    Leg,
    PlayerLeg,
    ResolvedLeg,
    TeamLeg,
)
from parlaytiers.parlays.usage import UsageTracker

logger = logging.getLogger(__name__)


def select_candidates(pool: CandidatePool, profile: ProfileTemplate) -> list[Leg]:
    """Filter the ranked pool down to what a profile may draw from."""

    players = [leg for leg in pool.player_legs if profile.allows_sport(leg.sport)]
    teams = [
        leg
        for leg in pool.team_legs
        if profile.allows_bet_type(leg.bet_type) and profile.allows_sport(leg.sport)
    ]
    if profile.kind == PLAYER_MIX:
        return list(players)
    if profile.kind == TEAM_MIX:
        return list(teams)
    merged: list[Leg] = [*players, *teams]
    merged.sort(key=lambda leg: leg.composite_score, reverse=True)
    return merged


def sort_candidates(
    candidates: list[Leg],
    profile: ProfileTemplate,
    tier: TierConfig,
    weights: CategoryWeights,
) -> list[Leg]:
    """Re-order candidates per the profile's sort mode.

    The composite mode keeps the pool's own ranking. Category-weight ordering
    is reserved for the top tier.
    """

    if profile.sort_mode == SORT_HIT_RATE:
        return sorted(candidates, key=lambda leg: leg.hit_rate, reverse=True)
    if profile.sort_mode == SORT_CATEGORY_WEIGHT and tier.top_tier:
        return sorted(
            candidates,
            key=lambda leg: (weights.weight(leg.category, leg.side), leg.composite_score),
            reverse=True,
        )
    return list(candidates)


class ParlayBuilder:
    """Build one draft per profile against a tier's usage tracker."""

    def __init__(
        self,
        tier: TierConfig,
        tracker: UsageTracker,
        weights: CategoryWeights | None = None,
    ) -> None:
        self.tier = tier
        self.tracker = tracker
        self.weights = weights or CategoryWeights()

    def _rejection(self, leg: Leg, profile: ProfileTemplate, draft: list[ResolvedLeg]) -> str | None:
        if not self.tracker.can_use_globally(leg):
            return "global_usage"
        reason = conflict_reason(leg, [resolved.leg for resolved in draft])
        if reason:
            return reason
        if not self.tracker.can_use_in_parlay(leg):
            return "parlay_caps"
        if leg.hit_rate * 100 < self.tier.hit_rate_floor(profile):
            return "hit_rate_floor"
        if isinstance(leg, PlayerLeg) and leg.odds_value_score < self.tier.odds_value_floor(profile):
            return "odds_value_floor"
        if profile.kind == HYBRID_MIX:
            per_type_cap = math.ceil(profile.legs / 2)
            if sum(1 for resolved in draft if resolved.kind == leg.kind) >= per_type_cap:
                return "hybrid_mix_cap"
        return None

    def _resolve(self, leg: Leg, profile: ProfileTemplate) -> ResolvedLeg | None:
        if isinstance(leg, TeamLeg):
            return ResolvedLeg(leg=leg, line=leg.line, american_odds=leg.american_odds)
        selected = select_line(
            leg,
            leg.alternate_lines,
            profile.strategy,
            use_alt_lines=profile.use_alt_lines,
            prefer_plus_money=profile.prefer_plus_money,
            min_buffer_multiplier=profile.min_buffer_multiplier,
        )
        # The leg's own projection sits on the wrong side of the bet.
        if (
            leg.projected_value is not None
            and leg.projected_value > 0
            and leg.projection_edge(selected.line) < 0
        ):
            return None
        return ResolvedLeg(leg=leg, line=selected.line, american_odds=selected.odds, selection=selected)

    def build(self, profile: ProfileTemplate, pool: CandidatePool) -> list[ResolvedLeg] | None:
        """Return exactly ``profile.legs`` resolved legs, or ``None``.

        Accepted legs are committed to the tracker as they are chosen. A draft
        that falls short of the target is rolled back and discarded.
        """

        candidates = sort_candidates(select_candidates(pool, profile), profile, self.tier, self.weights)
        self.tracker.begin_parlay()
        draft: list[ResolvedLeg] = []
        for leg in candidates:
            if len(draft) >= profile.legs:
                break
            reason = self._rejection(leg, profile, draft)
            if reason:
                logger.debug("Rejected %s for %s: %s", leg.key, profile.strategy, reason)
                continue
            resolved = self._resolve(leg, profile)
            if resolved is None:
                logger.debug("Rejected %s for %s: negative_edge", leg.key, profile.strategy)
                continue
            self.tracker.commit(leg)
            draft.append(resolved)

        if len(draft) < profile.legs:
            logger.debug(
                "Discarded %s draft with %d/%d legs", profile.strategy, len(draft), profile.legs
            )
            self.tracker.abandon_parlay()
            return None
        return draft
