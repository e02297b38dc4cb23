"""Exposure tracking across one tier run."""

from __future__ import annotations

from collections import Counter

from parlaytiers.parlays.tiers import TierConfig
from parlaytiers.parlays.types import PlayerLeg, Leg


class UsageTracker:
    """Global and per-parlay usage counters for a single tier.

    Global state (used keys, per-player counts) lives for the whole tier run.
    Team and category counters are reset by :meth:`begin_parlay`.
    """

    def __init__(self, tier: TierConfig) -> None:
        self.tier = tier
        self.used_keys: set[str] = set()
        self.player_counts: Counter[str] = Counter()
        self.team_counts: Counter[str] = Counter()
        self.category_counts: Counter[str] = Counter()
        self._draft: list[Leg] = []

    def begin_parlay(self) -> None:
        self.team_counts.clear()
        self.category_counts.clear()
        self._draft = []

    def can_use_globally(self, leg: Leg) -> bool:
        if leg.key in self.used_keys:
            return False
        if isinstance(leg, PlayerLeg):
            return self.player_counts[leg.player_name] < self.tier.max_player_usage
        return True

    def can_use_in_parlay(self, leg: Leg) -> bool:
        for team in leg.teams:
            if self.team_counts[team] >= self.tier.max_team_usage:
                return False
        return self.category_counts[leg.category] < self.tier.max_category_usage

    def commit(self, leg: Leg) -> None:
        self.used_keys.add(leg.key)
        if isinstance(leg, PlayerLeg):
            self.player_counts[leg.player_name] += 1
        for team in leg.teams:
            self.team_counts[team] += 1
        self.category_counts[leg.category] += 1
        self._draft.append(leg)

    def abandon_parlay(self) -> None:
        """Release the global marks of a draft that will not be evaluated."""

        for leg in self._draft:
            self.used_keys.discard(leg.key)
            if isinstance(leg, PlayerLeg):
                self.player_counts[leg.player_name] -= 1
                if self.player_counts[leg.player_name] <= 0:
                    del self.player_counts[leg.player_name]
        self.begin_parlay()
