"""Fingerprint-based rejection of repeated leg sets."""

from __future__ import annotations

from collections.abc import Iterable

from parlaytiers.parlays.types import ResolvedLeg

FINGERPRINT_SEPARATOR = "|"


def fingerprint(legs: Iterable[ResolvedLeg]) -> str:
    """Order-independent identity of a parlay's leg set."""

    return FINGERPRINT_SEPARATOR.join(sorted(resolved.fingerprint_key for resolved in legs))


class Deduplicator:
    """Run-scoped set of fingerprints, seeded from what is already persisted."""

    def __init__(self, seed: Iterable[str] = ()) -> None:
        self._seen: set[str] = set()
        self.seed(seed)

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, value: str) -> bool:
        return value in self._seen

    def seed(self, fingerprints: Iterable[str]) -> None:
        self._seen.update(fp for fp in fingerprints if fp)

    def accept(self, value: str) -> bool:
        """Record ``value`` and return True unless it was already seen."""

        if value in self._seen:
            return False
        self._seen.add(value)
        return True
