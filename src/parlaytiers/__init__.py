"""Tiered parlay construction and scoring engine."""

from importlib import metadata

__all__ = ["__version__"]

try:
    __version__ = metadata.version("parlaytiers")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    __version__ = "0.0.0"
