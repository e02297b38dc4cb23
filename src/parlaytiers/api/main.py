"""Serve the parlay API with uvicorn using the configured host and port."""

from __future__ import annotations

import uvicorn

from parlaytiers.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "parlaytiers.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":  # pragma: no cover
    main()
