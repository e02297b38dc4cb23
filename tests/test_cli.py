"""Command line tests."""

from __future__ import annotations

import json

from parlaytiers import cli
from parlaytiers.errors import InsufficientPoolError
from parlaytiers.scheduling import jobs


def test_generate_prints_summary(monkeypatch, capsys) -> None:
    calls = {}

    def fake_job(pool, target_date=None, tiers=None):
        calls.update(pool=pool, target_date=target_date, tiers=tiers)
        return {"parlays_generated": 3}

    monkeypatch.setattr(jobs, "run_daily_job", fake_job)
    assert cli.main(["generate", "--pool", "pool.json", "--date", "2026-03-01", "--tier", "execution"]) == 0
    assert calls["tiers"] == ["execution"]
    assert str(calls["target_date"]) == "2026-03-01"
    output = json.loads(capsys.readouterr().out)
    assert output == {"success": True, "parlays_generated": 3}


def test_thin_pool_exit_code(monkeypatch, capsys) -> None:
    def fake_job(pool, target_date=None, tiers=None):
        raise InsufficientPoolError(5, 20)

    monkeypatch.setattr(jobs, "run_daily_job", fake_job)
    assert cli.main(["generate", "--pool", "pool.json"]) == 2
    assert json.loads(capsys.readouterr().out)["pool_size"] == 5


def test_api_entry_point_uses_configured_port(monkeypatch) -> None:
    from parlaytiers.api import main as api_main
    from parlaytiers.config import get_settings

    captured = {}
    monkeypatch.setattr(api_main.uvicorn, "run", lambda app, **kwargs: captured.update(app=app, **kwargs))
    monkeypatch.setenv("PORT", "9001")
    get_settings.cache_clear()
    try:
        api_main.main()
    finally:
        get_settings.cache_clear()
    assert captured["app"] == "parlaytiers.api.server:app"
    assert captured["port"] == 9001
