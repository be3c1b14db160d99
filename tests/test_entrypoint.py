"""Tests for the uvicorn runner"""

import sys

import main as runner


def test_runs_served_app_from_environment(monkeypatch):
    calls = []
    monkeypatch.setattr(runner.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    path_before = list(sys.path)

    runner.main()

    assert calls == [
        (
            "softpack_web.main:app",
            {"host": "0.0.0.0", "port": 9000, "reload": False, "log_level": "info"},
        )
    ]
    assert sys.path == path_before


def test_development_reloads(monkeypatch):
    calls = []
    monkeypatch.setattr(runner.uvicorn, "run", lambda target, **kwargs: calls.append(kwargs))
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    runner.main()

    assert calls[0]["reload"] is True
    assert calls[0]["port"] == 8000
    assert calls[0]["log_level"] == "debug"
