import pytest
from sqlalchemy.pool import NullPool

from notekeeper.api import run
from notekeeper.db.session import engine_options


@pytest.mark.unit
def test_engine_options_per_backend():
    assert engine_options("sqlite+aiosqlite:///./notes.db") == {"poolclass": NullPool}
    assert engine_options("postgresql+asyncpg://u:p@db:5432/notes") == {"pool_pre_ping": True}


@pytest.mark.unit
def test_run_defaults_come_from_settings(monkeypatch, settings):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    run.main([])
    app, kwargs = calls[0]
    assert app == "notekeeper.api.main:app"
    assert (kwargs["host"], kwargs["port"]) == (settings.api_host, settings.api_port)
    assert kwargs["log_level"] == settings.log_level.lower()
    assert kwargs["log_config"] is None
    assert kwargs["reload"] is False


@pytest.mark.unit
def test_run_command_line_overrides(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    run.main(["--host", "127.0.0.1", "--port", "9001", "--log-level", "DEBUG", "--reload"])
    assert calls == [
        {
            "host": "127.0.0.1",
            "port": 9001,
            "log_level": "debug",
            "log_config": None,
            "reload": True,
        }
    ]
