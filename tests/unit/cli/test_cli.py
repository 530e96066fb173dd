"""Unit tests for the typer CLI."""

import pytest
from typer.testing import CliRunner

from src.mirror.cli import app
from src.mirror.cli import commands
from src.mirror.core.services import UpstreamClient
from src.mirror.runtime.config import ConfigData, DatabaseConfig
from src.mirror.runtime.context import with_context

runner = CliRunner()


@pytest.fixture
def memory_backend():
    with with_context(ConfigData(database=DatabaseConfig(backend="memory"))):
        yield


def test_show_config_masks_password(memory_backend, monkeypatch):
    monkeypatch.setenv("MONGO_PASSWORD", "hunter2")

    result = runner.invoke(app, ["show-config"])

    assert result.exit_code == 0
    assert "hunter2" not in result.stdout
    assert "memory" in result.stdout


def test_load_prints_summary(memory_backend, monkeypatch, upstream_config, upstream_transport):
    monkeypatch.setattr(commands, "configure_logging", lambda: None)
    monkeypatch.setattr(
        commands,
        "UpstreamClient",
        lambda config: UpstreamClient(upstream_config, transport=upstream_transport),
    )

    result = runner.invoke(app, ["load"])

    assert result.exit_code == 0
    assert "users" in result.stdout
    assert "comments" in result.stdout


def test_load_failure_exits_non_zero(memory_backend, monkeypatch, upstream_config):
    import httpx

    monkeypatch.setattr(commands, "configure_logging", lambda: None)
    monkeypatch.setattr(
        commands,
        "UpstreamClient",
        lambda config: UpstreamClient(
            upstream_config,
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        ),
    )

    result = runner.invoke(app, ["load"])

    assert result.exit_code == 1
    assert "Import failed" in result.stdout
