import pytest
from typer.testing import CliRunner

from dbremote.cli import cli
from dbremote.cli.commands import remote as remote_commands
from dbremote.cli.common.context import RemoteAppContext, build_remote_context
from dbremote.core.config import ConnectionSettings

runner = CliRunner()


class _Session:
    def __init__(self, rows):
        self.rows = rows

    def execute(self, query: str):
        return iter(self.rows)


class _Adapter:
    def __init__(self, rows=None, error: Exception | None = None):
        self.rows = rows or []
        self.error = error
        self.connected: list[str] = []
        self.closed = False

    def connect(self, endpoint: str) -> _Session:
        self.connected.append(endpoint)
        if self.error is not None:
            raise self.error
        return _Session(self.rows)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_context(monkeypatch):
    adapter = _Adapter()
    calls: list[dict] = []

    def _build(**kwargs):
        calls.append(kwargs)
        return RemoteAppContext(settings=ConnectionSettings(), adapter=adapter)

    monkeypatch.setattr(remote_commands, "build_remote_context", _build)
    return adapter, calls


def test_topology_prints_shards():
    result = runner.invoke(cli.app, ["topology", "h{1..3}|r"])

    assert result.exit_code == 0, result.output
    assert "Shards: 3 | Addresses: 6" in result.output
    assert "h1" in result.output


def test_topology_invalid_descriptor_exits_with_2():
    result = runner.invoke(cli.app, ["topology", "h{3..1}"])

    assert result.exit_code == 2
    assert "Left number is greater than right" in result.output


def test_topology_address_limit_exits_with_2():
    result = runner.invoke(cli.app, ["topology", "h{1..500}"])

    assert result.exit_code == 2
    assert "too many addresses" in result.output


def test_describe_prints_columns(fake_context):
    adapter, calls = fake_context
    adapter.rows = [
        {"name": "EventDate", "type": "Date"},
        {"name": "UserID", "type": "UInt64"},
    ]

    result = runner.invoke(
        cli.app,
        ["describe", "e{1..2}|f", "merge", "hits", "--port", "9000", "--timeout", "2"],
    )

    assert result.exit_code == 0, result.output
    assert "merge.hits" in result.output
    assert "EventDate" in result.output
    assert "UInt64" in result.output
    assert "Resolved 2 column(s) from e1" in result.output
    assert adapter.connected == ["e1"]
    assert adapter.closed is True
    assert calls == [{"port": 9000, "scheme": None, "timeout": 2.0}]


def test_describe_warns_on_empty_schema(fake_context):
    result = runner.invoke(cli.app, ["describe", "h1", "merge", "hits"])

    assert result.exit_code == 0, result.output
    assert "no columns" in result.output


def test_describe_resolution_failure_exits_with_1(fake_context):
    adapter, _ = fake_context
    adapter.error = ConnectionRefusedError("refused")

    result = runner.invoke(cli.app, ["describe", "h1,h2", "merge", "hits"])

    assert result.exit_code == 1
    assert "refused" in result.output
    assert adapter.connected == ["h1"]
    assert adapter.closed is True


def test_describe_grammar_failure_exits_with_2(fake_context):
    adapter, _ = fake_context

    result = runner.invoke(cli.app, ["describe", "h{1..", "merge", "hits"])

    assert result.exit_code == 2
    assert adapter.connected == []


def test_build_remote_context_rejects_unknown_scheme():
    result = runner.invoke(
        cli.app, ["describe", "h1", "merge", "hits", "--scheme", "ftp"]
    )

    assert result.exit_code == 2
    assert "Unsupported scheme" in result.output


def test_build_remote_context_applies_overrides(monkeypatch):
    monkeypatch.setenv("DBREMOTE_HTTP_PORT", "9000")
    monkeypatch.delenv("DBREMOTE_TIMEOUT", raising=False)

    appctx = build_remote_context(scheme="HTTPS", timeout=1.5)

    assert appctx.settings == ConnectionSettings(port=9000, scheme="https", timeout=1.5)
    assert appctx.adapter.settings is appctx.settings
    appctx.adapter.close()
