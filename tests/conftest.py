from types import SimpleNamespace

import pytest
import structlog


class FakeHostError(Exception):
    """Error class exposed by fake hosts."""


class CaptureSink:
    """Sink recording every formatted unit it receives."""

    def __init__(self):
        self.outputs = []

    def __call__(self, output):
        self.outputs.append(output)


def make_host(log=None):
    """Host shaped like the Serverless framework object."""
    return SimpleNamespace(
        cli=SimpleNamespace(log=log if log is not None else CaptureSink()),
        classes=SimpleNamespace(Error=FakeHostError),
    )


@pytest.fixture
def sink():
    return CaptureSink()


@pytest.fixture
def host():
    return make_host()


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keep settings tests independent of the caller's shell and .env files."""
    for name in ("SLS_DEBUG", "PLUGINLOG_DEBUG", "PLUGINLOG_LEVEL", "PLUGINLOG_FORMAT", "PLUGINLOG_COLORS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()


@pytest.fixture
def host_error():
    return FakeHostError
