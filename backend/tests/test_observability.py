"""Tests ensuring observability wiring is safe by default."""
from __future__ import annotations

import importlib

from hobbypath.observability import tracing


def test_app_import_succeeds_when_opik_is_disabled(monkeypatch) -> None:
    monkeypatch.setenv("OPIK_ENABLED", "false")
    monkeypatch.delenv("OPIK_API_KEY", raising=False)

    import hobbypath.core.config as core_config
    import hobbypath.observability.client as client_module
    import hobbypath.main as main_module

    importlib.reload(core_config)
    importlib.reload(client_module)
    reloaded_app = importlib.reload(main_module)

    assert hasattr(reloaded_app, "app")
    assert client_module.get_opik_client() is None


def test_trace_yields_none_without_client(monkeypatch) -> None:
    monkeypatch.setattr(tracing, "get_opik_client", lambda: None)

    with tracing.trace("demo") as opik_trace:
        assert opik_trace is None


class _RecordingTrace:
    def __init__(self, metadata):
        self.metadata = metadata
        self.updates = []
        self.ended = False

    def update(self, **kwargs):
        self.updates.append(kwargs)

    def end(self):
        self.ended = True


class _RecordingClient:
    def __init__(self):
        self.traces = []

    def trace(self, name, metadata=None):
        recorded = _RecordingTrace(metadata or {})
        self.traces.append(recorded)
        return recorded


def test_trace_records_error_and_reraises(monkeypatch) -> None:
    client = _RecordingClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: client)

    try:
        with tracing.trace("demo", metadata={"hobby": "Chess"}, request_id="req-1"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    else:  # pragma: no cover
        raise AssertionError("trace swallowed the exception")

    recorded = client.traces[0]
    assert recorded.metadata == {"hobby": "Chess", "request_id": "req-1"}
    assert recorded.updates[0]["error_info"]["type"] == "RuntimeError"
    assert recorded.ended is True


def test_annotate_sets_output(monkeypatch) -> None:
    client = _RecordingClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: client)

    with tracing.trace("demo") as opik_trace:
        tracing.annotate(opik_trace, path="fallback")

    assert client.traces[0].updates == [{"output": {"path": "fallback"}}]
