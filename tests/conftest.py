"""Shared fixtures for the Aether test suite."""

import pytest
from unittest.mock import MagicMock, patch


class _ManualHandle:
    def __init__(self, when: float, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualClock:
    """Deterministic stand-in for an event loop's ``call_later``."""

    def __init__(self):
        self.now = 0.0
        self._timers: list[_ManualHandle] = []

    def call_later(self, delay, callback):
        handle = _ManualHandle(self.now + delay, callback)
        self._timers.append(handle)
        return handle

    @property
    def armed(self) -> int:
        return sum(1 for h in self._timers if not h.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self._timers if not h.cancelled and h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._timers.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def base_triple():
    """A small, valid SourceTriple."""
    return {
        "markup": "<h1>Hello</h1>",
        "style": "h1 { color: blue; }",
        "logic": "console.log('hello');",
    }


@pytest.fixture
def valid_generation_response():
    """Complete valid generation reply dict."""
    return {
        "markup": "<p>hi</p>",
        "style": "p{color:red}",
        "logic": "console.log(1)",
        "explanation": "Added a red paragraph.",
    }


@pytest.fixture
def mock_llm_response():
    """Factory for a chat-model reply object with the given content."""
    def _make(content):
        response = MagicMock()
        response.content = content
        return response
    return _make


@pytest.fixture
def mock_config(tmp_path):
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "generation_provider": "google",
        "generation_model": "gemini-2.5-flash",
        "generation_temperature": 0.7,
        "send_context": True,
        "debounce_ms": 600,
        "poll_interval_ms": 10,
        "workspace_dir": str(tmp_path / "workspace"),
        "workspace_files": {"markup": "markup.html", "style": "style.css", "logic": "script.js"},
        "preview_path": "preview.html",
        "export_path": str(tmp_path / "output" / "project.html"),
    }
    with patch("aether.config._config", test_config):
        yield test_config
