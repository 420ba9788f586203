from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> None:
    for key in ("ARCHANALYZER_API_KEY", "OPENAI_API_KEY", "ARCHANALYZER_PROVIDER"):
        monkeypatch.delenv(key, raising=False)


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def read(self):
        return json.dumps(self._payload).encode("utf-8")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


@pytest.fixture
def fake_openai(monkeypatch):
    """Patch urlopen in the OpenAI provider and record every call."""
    calls: list[dict[str, object]] = []
    state: dict[str, object] = {"payload": {"choices": [{"message": {"content": "REPORT"}}]}}

    def fake_urlopen(request, timeout=None):
        calls.append(
            {
                "url": request.full_url,
                "headers": {k.lower(): v for k, v in request.header_items()},
                "payload": json.loads(request.data.decode("utf-8")),
                "timeout": timeout,
            }
        )
        error = state.get("error")
        if error is not None:
            raise error  # type: ignore[misc]
        return FakeResponse(state["payload"])

    monkeypatch.setattr("archanalyzer.llm.runner.urlopen", fake_urlopen)
    return calls, state


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("archanalyzer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
