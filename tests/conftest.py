"""Test harness configuration.

This repo uses a `src/` layout. In some developer environments an older
installed `discord_entities` package can shadow the local sources.

Ensure tests always import the in-repo code.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

import pytest

DEFAULT_NON_INTEGRATION_TIMEOUT_SECONDS = 120


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    src_path = str(src_dir)
    if sys.path[:1] != [src_path] and src_path not in sys.path:
        sys.path.insert(0, src_path)


def pytest_collection_modifyitems(
    session: pytest.Session, config: pytest.Config, items: list[pytest.Item]
) -> None:
    """
    Apply a default per-test timeout to non-integration tests.

    This relies on `pytest-timeout` when installed; if it isn't installed, the
    marker is inert but still documents the intent.
    """
    _ = session, config
    for item in items:
        if item.get_closest_marker("integration") is not None:
            continue
        item.add_marker(pytest.mark.timeout(DEFAULT_NON_INTEGRATION_TIMEOUT_SECONDS))


class RecordingTransport:
    """Transport double that records requests and replays a canned response."""

    def __init__(self, response: Any = None) -> None:
        self.response = response
        self.calls: list[tuple[Any, Optional[dict[str, Any]], Optional[str]]] = []

    async def request(
        self,
        route: Any,
        *,
        payload: Optional[dict[str, Any]] = None,
        reason: Optional[str] = None,
    ) -> Any:
        self.calls.append((route, payload, reason))
        return self.response

    @property
    def last_call(self):
        assert self.calls, "no request was made"
        return self.calls[-1]


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()
