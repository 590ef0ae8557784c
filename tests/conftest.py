"""Shared fixtures for resman tests.

Provides a recording reconciliation handler and a per-test resource kind so
that prometheus series from different tests never collide.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import uuid4

import pytest

from resman.models.resources import KubeResource

# ---------------------------------------------------------------------------
# Handler helpers
# ---------------------------------------------------------------------------


class RecordingHandler:
    """Async handler that records every call and returns a fixed directive."""

    def __init__(self, directive: Any = "requeue") -> None:
        self.directive = directive
        self.calls: list[tuple[str | None, Mapping[str, KubeResource]]] = []

    async def __call__(self, name: str | None, resources: Mapping[str, KubeResource]) -> Any:
        self.calls.append((name, resources))
        return self.directive

    @property
    def names(self) -> list[str | None]:
        return [name for name, _ in self.calls]

    @property
    def last_snapshot(self) -> Mapping[str, KubeResource]:
        return self.calls[-1][1]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def kind() -> str:
    """A resource kind unique to the current test."""
    return f"TestKind{uuid4().hex[:8]}"


@pytest.fixture
def make_handler() -> type[RecordingHandler]:
    """Factory for tests that need more than one handler."""
    return RecordingHandler
