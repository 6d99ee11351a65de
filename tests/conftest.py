"""Shared pytest fixtures for map-mcp-tools tests."""

from __future__ import annotations

import pytest

from map_mcp_tools.config import DispatcherConfig
from map_mcp_tools.surface import RecordingSurface
from map_mcp_tools.tools import MapToolDispatcher


@pytest.fixture
def surface() -> RecordingSurface:
    """Fresh headless surface per test."""
    return RecordingSurface()


@pytest.fixture
def dispatcher(surface: RecordingSurface) -> MapToolDispatcher:
    """Fire-and-forget dispatcher; call drain() before inspecting the map."""
    d = MapToolDispatcher(surface)
    yield d
    d.close()


@pytest.fixture
def waiting_dispatcher(surface: RecordingSurface) -> MapToolDispatcher:
    """Dispatcher that waits for each call to reach the surface."""
    d = MapToolDispatcher(surface, DispatcherConfig(wait_for_completion=True))
    yield d
    d.close()
