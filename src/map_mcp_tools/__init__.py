"""Map manipulation operations exposed as LLM-callable tools."""

from map_mcp_tools.config import DispatcherConfig, load_config
from map_mcp_tools.layers import FeatureKind, LayerEntry, LayerStore
from map_mcp_tools.surface import MapSurface, RecordingSurface
from map_mcp_tools.tools import (
    Error,
    MapToolDispatcher,
    Success,
    get_tools_for_llm,
)

__all__ = [
    "DispatcherConfig",
    "load_config",
    "FeatureKind",
    "LayerEntry",
    "LayerStore",
    "MapSurface",
    "RecordingSurface",
    "MapToolDispatcher",
    "Success",
    "Error",
    "get_tools_for_llm",
]
