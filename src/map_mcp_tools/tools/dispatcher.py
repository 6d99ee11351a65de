"""Tool dispatcher for routing map tool calls to implementations."""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Iterable, Literal, Mapping

from map_mcp_tools.config import DispatcherConfig
from map_mcp_tools.layers import LayerStore
from map_mcp_tools.render_queue import RenderQueue
from map_mcp_tools.tools.annotation_tools import AnnotationTools
from map_mcp_tools.tools.coercion import ClearLayersArgs, coerce_params
from map_mcp_tools.tools.exceptions import (
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
)
from map_mcp_tools.tools.result import Error, Success, ToolCallResult, ToolOutcome
from map_mcp_tools.tools.schemas import get_all_tool_schemas, get_tools_for_llm
from map_mcp_tools.tools.view_tools import ViewTools

LOGGER = logging.getLogger(__name__)

if TYPE_CHECKING:
    from map_mcp_tools.surface import MapSurface
    from map_mcp_tools.tools.coercion import (
        AddPointsArgs,
        AddPolygonArgs,
        AddRouteArgs,
        FitBoundsArgs,
        PanMapArgs,
        SetStyleArgs,
    )
    from map_mcp_tools.tools.definitions import ToolDefinition


class MapToolDispatcher:
    """
    Route map tool calls to implementations.

    Owns the layer store for its lifetime; the surface is borrowed and must
    outlive the dispatcher. Map mutations run on a single render context in
    call order. By default `execute` returns as soon as the work is queued,
    so Success means "accepted", not "drawn".
    """

    def __init__(
        self,
        surface: MapSurface,
        config: DispatcherConfig | None = None,
        render_queue: RenderQueue | None = None,
    ) -> None:
        """
        Initialize dispatcher with a drawing surface.

        Args:
            surface: Map surface that receives drawing and camera calls.
            config: Dispatcher settings; defaults to DispatcherConfig().
            render_queue: Render context to post work to. If None, the
                dispatcher starts and owns one.
        """
        self._config = config or DispatcherConfig()
        self._surface = surface
        self._layers = LayerStore()
        self._owns_queue = render_queue is None
        self._render_queue = render_queue or RenderQueue(self._config.queue_size)
        self._annotation_tools = AnnotationTools(self._layers, surface)
        self._view_tools = ViewTools(surface)

        # Tool name -> handler taking coerced args, returning the confirmation
        self._handlers: dict[str, Callable[[Any], str]] = {
            "add_points_to_map": self._handle_add_points,
            "add_route_to_map": self._handle_add_route,
            "add_polygon_to_map": self._handle_add_polygon,
            "pan_map_to_location": self._handle_pan_map,
            "fit_map_to_bounds": self._handle_fit_bounds,
            "clear_map_layers": self._handle_clear_layers,
            "set_map_style": self._handle_set_style,
        }

    @property
    def layers(self) -> LayerStore:
        """Layer store owned by this dispatcher."""
        return self._layers

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    def get_tools_for_llm(self) -> list[ToolDefinition]:
        """Return the tool catalog."""
        return get_tools_for_llm()

    def get_tool_definitions(
        self, format: Literal["anthropic", "openai"] = "anthropic"
    ) -> list[dict]:
        """Return the tool catalog serialized for a model provider."""
        return get_all_tool_schemas(format)

    def execute(self, name: str, params: Mapping[str, Any] | None) -> ToolOutcome:
        """
        Execute tool `name` with decoded JSON arguments.

        Returns: Success with a confirmation message, or Error with code
        UNKNOWN_TOOL, INVALID_PARAMS or EXECUTION_ERROR. Never raises.
        """
        LOGGER.info("Tool call: %s", name)

        handler = self._handlers.get(name) if isinstance(name, str) else None
        if handler is None:
            error = ToolNotFoundError(name)
            LOGGER.warning("Tool error: %s code=%s", name, error.code)
            return Error(str(error), code=error.code)

        try:
            args = coerce_params(name, params)
        except ToolValidationError as e:
            LOGGER.warning("Tool error: %s code=%s: %s", name, e.code, e)
            return Error(str(e), code=e.code)

        try:
            message = handler(args)
        except Exception as e:
            LOGGER.error("Tool exception: %s: %s", name, e)
            return Error(f"Error executing tool: {e}", code=ToolExecutionError.code)

        LOGGER.debug("Tool success: %s", name)
        return Success(message)

    def dispatch(self, tool_call: Mapping[str, Any]) -> ToolCallResult:
        """
        Execute a tool call taken from a model response.

        Args:
            tool_call: Either an Anthropic `tool_use` block
                ({"id", "name", "input"}) or an OpenAI tool call
                ({"id", "function": {"name", "arguments"}}) whose arguments
                are a JSON string.

        Returns: ToolCallResult carrying the call ID and outcome.
        """
        call_id = tool_call.get("id") or "unknown"

        if "function" in tool_call:
            func = tool_call.get("function") or {}
            tool_name = func.get("name") or ""
            args = func.get("arguments") or "{}"
            if isinstance(args, str):
                try:
                    args = json.loads(args)
                except json.JSONDecodeError as e:
                    LOGGER.warning("Tool error: %s code=INVALID_JSON: %s", tool_name, e)
                    return ToolCallResult(
                        tool_name=tool_name,
                        call_id=call_id,
                        outcome=Error(f"Invalid JSON arguments: {e}", code="INVALID_JSON"),
                    )
        else:
            tool_name = tool_call.get("name") or ""
            args = tool_call.get("input")

        return ToolCallResult(
            tool_name=tool_name,
            call_id=call_id,
            outcome=self.execute(tool_name, args),
        )

    def dispatch_all(self, tool_calls: Iterable[Mapping[str, Any]]) -> list[ToolCallResult]:
        """Dispatch tool calls in order.

        Content blocks that are not `tool_use` blocks (e.g. text) are skipped,
        so a whole Anthropic response `content` list can be passed in.
        """
        results = []
        for call in tool_calls:
            block_type = call.get("type")
            if block_type is not None and block_type not in ("tool_use", "function"):
                continue
            results.append(self.dispatch(call))
        return results

    def drain(self, timeout: float | None = None) -> bool:
        """Wait until every queued map mutation has been applied."""
        return self._render_queue.drain(timeout)

    def close(self) -> None:
        """Finish queued work and stop the render context if this dispatcher owns it."""
        if self._owns_queue:
            self._render_queue.close()

    def __enter__(self) -> MapToolDispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _submit(self, tool_name: str, job: Callable[[], Any]) -> None:
        """Run `job` on the render context.

        In wait mode, surface failures are re-raised here; otherwise they are
        logged when the job completes. A job that times out before it starts
        is cancelled and never touches the map. One that has already started
        cannot be stopped, so its error says it may still apply.
        """
        if self._render_queue.is_render_thread():
            # Already on the render context: queueing would deadlock a wait.
            job()
            return

        future = self._render_queue.post(job)
        if not self._config.wait_for_completion:
            future.add_done_callback(partial(self._log_deferred_failure, tool_name))
            return

        try:
            future.result(timeout=self._config.completion_timeout)
        except FutureTimeoutError:
            waited = f"Timed out after {self._config.completion_timeout:g}s waiting for the map"
            if future.cancel():
                raise ToolExecutionError(f"{waited}; nothing was applied") from None
            LOGGER.warning("%s still running after timeout", tool_name)
            future.add_done_callback(partial(self._log_deferred_failure, tool_name))
            raise ToolExecutionError(
                f"{waited}; the call is still running and may still apply"
            ) from None

    @staticmethod
    def _log_deferred_failure(tool_name: str, future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            LOGGER.error("Deferred %s failed: %s", tool_name, exc, exc_info=exc)

    # Handler methods

    def _handle_add_points(self, args: AddPointsArgs) -> str:
        """Handle add_points_to_map tool call."""
        self._submit("add_points_to_map", partial(self._annotation_tools.add_points, args))
        return f"Added {len(args.points)} point(s) to layer '{args.layer_name}'"

    def _handle_add_route(self, args: AddRouteArgs) -> str:
        """Handle add_route_to_map tool call."""
        self._submit("add_route_to_map", partial(self._annotation_tools.add_route, args))
        return (
            f"Added route with {len(args.coordinates)} points "
            f"to layer '{args.layer_name}'"
        )

    def _handle_add_polygon(self, args: AddPolygonArgs) -> str:
        """Handle add_polygon_to_map tool call."""
        self._submit(
            "add_polygon_to_map", partial(self._annotation_tools.add_polygon, args)
        )
        return (
            f"Added polygon with {len(args.coordinates)} points "
            f"to layer '{args.layer_name}'"
        )

    def _handle_pan_map(self, args: PanMapArgs) -> str:
        """Handle pan_map_to_location tool call."""
        self._submit("pan_map_to_location", partial(self._view_tools.pan, args))
        return f"Panned map to ({args.latitude}, {args.longitude})"

    def _handle_fit_bounds(self, args: FitBoundsArgs) -> str:
        """Handle fit_map_to_bounds tool call."""
        bounds = args.bounds
        self._submit(
            "fit_map_to_bounds", partial(self._view_tools.fit_bounds, args, bounds)
        )
        return f"Fitted map to {len(args.coordinates)} coordinates"

    def _handle_clear_layers(self, args: ClearLayersArgs) -> str:
        """Handle clear_map_layers tool call."""
        self._submit("clear_map_layers", partial(self._annotation_tools.clear, args))
        if args.clear_all:
            return "Cleared all layers"
        return f"Cleared layers: {', '.join(args.layer_names)}"

    def _handle_set_style(self, args: SetStyleArgs) -> str:
        """Handle set_map_style tool call."""
        reset_layers = self._config.reset_layers_on_style_change

        def job() -> None:
            if reset_layers:
                self._annotation_tools.clear(ClearLayersArgs())
            self._view_tools.set_style(args)

        self._submit("set_map_style", job)
        return f"Set map style to: {args.style_url}"
