"""Schema model for tool definitions sent to the LLM."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PROPERTY_TYPES = frozenset({"string", "number", "boolean", "array", "object"})


@dataclass(frozen=True)
class Property:
    """One parameter in a JSON Schema.

    `items` describes array elements; `properties` describes the fields of an
    object-typed property or array item.
    """

    type: str
    description: str | None = None
    default: Any = None
    items: Property | None = None
    properties: dict[str, Property] | None = None

    def __post_init__(self) -> None:
        if self.type not in PROPERTY_TYPES:
            raise ValueError(f"Unsupported property type: {self.type}")

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"type": self.type}
        if self.description is not None:
            out["description"] = self.description
        if self.default is not None:
            out["default"] = self.default
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.properties is not None:
            out["properties"] = {
                name: prop.to_dict() for name, prop in self.properties.items()
            }
        return out


@dataclass(frozen=True)
class InputSchema:
    """Top-level parameter schema of a tool."""

    properties: dict[str, Property]
    required: list[str] = field(default_factory=list)
    type: str = "object"

    def __post_init__(self) -> None:
        missing = [name for name in self.required if name not in self.properties]
        if missing:
            raise ValueError(f"Required fields not in properties: {', '.join(missing)}")

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "properties": {
                name: prop.to_dict() for name, prop in self.properties.items()
            },
            "required": list(self.required),
        }


@dataclass(frozen=True)
class ToolDefinition:
    """A named, described tool with its input schema."""

    name: str
    description: str
    input_schema: InputSchema

    def to_dict(self) -> dict:
        """Anthropic / MCP tool format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema.to_dict(),
        }

    def to_openai(self) -> dict:
        """OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema.to_dict(),
            },
        }
