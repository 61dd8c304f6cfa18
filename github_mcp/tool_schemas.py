"""
Tool Schema Definitions

Single source of truth for the tools this server exposes. Each tool's
parameters are declared once, as a pydantic model in
mcp_handlers/schemas/github.py; the ToolSpec records and the JSON Schemas
returned by tools/list are derived from those models at import time.
"""

import typing
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type

from mcp.types import Tool
from pydantic import BaseModel

from .mcp_handlers.schemas.github import (
    CreateRepoParams,
    GetUserParams,
    PushToRepoParams,
)

# Declaration order is the order reported by tools/list.
TOOL_PARAM_MODELS: Dict[str, Type[BaseModel]] = {
    "get_user": GetUserParams,
    "create_repo": CreateRepoParams,
    "push_to_repo": PushToRepoParams,
}

_JSON_TYPES = {
    str: "string",
    bool: "boolean",
    int: "integer",
    float: "number",
    list: "array",
    dict: "object",
}


@dataclass(frozen=True)
class ParamSpec:
    """One declared tool parameter."""
    key: str
    type: str
    required: bool
    description: str = ""
    default: Any = None

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if not self.required and self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class ToolSpec:
    """Name, description and ordered parameters of one tool."""
    name: str
    description: str
    parameters: Tuple[ParamSpec, ...]

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(p.key for p in self.parameters if p.required)

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.key: p.to_json_schema() for p in self.parameters},
            "required": list(self.required),
        }

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )


def _json_type(annotation: Any) -> str:
    # Optional[X] -> X
    if typing.get_origin(annotation) is typing.Union:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            annotation = args[0]
    return _JSON_TYPES.get(typing.get_origin(annotation) or annotation, "string")


def _first_line(s: Optional[str]) -> str:
    if not s:
        return ""
    for line in s.splitlines():
        if line.strip():
            return line.strip()
    return ""


def build_tool_spec(name: str, model: Type[BaseModel]) -> ToolSpec:
    """Derive a ToolSpec from a parameter model (description = first docstring line)."""
    params = []
    for key, field in model.model_fields.items():
        required = field.is_required()
        params.append(ParamSpec(
            key=key,
            type=_json_type(field.annotation),
            required=required,
            description=field.description or "",
            default=None if required else field.default,
        ))
    return ToolSpec(name=name, description=_first_line(model.__doc__), parameters=tuple(params))


TOOL_SPECS: Tuple[ToolSpec, ...] = tuple(
    build_tool_spec(name, model) for name, model in TOOL_PARAM_MODELS.items()
)
_SPECS_BY_NAME: Dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}


def list_tool_specs() -> Tuple[ToolSpec, ...]:
    """All tool specs in declaration order."""
    return TOOL_SPECS


def get_tool_spec(name: str) -> Optional[ToolSpec]:
    """Look up a tool spec by name; None for unknown tools."""
    return _SPECS_BY_NAME.get(name)


def get_tool_definitions() -> list[Tool]:
    """MCP tool definitions, as returned by tools/list."""
    return [spec.to_tool() for spec in TOOL_SPECS]
