"""
Parameter validation helpers for MCP tool handlers.

Only presence is checked here. Values of the wrong type are passed through
to the handler and GitHub, which reports them as an API error.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel


@dataclass(frozen=True)
class MissingField:
    """First required argument found missing for a tool."""
    tool_name: str
    field_name: str


def is_missing(value: Any) -> bool:
    """Absent, None, and empty strings/collections all count as missing."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set)) and len(value) == 0:
        return True
    return False


def validate_required_params(spec, arguments: Dict[str, Any]) -> Optional[MissingField]:
    """
    Check a tool's required parameters against raw arguments.

    Fields are checked in declaration order and the first missing one is
    reported.

    Args:
        spec: ToolSpec of the invoked tool
        arguments: Raw argument mapping from the client

    Returns:
        None when every required field is present, else MissingField
    """
    for param in spec.parameters:
        if param.required and is_missing(arguments.get(param.key)):
            return MissingField(tool_name=spec.name, field_name=param.key)
    return None


def build_params(model: Type[BaseModel], arguments: Dict[str, Any]) -> BaseModel:
    """
    Build a tool's argument record without type coercion.

    Unknown keys are dropped and explicit nulls fall back to the declared
    default, so `private: null` behaves like an omitted `private`.
    """
    values = {
        key: value
        for key, value in arguments.items()
        if key in model.model_fields and value is not None
    }
    return model.model_construct(**values)
