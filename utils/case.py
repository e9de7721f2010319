"""
camelCase rendering of API responses.
Uses Pydantic's alias_generators for consistency with the request schemas' aliases.
"""
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


def dict_keys_to_camel(obj: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase."""
    if isinstance(obj, dict):
        return {to_camel(k): dict_keys_to_camel(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [dict_keys_to_camel(x) for x in obj]
    return obj


def model_to_camel(model: BaseModel) -> dict[str, Any]:
    """JSON-safe dump of a record (datetimes as ISO strings, enums as values) with camelCase keys."""
    return dict_keys_to_camel(model.model_dump(mode="json"))
