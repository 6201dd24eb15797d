"""
Value types returned by and sent to the Reportobello API.
"""

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import DecodeError, EncodeError

JSON_CONTENT_TYPE = "application/json"
TYPST_CONTENT_TYPE = "application/x-typst"

# Accepted spellings of each field in the service's JSON, first match wins
_FIELD_ALIASES = {
    "name": ("name", "Name"),
    "template_content": ("template_content", "templateContent", "TemplateContent", "template"),
    "version": ("version", "Version"),
}


def _pick(item: Dict[str, Any], field: str) -> Optional[Any]:
    for key in _FIELD_ALIASES[field]:
        if key in item:
            return item[key]
    return None


@dataclass(frozen=True)
class Template:
    """A versioned snapshot of a report template, as stored by the service."""

    name: str
    template_content: str
    version: int

    @classmethod
    def from_dict(cls, item: Any) -> "Template":
        """
        Build a Template from one element of the versions response.

        Raises:
            DecodeError: If the element is not an object with the expected fields
        """
        if not isinstance(item, dict):
            raise DecodeError(f"Expected a template object, got {type(item).__name__}")

        name = _pick(item, "name")
        content = _pick(item, "template_content")
        version = _pick(item, "version")

        if not isinstance(name, str) or not isinstance(content, str):
            raise DecodeError("Template object is missing its name or content", details=str(item))

        # bool is an int subclass; a true/false version is malformed
        if isinstance(version, bool) or not isinstance(version, int):
            raise DecodeError("Template object has no integer version", details=str(item))

        return cls(name=name, template_content=content, version=version)


def build_payload(data: Any) -> Dict[str, Any]:
    """Wrap caller data in the body a build request expects."""
    return {"data": data, "content_type": JSON_CONTENT_TYPE}


def _json_default(value: Any) -> Any:
    # Nested dataclasses are converted wherever they appear in the data
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_build_payload(data: Any) -> str:
    """
    Serialize the build request body.

    Dataclass instances are converted to dicts.

    Raises:
        EncodeError: If the data cannot be represented as JSON
    """
    try:
        return json.dumps(build_payload(data), ensure_ascii=False, default=_json_default)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Report data is not JSON serializable: {e}")
