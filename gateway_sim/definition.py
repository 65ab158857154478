"""
API definition loading for gateway-sim.

Definitions are stored as JSON documents with a single top-level
``api_definition`` key wrapping the gateway's definition object:

    {
      "api_definition": {
        "name": "Orders",
        "api_id": "orders",
        "protocol": "https",
        "proxy": {"listen_path": "/orders/", "target_url": "http://backend.internal/"}
      }
    }

Only the fields the simulator needs are extracted; the rest of the inner
object is kept untouched in ``APIDefinition.raw``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import DefinitionError

WRAPPER_KEY = "api_definition"


@dataclass(frozen=True)
class APIDefinition:
    """Gateway API definition driving one simulation."""
    protocol: str
    target_url: str
    name: str = ""
    api_id: str = ""
    listen_path: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> APIDefinition:
        proxy = data.get("proxy") or {}
        if not isinstance(proxy, dict):
            raise DefinitionError(f"'proxy' must be an object, got {type(proxy).__name__}")

        return cls(
            protocol=str(data.get("protocol") or ""),
            target_url=str(proxy.get("target_url") or ""),
            name=str(data.get("name") or ""),
            api_id=str(data.get("api_id") or ""),
            listen_path=str(proxy.get("listen_path") or ""),
            raw=data,
        )


def parse_definition(content: str | bytes) -> APIDefinition:
    """Parse a wrapped API definition document."""
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DefinitionError(f"Invalid definition JSON: {e}") from e

    if not isinstance(data, dict) or WRAPPER_KEY not in data:
        raise DefinitionError(f"Definition document must be an object with a '{WRAPPER_KEY}' key")

    inner = data[WRAPPER_KEY]
    if not isinstance(inner, dict):
        raise DefinitionError(f"'{WRAPPER_KEY}' must be an object, got {type(inner).__name__}")

    return APIDefinition.from_dict(inner)


def load_definition(path: str | Path) -> APIDefinition:
    """Load an API definition from a file."""
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise DefinitionError(f"Cannot read definition {path}: {e}") from e
    return parse_definition(content)
