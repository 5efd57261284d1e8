from __future__ import annotations

import dataclasses
import json
from datetime import datetime
from enum import Enum
from typing import Any


def to_jsonable(value: Any) -> Any:
    """Coerce stored values (parameter maps, presets, event payloads) into JSON primitives.

    Parameter values are JSON-shaped already; tuples become lists so that
    vectors and ranges round-trip through storage unchanged.
    """
    if value is None:
        return None

    if isinstance(value, Enum):
        return to_jsonable(value.value)

    if isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, datetime):
        return value.isoformat()

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {str(k): to_jsonable(v) for (k, v) in dataclasses.asdict(value).items()}

    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for (k, v) in value.items()}

    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]

    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return to_jsonable(model_dump(mode="json"))

    raise TypeError(f"Unsupported type for JSON serialization: {type(value)!r}")


def json_dumps_canonical(value: Any) -> str:
    """Stable JSON encoding for stored values."""
    return json.dumps(
        to_jsonable(value),
        ensure_ascii=False,
        sort_keys=True,
        separators=(",", ":"),
    )


def json_loads(value: str | bytes) -> Any:
    return json.loads(value)
