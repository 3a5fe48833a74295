"""Canonical JSON serialization used as the hashing input.

Object keys are sorted at every level, arrays keep their order and no
whitespace is emitted, so structurally equal trees always serialize to
the same bytes regardless of how they were built.
"""

import json
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def stable_stringify(value: Any) -> str:
    """Serialize a JSON-compatible value deterministically.

    Args:
        value: dict/list/str/number/bool/None tree, or a pydantic model
               (dumped by alias with None fields omitted)

    Returns:
        Compact JSON text with lexicographically sorted keys

    Raises:
        TypeError: If the tree contains a value JSON cannot represent

    Examples:
        >>> stable_stringify({"b": 1, "a": [True, None]})
        '{"a":[true,null],"b":1}'
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)

    if value is None or isinstance(value, (bool, str, int)):
        return json.dumps(value, ensure_ascii=False)

    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        if value.is_integer():
            return json.dumps(int(value))
        return json.dumps(value)

    if isinstance(value, (list, tuple)):
        return "[" + ",".join(stable_stringify(item) for item in value) + "]"

    if isinstance(value, Mapping):
        items = {str(k): v for k, v in value.items()}
        pairs = []
        for key in sorted(items):
            item = items[key]
            pairs.append(f"{json.dumps(key, ensure_ascii=False)}:{stable_stringify(item)}")
        return "{" + ",".join(pairs) + "}"

    raise TypeError(f"Cannot canonicalize value of type {type(value).__name__}")
