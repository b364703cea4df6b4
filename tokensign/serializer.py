from __future__ import annotations

import json
import math
from typing import Any

from pydantic import BaseModel, ValidationError

from tokensign.errors import DeserializationError


def _key(key: Any) -> str:
    if key is None:
        return "null"
    if key is True:
        return "true"
    if key is False:
        return "false"
    return str(key)


def to_json_value(value: Any) -> Any:
    """Convert value into plain JSON types, keeping mapping and field order.

    Dict keys are coerced to strings (None -> "null", booleans -> "true"/"false").
    Pydantic models are dumped in field declaration order.
    """
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise TypeError(f"Cannot cast non-finite float {value!r} to JSON.")
        return value
    if isinstance(value, BaseModel):
        return to_json_value(value.model_dump(mode="json"))
    if isinstance(value, dict):
        return {_key(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    raise TypeError(f"Cannot cast type {type(value).__name__!r} to JSON.")


def serialize(value: Any) -> bytes:
    return json.dumps(
        to_json_value(value),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def deserialize(data: bytes, model: type[BaseModel] | None = None) -> Any:
    try:
        obj = json.loads(data)
    except ValueError as e:
        raise DeserializationError("Payload is not valid JSON") from e
    if model is None:
        return obj
    try:
        return model.model_validate(obj)
    except ValidationError as e:
        raise DeserializationError(f"Payload does not match {model.__name__}") from e


class JSONSerializer:
    """Default payload serializer; any object with the same two methods can replace it."""

    def serialize(self, value: Any) -> bytes:
        return serialize(value)

    def deserialize(self, data: bytes, model: type[BaseModel] | None = None) -> Any:
        return deserialize(data, model=model)
