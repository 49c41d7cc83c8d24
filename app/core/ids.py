"""
Opaque record identifiers.

An `EntityId` is a `bson.ObjectId` in its 24-lowercase-hex string form:
time-prefixed, so ids generated by one process sort in creation order.

Raw strings coming from a request are parsed with `EntityId.parse()` at the
router boundary; nothing past the router handles an unvalidated id.
"""
from __future__ import annotations

from typing import Any

from bson.objectid import ObjectId

from app.core.errors import InvalidIdError


class EntityId(str):
    __slots__ = ()

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        # ObjectId also accepts 12-byte binaries; only the hex string form is an id here.
        return isinstance(value, str) and ObjectId.is_valid(value)

    @classmethod
    def parse(cls, value: Any, label: str = "mood entry") -> "EntityId":
        """Validate a raw value, raising `InvalidIdError` (HTTP 400) when malformed."""
        if isinstance(value, EntityId):
            return value
        if not cls.is_valid(value):
            raise InvalidIdError(value, label=label)
        return cls(value.lower())

    @classmethod
    def generate(cls) -> "EntityId":
        return cls(str(ObjectId()))


def coerce_entity_id(value: Any) -> EntityId:
    """Pydantic validator form of `EntityId.parse` (raises ValueError)."""
    if not EntityId.is_valid(value):
        raise ValueError(f"{value!r} is not a valid id (expected 24 hex characters)")
    return EntityId(value.lower())
