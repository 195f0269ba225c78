"""Shared schema plumbing: camelCase JSON and required-text checks."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """
    Base for every request/response body.
    JSON uses camelCase keys (userId, createdAt, ...); Python code and
    snake_case request keys keep working through populate_by_name.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def required_text(message: str) -> Callable[[Any], Any]:
    """Build a before-validator rejecting None and blank strings with message."""

    def check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("required", message)
        return value

    return check
