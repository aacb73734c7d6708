"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema using camelCase on the wire.

    Requests may use either camelCase or snake_case keys; responses are
    serialized with camelCase aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error: str
    error_code: str
    message: str
    details: Any | None = None
