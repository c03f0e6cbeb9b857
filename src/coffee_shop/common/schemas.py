"""Shared pydantic schemas and the response envelope used by every endpoint."""
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        protected_namespaces=(),
    )


class GeneralResponse(BaseModel):
    code: int = Field(..., description="HTTP status code mirrored in the body")
    message: str = Field(..., description="Human readable outcome")
    data: Optional[Any] = Field(None, description="Optional payload")


def envelope(code: int, message: str, data: Any = None) -> JSONResponse:
    """Builds a JSON response wrapped in the standard envelope.

    Pydantic payloads are serialized by alias, so nested schemas come out
    in camelCase.
    """
    body = GeneralResponse(code=code, message=message, data=None).model_dump()
    body["data"] = jsonable_encoder(data, by_alias=True)
    return JSONResponse(status_code=code, content=body)
