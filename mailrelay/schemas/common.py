"""Shared schema base and small response bodies."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON uses camelCase; Python attributes stay snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StatusResponse(CamelModel):
    """Outcome of a flow step (signup, verify, reset, send)."""

    status: str
    message: str
