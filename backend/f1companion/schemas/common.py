"""Shared schema base — camelCase aliases for every API model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all request and response bodies."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def strip_text(v: str | None) -> str | None:
    return v.strip() if isinstance(v, str) else v
