"""Shared response pieces."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class CamelModel(BaseModel):
    """Output model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
