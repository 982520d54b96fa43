"""Shared schema base: camelCase on the wire, snake_case in Python."""
from typing import Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class Message(CamelModel):
    message: str


class UserSummary(CamelModel):
    """Display projection of a user (never the full entity)."""

    user_id: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None
