"""Shared Pydantic schemas for API responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys (``created_at`` -> ``createdAt``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Human-readable result")


class CascadeDeleteResponse(CamelModel):
    """Acknowledgement for deletes that also removed child images."""

    message: str
    deleted_images: int = Field(description="Number of child images removed")
