"""Post schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a post."""
    title: str = Field(min_length=1)
    contents: str = Field(min_length=1)


class PostUpdate(BaseModel):
    """Schema for updating a post."""
    title: Optional[str] = Field(default=None, min_length=1)
    contents: Optional[str] = Field(default=None, min_length=1)


class PostRead(BaseModel):
    """Schema returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    contents: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
