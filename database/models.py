"""
Record models held by the in-memory stores.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    id: int
    username: str
    password_hash: str


class Task(BaseModel):
    """A single todo item. Serialized as ``{id, text, ownerId}``."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    text: str
    owner_id: int = Field(..., alias="ownerId")
