from __future__ import annotations

from pydantic import BaseModel, Field

from core.storage.types import GrantMethod


class GrantRequest(BaseModel):
    key: str = Field(min_length=1, max_length=1024)


class GrantOut(BaseModel):
    key: str
    url: str
    method: GrantMethod
    expires_in: int


class StoredObjectOut(BaseModel):
    key: str
    size: int
