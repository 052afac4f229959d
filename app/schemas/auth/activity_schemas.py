# app/schemas/auth/activity_schemas.py

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from fastapi import Query
from pydantic import BaseModel, ConfigDict


class UserActivityFilters(BaseModel):
    user_id: Optional[UUID] = Query(None)
    username: Optional[str] = Query(None)
    code: Optional[str] = Query(None)

    page: int = Query(1, ge=1)
    page_size: int = Query(20, ge=1, le=100)

    sort_by: Literal["created_at", "username"] = Query("created_at")
    sort_order: Literal["asc", "desc"] = Query("desc")


class UserActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: Optional[UUID]
    username_snapshot: str
    code: str
    message: str
    created_at: datetime


class UserActivityPage(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[UserActivityOut]
