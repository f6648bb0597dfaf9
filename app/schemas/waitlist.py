from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional
from datetime import datetime
import uuid


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class WaitlistIn(BaseModel):
    """Raw registration body; field rules live in the validation layer."""
    email: Optional[Any] = None
    name: Optional[Any] = None
    phone: Optional[Any] = None


class WaitlistJoined(CamelModel):
    id: uuid.UUID
    email: str
    name: str


class WaitlistJoinResponse(CamelModel):
    success: bool = True
    message: str = "Successfully added to waitlist"
    data: WaitlistJoined


class WaitlistEntryOut(CamelModel):
    id: uuid.UUID
    email: str
    name: str
    phone: Optional[str] = None
    created_at: datetime
    notified: bool
    notified_at: Optional[datetime] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class WaitlistListResponse(CamelModel):
    success: bool = True
    data: List[WaitlistEntryOut]
    pagination: Pagination


class WaitlistCountsOut(CamelModel):
    total: int
    notified: int
    not_notified: int


class WaitlistCountResponse(CamelModel):
    success: bool = True
    data: WaitlistCountsOut


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
