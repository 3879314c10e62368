from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


# Request DTOs
class ShortenRequest(BaseModel):
    # original_url is the Python field, 'originalUrl' is the JSON key.
    # Optional so a missing key reaches the registry and becomes a 400.
    original_url: Optional[str] = Field(None, alias="originalUrl")

    class Config:
        populate_by_name = True


# Response DTOs
class LinkResponse(BaseModel):
    id: str
    original_url: str = Field(..., alias="originalUrl")
    short_code: str = Field(..., alias="shortCode")
    clicks: int
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class ShortenResponse(LinkResponse):
    message: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
