from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class VtuberCreate(BaseModel):
    name: str
    channel_url: Optional[str] = None


class VtuberResponse(BaseModel):
    id: str
    name: str
    channel_url: Optional[str] = None
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value)

    class Config:
        from_attributes = True
