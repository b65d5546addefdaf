import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from models.enums import Currency


class CustomerCreate(BaseModel):
    name: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=30)
    notes: Optional[str] = None
    preferred_currency: Currency = Currency.USD

    @field_validator("name", "phone")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class CustomerResponse(BaseModel):
    id: uuid.UUID
    name: str
    phone: Optional[str]
    notes: Optional[str]
    preferred_currency: Currency
    created_at: datetime

    class Config:
        from_attributes = True
