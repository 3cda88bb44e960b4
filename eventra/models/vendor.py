from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Vendor(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: str = ""
    name: str = Field(min_length=1)
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    type: str = ""
    rate: float | None = Field(default=None, ge=0)
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
