from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Client(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: str = ""
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = ""
    phone: str = Field(default="", pattern=r"^[\d\s+\-()]*$")
    company: str = ""
    type: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = Field(default="", pattern=r"^[\d\s\-]*$")
    country: str = ""
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
