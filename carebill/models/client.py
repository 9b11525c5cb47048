from __future__ import annotations

from pydantic import BaseModel, Field, NonNegativeFloat

from carebill.models.schedule import BillingSchedule, DailySchedule


class ClientMetadata(BaseModel):
    contact_person: str = ""
    notes: str = ""
    last_invoice_date: str | None = None


class Client(BaseModel):
    id: str
    facility_name: str
    address: str
    city: str
    phone: str
    email: str
    hourly_rate: NonNegativeFloat
    billing_day: int = Field(default=15, ge=1, le=28)  # day of month
    billing_schedule: BillingSchedule = DailySchedule()
    active: bool = True
    metadata: ClientMetadata = ClientMetadata()
