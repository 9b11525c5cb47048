from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict


class BillingPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    formatted: str

    @property
    def total_days(self) -> int:
        return (self.end - self.start).days + 1


class InvoiceLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str  # long-form, e.g. 'March 16, 2025'
    description: str
    hours: float
    rate: float
    amount: float


class InvoiceTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: float
    tax: float
    total: float


class InvoiceData(BaseModel):
    invoice_number: str
    invoice_date: str
    billing_period: str
    period_start: date
    period_end: date
    facility_name: str
    address: str
    city: str
    phone: str
    email: str
    line_items: list[InvoiceLineItem] = []
    subtotal: float = 0.0
    tax_rate: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    notes: str = ""

    @property
    def total_hours(self) -> float:
        return round(sum(item.hours for item in self.line_items), 2)


class InvoiceGenerationResult(BaseModel):
    success: bool
    client_id: str
    client_name: str = ""
    invoice_number: str = ""
    total: float | None = None
    error: str | None = None


class BatchSummary(BaseModel):
    run_id: str = ""
    results: list[InvoiceGenerationResult] = []

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def failures(self) -> list[InvoiceGenerationResult]:
        return [r for r in self.results if not r.success]
