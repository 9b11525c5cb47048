"""Billing period resolution, line-item generation and invoice assembly.

Everything here is pure: the current date and the invoice number source are
parameters, and nothing performs I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from carebill.constants import PAYMENT_TERMS, SERVICE_DESCRIPTION, format_date, local_today, weekday_name
from carebill.invoice_numbers import InvoiceNumberGenerator, RandomInvoiceNumberGenerator
from carebill.models.invoice import BillingPeriod, InvoiceData, InvoiceLineItem, InvoiceTotals
from carebill.models.schedule import BillingSchedule

logger = logging.getLogger(__name__)

PERIOD_START_DAY = 16
PERIOD_END_DAY = 15

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero on the exact binary value."""
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_billing_period(reference: date | None = None) -> BillingPeriod:
    """Return the period from the previous month's 16th to the reference month's 15th."""
    ref = _as_date(reference) if reference is not None else local_today()

    if ref.month == 1:
        start = date(ref.year - 1, 12, PERIOD_START_DAY)
    else:
        start = date(ref.year, ref.month - 1, PERIOD_START_DAY)
    end = date(ref.year, ref.month, PERIOD_END_DAY)

    return BillingPeriod(start=start, end=end, formatted=f"{format_date(start)} to {format_date(end)}")


def generate_line_items(
    start: date,
    end: date,
    hourly_rate: float,
    schedule: BillingSchedule,
) -> list[InvoiceLineItem]:
    """One line item per calendar day in [start, end], skipping zero-hour days."""
    start, end = _as_date(start), _as_date(end)
    if start > end:
        return []

    total_days = (end - start).days + 1
    items: list[InvoiceLineItem] = []

    current = start
    while current <= end:
        day_name = weekday_name(current)
        hours = schedule.hours_for(day_name, total_days)

        if hours > 0:
            items.append(
                InvoiceLineItem(
                    date=format_date(current),
                    description=f"{SERVICE_DESCRIPTION} - {day_name}",
                    hours=round2(hours),
                    rate=hourly_rate,
                    amount=round2(hours * hourly_rate),
                )
            )

        current += timedelta(days=1)

    logger.debug(
        "Generated %d line items for %s..%s (%s schedule, %d days)",
        len(items),
        start,
        end,
        schedule.type,
        total_days,
    )
    return items


def calculate_totals(line_items: Iterable[InvoiceLineItem], tax_rate: float = 0) -> InvoiceTotals:
    subtotal = sum((item.amount for item in line_items), 0.0)
    tax = subtotal * (tax_rate / 100)
    return InvoiceTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def generate_invoice_data(
    facility_name: str,
    address: str,
    city: str,
    phone: str,
    email: str,
    hourly_rate: float,
    schedule: BillingSchedule,
    *,
    today: date | None = None,
    tax_rate: float = 0,
    number_generator: InvoiceNumberGenerator | None = None,
) -> InvoiceData:
    """Assemble the complete invoice record for the period containing ``today``.

    Args:
        today: Issue date; also the reference for the billing period.
            Defaults to the current date in the configured timezone.
        tax_rate: Percentage applied to the subtotal (8.5 means 8.5%).
        number_generator: Source of the invoice number. Defaults to a
            random, non-unique suffix.
    """
    issued_on = _as_date(today) if today is not None else local_today()
    numbers = number_generator or RandomInvoiceNumberGenerator()

    period = resolve_billing_period(issued_on)
    line_items = generate_line_items(period.start, period.end, hourly_rate, schedule)
    totals = calculate_totals(line_items, tax_rate)

    invoice = InvoiceData(
        invoice_number=numbers.next_number(issued_on),
        invoice_date=format_date(issued_on),
        billing_period=period.formatted,
        period_start=period.start,
        period_end=period.end,
        facility_name=facility_name,
        address=address,
        city=city,
        phone=phone,
        email=email,
        line_items=line_items,
        subtotal=totals.subtotal,
        tax_rate=tax_rate,
        tax=totals.tax,
        total=totals.total,
        notes=f"{schedule.summary()}. {PAYMENT_TERMS}",
    )
    logger.info(
        "Invoice %s assembled for %s: items=%d total=%.2f",
        invoice.invoice_number,
        facility_name,
        len(line_items),
        invoice.total,
    )
    return invoice
