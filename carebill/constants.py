from datetime import date, datetime
from zoneinfo import ZoneInfo

from carebill.settings import settings

MONTHS_EN = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Indexed by date.weekday(): Monday == 0
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

SERVICE_DESCRIPTION = "Nursing Services"
PAYMENT_TERMS = "Thank you for your business! Payment is due within 30 days."


def format_date(d: date) -> str:
    """Long-form US date: date(2025, 3, 16) -> 'March 16, 2025'"""
    return f"{MONTHS_EN[d.month - 1]} {d.day}, {d.year}"


def weekday_name(d: date) -> str:
    return WEEKDAYS[d.weekday()]


def local_today() -> date:
    return datetime.now(ZoneInfo(settings.timezone)).date()
