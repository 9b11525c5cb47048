from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter

from carebill.models.client import Client, ClientMetadata
from carebill.models.schedule import DailySchedule, MonthlySchedule, WeeklySchedule
from carebill.repositories.base import ClientRepository

logger = logging.getLogger(__name__)

_clients_adapter = TypeAdapter(list[Client])


class InMemoryClientRepository(ClientRepository):
    def __init__(self, clients: Iterable[Client]) -> None:
        self._clients: dict[str, Client] = {}
        for client in clients:
            if client.id in self._clients:
                raise ValueError(f"Duplicate client id: {client.id}")
            self._clients[client.id] = client

    def get_by_id(self, client_id: str) -> Client | None:
        return self._clients.get(client_id)

    def list_all(self) -> list[Client]:
        return list(self._clients.values())

    def list_active(self) -> list[Client]:
        return [c for c in self._clients.values() if c.active]


def load_clients_file(path: str | Path) -> list[Client]:
    """Read a JSON array of client records."""
    raw = Path(path).read_bytes()
    clients = _clients_adapter.validate_json(raw)
    logger.info("Loaded %d clients from %s", len(clients), path)
    return clients


def sample_clients() -> list[Client]:
    return [
        Client(
            id="client-001",
            facility_name="Sunshine Healthcare Facility",
            address="123 Medical Drive",
            city="Springfield, IL 62701",
            phone="(555) 123-4567",
            email="billing@sunshinehealthcare.com",
            hourly_rate=65.00,
            billing_schedule=DailySchedule(hours_per_day=12, days_per_week=7),
            metadata=ClientMetadata(
                contact_person="VP of Clinical Services",
                notes="Net 30 payment terms - 12 hours daily coverage",
            ),
        ),
        Client(
            id="client-002",
            facility_name="Green Valley Assisted Living",
            address="456 Care Lane",
            city="Riverside, CA 92501",
            phone="(555) 987-6543",
            email="accounts@greenvalley.com",
            hourly_rate=70.00,
            billing_schedule=WeeklySchedule(hours_per_week=84, days_per_week=7),
            metadata=ClientMetadata(
                contact_person="Finance Director",
                notes="Prefers PDF invoices - Weekly billing at 84 hours/week",
            ),
        ),
        Client(
            id="client-003",
            facility_name="Maple Grove Senior Center",
            address="789 Elder Street",
            city="Portland, OR 97201",
            phone="(555) 555-0123",
            email="billing@maplegrove.org",
            hourly_rate=68.00,
            billing_schedule=MonthlySchedule(hours_per_month=360),
            metadata=ClientMetadata(
                contact_person="Billing Manager",
                notes="Monthly flat rate - 360 hours per billing period",
            ),
        ),
    ]
