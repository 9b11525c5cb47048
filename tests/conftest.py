"""Root conftest: shared client fixtures and a fixed clock."""

from __future__ import annotations

from datetime import date

import pytest

from carebill.models.client import Client
from carebill.models.schedule import CustomSchedule, DailySchedule
from carebill.repositories.memory import InMemoryClientRepository, sample_clients

FIXED_TODAY = date(2025, 3, 15)


def make_client(**overrides) -> Client:
    defaults = dict(
        id="client-test",
        facility_name="Test Care Home",
        address="1 Test Street",
        city="Testville, TX 75001",
        phone="(555) 000-0000",
        email="billing@testcare.example",
        hourly_rate=50.0,
        billing_schedule=DailySchedule(),
    )
    defaults.update(overrides)
    return Client(**defaults)


@pytest.fixture()
def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture()
def client_repo() -> InMemoryClientRepository:
    return InMemoryClientRepository(sample_clients())


@pytest.fixture()
def mixed_repo() -> InMemoryClientRepository:
    return InMemoryClientRepository(
        [
            make_client(id="a", facility_name="Alpha Care"),
            make_client(
                id="b",
                facility_name="Beta Living",
                billing_schedule=CustomSchedule(hours_by_weekday={"Monday": 8}),
            ),
            make_client(id="c", facility_name="Closed Clinic", active=False),
        ]
    )


@pytest.fixture()
def client_factory():
    return make_client
