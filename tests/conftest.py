from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from rental_billing.domain.models import Contract, Customer, ItemKind, RentalItem

START = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def start_at() -> datetime:
    return START


@pytest.fixture
def make_bike():
    def factory(**overrides) -> RentalItem:
        values = {
            "kind": ItemKind.BIKE,
            "name": "Bici Mountain",
            "barcode": "BK-001",
            "price_hourly": Decimal("5"),
            "price_daily": Decimal("30"),
        }
        values.update(overrides)
        return RentalItem(**values)

    return factory


@pytest.fixture
def make_accessory():
    def factory(**overrides) -> RentalItem:
        values = {
            "kind": ItemKind.ACCESSORY,
            "name": "Casco",
            "barcode": "AC-001",
            "price_hourly": Decimal("2"),
            "price_daily": Decimal("10"),
        }
        values.update(overrides)
        return RentalItem(**values)

    return factory


@pytest.fixture
def make_contract():
    def factory(items, hours: float | None = None, **overrides) -> Contract:
        values = {
            "id": "c-1",
            "customer": Customer(name="Mario Rossi", phone="3331234567"),
            "items": list(items),
            "start_at": START,
            "end_at": START + timedelta(hours=hours) if hours is not None else None,
        }
        values.update(overrides)
        return Contract(**values)

    return factory


@pytest.fixture
def contract_document() -> dict:
    return {
        "_id": "665f1c2e9b1e8a0012345678",
        "customer": {
            "name": "Mario Rossi",
            "phone": "3331234567",
            "idFrontUrl": "https://example.org/doc-front.jpg",
        },
        "items": [
            {
                "_id": "it-1",
                "kind": "bike",
                "name": "Bici Mountain",
                "barcode": "BK-001",
                "priceHourly": 5,
                "priceDaily": 30,
                "insurance": True,
                "insuranceFlat": 5,
            },
            {
                "_id": "it-2",
                "kind": "accessory",
                "name": "Casco",
                "barcode": "AC-001",
                "priceHourly": "2",
                "priceDaily": "10",
                "insurance": False,
            },
        ],
        "status": "in-use",
        "startAt": "2024-05-01T09:00:00.000Z",
        "endAt": "2024-05-01T13:00:00.000Z",
        "insuranceFlat": 3,
        "notes": "Cliente abituale",
    }
