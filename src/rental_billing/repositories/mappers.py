"""Mappers between backend JSON documents and domain models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from dateutil import parser

from rental_billing.domain.models import (
    ZERO,
    Bill,
    Contract,
    ContractStatus,
    Customer,
    ExtraCharge,
    ItemCharge,
    ItemKind,
    RentalItem,
    to_decimal,
)
from rental_billing.logging_config import get_logger
from rental_billing.services.errors import ValidationError

logger = get_logger(__name__)


def _decimal(value: Any) -> Decimal:
    """Parse a number the way the backend sends it, zero when unusable."""
    return to_decimal(value, ZERO)


def _optional_decimal(value: Any) -> Optional[Decimal]:
    """Like :func:`_decimal`, but an unusable value counts as missing."""
    return to_decimal(value)


def _datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return parser.isoparse(value)
    except ValueError:
        logger.warning("Data non valida ignorata: %r", value)
        return None


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _money(value: Decimal) -> float:
    return float(value)


def _item_kind(value: Any) -> ItemKind:
    try:
        return ItemKind(value)
    except ValueError:
        return ItemKind.BIKE


def _contract_status(value: Any) -> ContractStatus:
    try:
        return ContractStatus(value)
    except ValueError:
        return ContractStatus.IN_USE


def customer_from_document(doc: Any) -> Customer:
    if not isinstance(doc, Mapping):
        return Customer()
    images = [
        doc.get(key)
        for key in ("idFrontUrl", "idBackUrl")
        if isinstance(doc.get(key), str) and doc.get(key)
    ]
    return Customer(
        name=str(doc.get("name") or ""),
        phone=doc.get("phone"),
        document_images=images,
    )


def item_from_document(doc: Mapping[str, Any]) -> RentalItem:
    return RentalItem(
        id=doc.get("_id"),
        kind=_item_kind(doc.get("kind")),
        name=str(doc.get("name") or ""),
        barcode=doc.get("barcode") or None,
        price_hourly=_decimal(doc.get("priceHourly")),
        price_daily=_decimal(doc.get("priceDaily")),
        original_price_hourly=_optional_decimal(doc.get("originalPriceHourly")),
        original_price_daily=_optional_decimal(doc.get("originalPriceDaily")),
        insurance=bool(doc.get("insurance")),
        insurance_flat=_optional_decimal(doc.get("insuranceFlat")),
        returned_at=_datetime(doc.get("returnedAt")),
        custom_price=_optional_decimal(doc.get("customPrice")),
        custom_price_reason=doc.get("customPriceReason"),
    )


def item_to_document(item: RentalItem) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "kind": item.kind.value,
        "name": item.name,
        "barcode": item.barcode,
        "priceHourly": _money(item.price_hourly),
        "priceDaily": _money(item.price_daily),
        "originalPriceHourly": _money(item.original_price_hourly),
        "originalPriceDaily": _money(item.original_price_daily),
        "insurance": item.insurance,
        "insuranceFlat": _money(item.insurance_flat) if item.insurance_flat is not None else None,
        "returnedAt": _iso(item.returned_at),
    }
    if item.id is not None:
        doc["_id"] = item.id
    if item.custom_price is not None:
        doc["customPrice"] = _money(item.custom_price)
        doc["customPriceReason"] = item.custom_price_reason
    return doc


def extra_charge_from_document(doc: Mapping[str, Any]) -> ExtraCharge:
    return ExtraCharge(
        description=str(doc.get("description") or "Costo Extra"),
        amount=_decimal(doc.get("amount")),
        reason=doc.get("reason"),
    )


def contract_from_document(doc: Any) -> Contract:
    """Build a contract from the JSON document returned by the backend."""
    if not isinstance(doc, Mapping):
        raise ValidationError("Documento contratto non valido.")
    raw_items = doc.get("items") or []
    raw_extras = doc.get("extraCharges") or []
    is_reservation = doc.get("isReservation")
    return Contract(
        id=doc.get("_id"),
        customer=customer_from_document(doc.get("customer")),
        items=[item_from_document(item) for item in raw_items if isinstance(item, Mapping)],
        status=_contract_status(doc.get("status")),
        is_reservation=is_reservation if isinstance(is_reservation, bool) else None,
        start_at=_datetime(doc.get("startAt")),
        end_at=_datetime(doc.get("endAt")),
        created_at=_datetime(doc.get("createdAt")),
        insurance_flat=_optional_decimal(doc.get("insuranceFlat")),
        final_amount=_optional_decimal(doc.get("finalAmount")),
        notes=doc.get("notes"),
        extra_charges=[
            extra_charge_from_document(extra)
            for extra in raw_extras
            if isinstance(extra, Mapping)
        ],
        payment_method=doc.get("paymentMethod"),
        payment_notes=doc.get("paymentNotes"),
    )


def item_charge_to_document(charge: ItemCharge) -> dict[str, Any]:
    return {
        "name": charge.name,
        "kind": charge.kind.value,
        "duration": charge.duration_label,
        "basePrice": _money(charge.amount),
        "insurance": _money(charge.insurance),
        "total": _money(charge.total),
        "appliedTariff": charge.applied_tariff.value if charge.applied_tariff else None,
        "pricingLogic": charge.pricing_logic.value if charge.pricing_logic else None,
        "isPriceModified": charge.is_price_modified,
        "returned": charge.returned,
        "originalPriceHourly": _money(charge.original_price_hourly or ZERO),
        "originalPriceDaily": _money(charge.original_price_daily or ZERO),
        "currentPriceHourly": _money(charge.price_hourly),
        "currentPriceDaily": _money(charge.price_daily),
    }


def bill_to_document(bill: Bill) -> dict[str, Any]:
    """Serialize a bill into the breakdown document consumed by the UI."""
    breakdown = [item_charge_to_document(charge) for charge in bill.items]
    if bill.contract_insurance > 0:
        breakdown.append(
            {
                "name": "Assicurazione Contratto",
                "duration": "Flat",
                "basePrice": 0.0,
                "insurance": _money(bill.contract_insurance),
                "total": _money(bill.contract_insurance),
                "pricingLogic": None,
            }
        )
    for extra in bill.extra_charges:
        breakdown.append(
            {
                "name": extra.description,
                "duration": extra.reason or "Aggiunto manualmente",
                "basePrice": _money(extra.amount),
                "insurance": 0.0,
                "total": _money(extra.amount),
                "pricingLogic": None,
                "isExtraCharge": True,
            }
        )
    return {
        "subtotal": _money(bill.subtotal),
        "insurance": _money(bill.insurance_total),
        "extras": _money(bill.extras_total),
        "total": _money(bill.final_total),
        "isReservation": bill.is_reservation,
        "priceSource": bill.price_source.value,
        "pricingStrategy": bill.pricing_strategy.value if bill.pricing_strategy else None,
        "duration": (
            {"hours": bill.duration.hours, "days": bill.duration.days}
            if bill.duration
            else None
        ),
        "breakdown": breakdown,
    }
