"""Operator price overrides on contract lines."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Sequence

from rental_billing.domain.models import RentalItem
from rental_billing.logging_config import get_logger
from rental_billing.services.errors import NotFoundError, ValidationError

logger = get_logger(__name__)

OVERRIDABLE_FIELDS = {
    "price_hourly": "price_hourly",
    "priceHourly": "price_hourly",
    "price_daily": "price_daily",
    "priceDaily": "price_daily",
    "custom_price": "custom_price",
    "customPrice": "custom_price",
}


def _check_index(items: Sequence[RentalItem], index: int) -> None:
    if not 0 <= index < len(items):
        raise NotFoundError(f"Articolo {index + 1} non presente nel contratto.")


def _parse_price(value: Decimal | float | int | str) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Prezzo non valido: {value!r}.") from exc
    if not price.is_finite() or price < 0:
        raise ValidationError("Il prezzo deve essere un numero non negativo.")
    return price


def apply_item_price_override(
    items: Sequence[RentalItem],
    index: int,
    field: str,
    value: Decimal | float | int | str,
) -> list[RentalItem]:
    """Return a copy of ``items`` with one tariff of one line replaced.

    The catalog prices kept in ``original_price_hourly`` and
    ``original_price_daily`` are carried over untouched, so the line can
    still show what it cost before the override.
    """
    attribute = OVERRIDABLE_FIELDS.get(field)
    if attribute is None:
        raise ValidationError(f"Campo prezzo non modificabile: {field}.")
    _check_index(items, index)
    price = _parse_price(value)

    current = items[index]
    if getattr(current, attribute) == price:
        return list(items)
    updated = replace(current, **{attribute: price})
    logger.info(
        "Prezzo %s di '%s' modificato da %s a %s.",
        attribute,
        current.name,
        getattr(current, attribute),
        price,
    )
    result = list(items)
    result[index] = updated
    return result


def reset_item_prices(items: Sequence[RentalItem], index: int) -> list[RentalItem]:
    """Return a copy of ``items`` with one line back on its catalog prices."""
    _check_index(items, index)
    current = items[index]
    result = list(items)
    result[index] = replace(
        current,
        price_hourly=current.original_price_hourly,
        price_daily=current.original_price_daily,
        custom_price=None,
        custom_price_reason=None,
    )
    return result
