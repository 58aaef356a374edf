"""Tariff resolution and bill assembly for rental contracts.

Every function here is pure: it reads the contract passed in and returns new
values. Amounts are kept unrounded while lines are priced and rounded to
cents only when the bill is assembled.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from rental_billing.config import DEFAULT_INSURANCE_FLAT
from rental_billing.domain.models import (
    ZERO,
    AppliedTariff,
    Bill,
    Contract,
    Duration,
    ItemCharge,
    ItemPrice,
    PriceSource,
    PricingLogic,
    PricingStrategy,
    RentalItem,
)
from rental_billing.logging_config import get_logger
from rental_billing.services.duration import resolve_duration
from rental_billing.utils.formatting import duration_label, to_cents
from rental_billing.utils.pricing_settings import PricingSettings

logger = get_logger(__name__)

FINAL_AMOUNT_LABEL = "Prezzo finale concordato"


def insurance_for(item: RentalItem, default: Decimal = DEFAULT_INSURANCE_FLAT) -> Decimal:
    """Insurance surcharge of a line, zero when the item is not insured."""
    if not item.insurance:
        return ZERO
    if item.insurance_flat and item.insurance_flat > 0:
        return item.insurance_flat
    return default


def _resolve_tariff(
    item: RentalItem, duration: Duration, is_reservation: bool
) -> tuple[Decimal, AppliedTariff, PricingLogic]:
    daily_total = item.price_daily * duration.days
    if is_reservation:
        return daily_total, AppliedTariff.DAILY, PricingLogic.RESERVATION_DAILY_LOCKED

    hourly_total = item.price_hourly * duration.hours
    if item.price_daily > 0 and hourly_total >= daily_total:
        return daily_total, AppliedTariff.DAILY, PricingLogic.NEW_CONTRACT_DAILY_CAPPED
    if item.price_hourly > 0:
        return hourly_total, AppliedTariff.HOURLY, PricingLogic.NEW_CONTRACT_HOURLY
    return daily_total, AppliedTariff.DAILY, PricingLogic.FALLBACK_DAILY


def price_item(
    item: RentalItem,
    duration: Duration,
    is_reservation: bool,
    *,
    default_insurance: Decimal = DEFAULT_INSURANCE_FLAT,
) -> ItemPrice:
    """Price one contract line for the given duration.

    Reservations always bill whole days at the daily tariff. Active contracts
    accrue the hourly tariff until it reaches the daily tariff for the same
    number of days, at which point the daily tariff applies. An operator
    entered custom price replaces both.
    """
    if item.has_custom_price:
        amount = item.custom_price
        tariff, logic = AppliedTariff.CUSTOM, PricingLogic.CUSTOM
    else:
        amount, tariff, logic = _resolve_tariff(item, duration, is_reservation)
    return ItemPrice(
        amount=amount,
        applied_tariff=tariff,
        note=logic,
        insurance=insurance_for(item, default_insurance),
        duration_label=duration_label(
            logic,
            duration,
            price_modified=item.is_price_modified,
            custom_reason=item.custom_price_reason,
        ),
    )


def _charge_from_price(item: RentalItem, price: ItemPrice) -> ItemCharge:
    return ItemCharge(
        name=item.name or "Articolo senza nome",
        kind=item.kind,
        amount=to_cents(price.amount),
        insurance=to_cents(price.insurance),
        total=to_cents(price.total),
        applied_tariff=price.applied_tariff,
        pricing_logic=price.note,
        duration_label=price.duration_label,
        is_price_modified=not item.has_custom_price and item.is_price_modified,
        returned=item.is_returned,
        price_hourly=item.price_hourly,
        price_daily=item.price_daily,
        original_price_hourly=item.original_price_hourly,
        original_price_daily=item.original_price_daily,
    )


def _final_amount_bill(contract: Contract) -> Bill:
    final_total = to_cents(contract.final_amount)
    per_item = to_cents(final_total / len(contract.items)) if contract.items else ZERO
    lines = tuple(
        ItemCharge(
            name=item.name or "Articolo senza nome",
            kind=item.kind,
            amount=per_item,
            insurance=ZERO,
            total=per_item,
            applied_tariff=None,
            pricing_logic=None,
            duration_label=FINAL_AMOUNT_LABEL,
            returned=item.is_returned,
            price_hourly=item.price_hourly,
            price_daily=item.price_daily,
            original_price_hourly=item.original_price_hourly,
            original_price_daily=item.original_price_daily,
        )
        for item in contract.items
    )
    logger.info(
        "Contratto %s: uso importo finale registrato %s.", contract.id, final_total
    )
    return Bill(
        items=lines,
        subtotal=final_total,
        insurance_total=ZERO,
        contract_insurance=ZERO,
        extras_total=ZERO,
        final_total=final_total,
        is_reservation=contract.uses_reservation_pricing,
        duration=None,
        price_source=PriceSource.FINAL,
        pricing_strategy=None,
    )


def calculate_bill(
    contract: Contract,
    *,
    now: Optional[datetime] = None,
    settings: Optional[PricingSettings] = None,
) -> Bill:
    """Compute the bill of a contract.

    A recorded ``final_amount`` is authoritative and is spread evenly over the
    lines for display. Otherwise every item on the contract is priced,
    returned ones included, for the duration from ``start_at`` (or
    ``created_at``) to ``end_at`` (or ``now``).
    """
    if contract.final_amount is not None:
        return _final_amount_bill(contract)

    settings = settings or PricingSettings()
    is_reservation = contract.uses_reservation_pricing
    duration = resolve_duration(
        contract.start_at or contract.created_at, contract.end_at, now=now
    )

    lines: list[ItemCharge] = []
    subtotal = ZERO
    items_insurance = ZERO
    for item in contract.items:
        price = price_item(
            item,
            duration,
            is_reservation,
            default_insurance=settings.default_insurance_flat,
        )
        subtotal += price.amount
        items_insurance += price.insurance
        lines.append(_charge_from_price(item, price))

    contract_insurance = ZERO
    if contract.insurance_flat and contract.insurance_flat > 0:
        contract_insurance = contract.insurance_flat
    extras = tuple(charge for charge in contract.extra_charges if charge.amount != 0)
    extras_total = sum((charge.amount for charge in extras), ZERO)
    insurance_total = items_insurance + contract_insurance
    final_total = to_cents(subtotal + insurance_total + extras_total)

    strategy = (
        PricingStrategy.RESERVATION_DAILY_LOCKED
        if is_reservation
        else PricingStrategy.NEW_CONTRACT_FLEXIBLE
    )
    logger.debug(
        "Contratto %s: %d righe, %s, durata %sh/%sg, totale %s.",
        contract.id,
        len(lines),
        strategy.value,
        duration.hours,
        duration.days,
        final_total,
    )
    return Bill(
        items=tuple(lines),
        subtotal=to_cents(subtotal),
        insurance_total=to_cents(insurance_total),
        contract_insurance=to_cents(contract_insurance),
        extras_total=to_cents(extras_total),
        final_total=final_total,
        is_reservation=is_reservation,
        duration=duration,
        price_source=PriceSource.CALCULATED,
        pricing_strategy=strategy,
        extra_charges=extras,
    )
