"""Display helpers for amounts and rental durations."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from rental_billing.config import CURRENCY_SYMBOL, HOURS_PER_DAY
from rental_billing.domain.models import Duration, PricingLogic

CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a money amount to cents, half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal | float) -> str:
    formatted = f"{to_cents(Decimal(str(value))):,.2f}"
    return f"{CURRENCY_SYMBOL} {formatted.replace(',', 'X').replace('.', ',').replace('X', '.')}"


def format_datetime(value: datetime | None) -> str:
    if value is None:
        return "—"
    return value.strftime("%d/%m/%Y %H:%M")


def _hours(hours: int) -> str:
    return f"{hours} {'ora' if hours == 1 else 'ore'}"


def _days(days: int) -> str:
    return f"{days} {'giorno' if days == 1 else 'giorni'}"


def format_duration(duration: Duration) -> str:
    """Short label: hours under a day, otherwise days with the hour count."""
    if duration.hours < HOURS_PER_DAY:
        return _hours(duration.hours)
    return f"{_days(duration.days)} ({duration.hours}h)"


def duration_label(
    logic: PricingLogic,
    duration: Duration,
    *,
    price_modified: bool = False,
    custom_reason: str | None = None,
) -> str:
    """Breakdown label explaining the duration and tariff of a line."""
    if logic == PricingLogic.CUSTOM:
        return custom_reason or "Prezzo personalizzato"
    if logic == PricingLogic.RESERVATION_DAILY_LOCKED:
        label = f"{_days(duration.days)} (PRENOTAZIONE - Tariffa giornaliera bloccata)"
    elif logic == PricingLogic.NEW_CONTRACT_DAILY_CAPPED:
        label = f"{_days(duration.days)} (Bloccato su tariffa giornaliera)"
    elif logic == PricingLogic.NEW_CONTRACT_HOURLY:
        label = f"{_hours(duration.hours)} (Tariffa oraria)"
    else:
        label = f"{_days(duration.days)} (Solo tariffa giornaliera disponibile)"
    if price_modified:
        label += " (prezzo modificato)"
    return label
