"""Pricing settings storage."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from rental_billing.config import DEFAULT_INSURANCE_FLAT, RESERVATION_DEPOSIT_RATE
from rental_billing.utils.config_store import load_config_data, save_config_data

_SECTION = "pricing"


@dataclass(frozen=True)
class PricingSettings:
    """Shop-wide defaults used by the billing engine."""

    default_insurance_flat: Decimal = DEFAULT_INSURANCE_FLAT
    reservation_deposit_rate: Decimal = RESERVATION_DEPOSIT_RATE


def _decimal_or(value: Any, fallback: Decimal) -> Decimal:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        parsed = Decimal(str(value))
    except InvalidOperation:
        return fallback
    if not parsed.is_finite() or parsed < 0:
        return fallback
    return parsed


def load_pricing_settings(config_path: Path) -> PricingSettings:
    """Load pricing settings from config JSON."""
    data = load_config_data(config_path).get(_SECTION)
    if not isinstance(data, dict):
        return PricingSettings()
    rate = _decimal_or(data.get("reservation_deposit_rate"), RESERVATION_DEPOSIT_RATE)
    if rate > 1:
        rate = RESERVATION_DEPOSIT_RATE
    return PricingSettings(
        default_insurance_flat=_decimal_or(
            data.get("default_insurance_flat"), DEFAULT_INSURANCE_FLAT
        ),
        reservation_deposit_rate=rate,
    )


def save_pricing_settings(config_path: Path, settings: PricingSettings) -> None:
    """Persist pricing settings to config JSON."""
    payload = load_config_data(config_path)
    payload[_SECTION] = {
        "default_insurance_flat": str(settings.default_insurance_flat),
        "reservation_deposit_rate": str(settings.reservation_deposit_rate),
    }
    save_config_data(config_path, payload)
