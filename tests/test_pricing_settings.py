from __future__ import annotations

import json
from decimal import Decimal

from rental_billing.utils.pricing_settings import (
    PricingSettings,
    load_pricing_settings,
    save_pricing_settings,
)


def test_missing_file_gives_defaults(tmp_path):
    settings = load_pricing_settings(tmp_path / "config.json")
    assert settings == PricingSettings()
    assert settings.default_insurance_flat == Decimal("5.00")
    assert settings.reservation_deposit_rate == Decimal("0.30")


def test_saved_settings_are_loaded_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    save_pricing_settings(
        path,
        PricingSettings(
            default_insurance_flat=Decimal("6.50"),
            reservation_deposit_rate=Decimal("0.25"),
        ),
    )
    settings = load_pricing_settings(path)
    assert settings.default_insurance_flat == Decimal("6.50")
    assert settings.reservation_deposit_rate == Decimal("0.25")
    assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "dark"


def test_broken_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_pricing_settings(path) == PricingSettings()


def test_out_of_range_values_fall_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {"pricing": {"default_insurance_flat": -2, "reservation_deposit_rate": 3}}
        ),
        encoding="utf-8",
    )
    assert load_pricing_settings(path) == PricingSettings()
