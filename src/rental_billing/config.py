"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from rental_billing.version import __app_name__, __company__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "RentalBilling"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "billing.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
PDF_DIRNAME = "ricevute"
CONFIG_FILENAME = "config.json"

CURRENCY_SYMBOL = "€"
DEFAULT_INSURANCE_FLAT = Decimal("5.00")
RESERVATION_DEPOSIT_RATE = Decimal("0.30")
HOURS_PER_DAY = 24



@dataclass(frozen=True)
class ShopIssuerInfo:
    """Issuer information printed on payment receipts."""

    name: str
    phone: str
    vat_number: str
    address: str


PDF_ISSUER = ShopIssuerInfo(
    name="Noleggio Bici",
    phone="+39 000 000 0000",
    vat_number="P.IVA 00000000000",
    address="Via Esempio, 1",
)


@dataclass(frozen=True)
class AppConfig:
    """Static configuration values for RentalBilling."""

    app_name: str = APP_NAME
    organization_name: str = __company__
