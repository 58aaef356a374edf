"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

ZERO = Decimal("0")


def to_decimal(value: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Coerce a money value to a finite ``Decimal``, ``default`` when unusable."""
    if value is None or isinstance(value, bool):
        return default
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return default
    return value if value.is_finite() else default


class ItemKind(str, Enum):
    BIKE = "bike"
    ACCESSORY = "accessory"


class ContractStatus(str, Enum):
    RESERVED = "reserved"
    IN_USE = "in-use"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppliedTariff(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    CUSTOM = "custom"


class PricingLogic(str, Enum):
    """Diagnostic tag explaining why a tariff was applied to a line."""

    RESERVATION_DAILY_LOCKED = "reservation_daily_locked"
    NEW_CONTRACT_DAILY_CAPPED = "new_contract_daily_capped"
    NEW_CONTRACT_HOURLY = "new_contract_hourly"
    FALLBACK_DAILY = "fallback_daily"
    CUSTOM = "custom"


class PriceSource(str, Enum):
    FINAL = "final"
    CALCULATED = "calculated"


class PricingStrategy(str, Enum):
    RESERVATION_DAILY_LOCKED = "reservation_daily_locked"
    NEW_CONTRACT_FLEXIBLE = "new_contract_flexible"


@dataclass(slots=True)
class Customer:
    name: str = ""
    phone: Optional[str] = None
    document_images: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RentalItem:
    """A bike or accessory attached to a contract line.

    The ``original_price_*`` fields hold the catalog tariffs at the moment the
    item was added. They default to the current tariffs and are carried over
    unchanged by every copy made with :func:`dataclasses.replace`.
    """

    kind: ItemKind
    name: str
    price_hourly: Decimal = ZERO
    price_daily: Decimal = ZERO
    barcode: Optional[str] = None
    original_price_hourly: Optional[Decimal] = None
    original_price_daily: Optional[Decimal] = None
    insurance: bool = False
    insurance_flat: Optional[Decimal] = None
    returned_at: Optional[datetime] = None
    custom_price: Optional[Decimal] = None
    custom_price_reason: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.price_hourly = to_decimal(self.price_hourly, ZERO)
        self.price_daily = to_decimal(self.price_daily, ZERO)
        self.original_price_hourly = to_decimal(self.original_price_hourly)
        self.original_price_daily = to_decimal(self.original_price_daily)
        self.insurance_flat = to_decimal(self.insurance_flat)
        self.custom_price = to_decimal(self.custom_price)
        if self.original_price_hourly is None:
            self.original_price_hourly = self.price_hourly
        if self.original_price_daily is None:
            self.original_price_daily = self.price_daily

    @property
    def is_returned(self) -> bool:
        return self.returned_at is not None

    @property
    def has_custom_price(self) -> bool:
        return self.custom_price is not None and self.custom_price > 0

    @property
    def is_price_modified(self) -> bool:
        return (
            self.price_hourly != self.original_price_hourly
            or self.price_daily != self.original_price_daily
        )


@dataclass(slots=True)
class ExtraCharge:
    description: str
    amount: Decimal
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount, ZERO)


@dataclass(slots=True)
class Contract:
    customer: Customer = field(default_factory=Customer)
    items: list[RentalItem] = field(default_factory=list)
    status: ContractStatus = ContractStatus.IN_USE
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None
    is_reservation: Optional[bool] = None
    insurance_flat: Optional[Decimal] = None
    final_amount: Optional[Decimal] = None
    notes: Optional[str] = None
    extra_charges: list[ExtraCharge] = field(default_factory=list)
    created_at: Optional[datetime] = None
    payment_method: Optional[str] = None
    payment_notes: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.insurance_flat = to_decimal(self.insurance_flat)
        self.final_amount = to_decimal(self.final_amount)

    @property
    def uses_reservation_pricing(self) -> bool:
        return self.status == ContractStatus.RESERVED or self.is_reservation is True


@dataclass(frozen=True, slots=True)
class Duration:
    hours: int
    days: int


@dataclass(frozen=True, slots=True)
class ItemPrice:
    """Unrounded price of a single line for a given duration."""

    amount: Decimal
    applied_tariff: AppliedTariff
    note: PricingLogic
    insurance: Decimal
    duration_label: str

    @property
    def total(self) -> Decimal:
        return self.amount + self.insurance


@dataclass(frozen=True, slots=True)
class ItemCharge:
    """One breakdown line of a bill."""

    name: str
    kind: ItemKind
    amount: Decimal
    insurance: Decimal
    total: Decimal
    applied_tariff: Optional[AppliedTariff]
    pricing_logic: Optional[PricingLogic]
    duration_label: str
    is_price_modified: bool = False
    returned: bool = False
    price_hourly: Decimal = ZERO
    price_daily: Decimal = ZERO
    original_price_hourly: Optional[Decimal] = None
    original_price_daily: Optional[Decimal] = None


@dataclass(frozen=True, slots=True)
class Bill:
    items: tuple[ItemCharge, ...]
    subtotal: Decimal
    insurance_total: Decimal
    contract_insurance: Decimal
    extras_total: Decimal
    final_total: Decimal
    is_reservation: bool
    duration: Optional[Duration]
    price_source: PriceSource
    pricing_strategy: Optional[PricingStrategy]
    extra_charges: tuple[ExtraCharge, ...] = ()
