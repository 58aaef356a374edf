"""Domain models for RentalBilling."""

from rental_billing.domain.models import (
    AppliedTariff,
    Bill,
    Contract,
    ContractStatus,
    Customer,
    Duration,
    ExtraCharge,
    ItemCharge,
    ItemKind,
    ItemPrice,
    PriceSource,
    PricingLogic,
    PricingStrategy,
    RentalItem,
)

__all__ = [
    "AppliedTariff",
    "Bill",
    "Contract",
    "ContractStatus",
    "Customer",
    "Duration",
    "ExtraCharge",
    "ItemCharge",
    "ItemKind",
    "ItemPrice",
    "PriceSource",
    "PricingLogic",
    "PricingStrategy",
    "RentalItem",
]
