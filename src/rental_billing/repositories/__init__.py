"""Mapping of backend contract documents to and from domain models."""

from rental_billing.repositories.mappers import (
    bill_to_document,
    contract_from_document,
    customer_from_document,
    item_from_document,
    item_to_document,
)

__all__ = [
    "bill_to_document",
    "contract_from_document",
    "customer_from_document",
    "item_from_document",
    "item_to_document",
]
