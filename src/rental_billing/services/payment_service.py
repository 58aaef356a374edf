"""Payment closure helpers for contracts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from rental_billing.domain.models import Bill, Contract
from rental_billing.logging_config import get_logger
from rental_billing.services.errors import ValidationError
from rental_billing.services.pricing_service import calculate_bill
from rental_billing.utils.formatting import to_cents
from rental_billing.utils.pricing_settings import PricingSettings

logger = get_logger(__name__)


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class DepositSplit:
    """Share of a reservation paid in advance and the balance due later."""

    prepaid: Decimal
    remaining: Decimal


@dataclass(frozen=True)
class CompletePaymentRequest:
    path: str
    body: dict[str, Any]


def reservation_deposit(
    bill: Bill, settings: Optional[PricingSettings] = None
) -> DepositSplit:
    """Split a reservation total into the prepaid deposit and the balance.

    Active contracts pay everything at closure, so their deposit is zero.
    """
    settings = settings or PricingSettings()
    if not bill.is_reservation:
        return DepositSplit(prepaid=Decimal("0.00"), remaining=bill.final_total)
    prepaid = min(to_cents(bill.final_total * settings.reservation_deposit_rate), bill.final_total)
    return DepositSplit(prepaid=prepaid, remaining=bill.final_total - prepaid)


def suggest_final_amount(
    contract: Contract,
    *,
    now: Optional[datetime] = None,
    settings: Optional[PricingSettings] = None,
) -> Decimal:
    """Amount proposed to the operator when closing a contract."""
    return calculate_bill(contract, now=now, settings=settings).final_total


def _parse_amount(value: Decimal | float | int | str | None) -> Decimal:
    if value is None or value == "":
        raise ValidationError("Inserisci un importo valido.")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError("Inserisci un importo valido.") from exc
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("L'importo finale deve essere maggiore di zero.")
    return to_cents(amount)


def build_complete_payment(
    contract_id: str,
    method: PaymentMethod | str,
    final_amount: Decimal | float | int | str | None,
    notes: Optional[str] = None,
) -> CompletePaymentRequest:
    """Validate a closure and build the ``complete-payment`` request."""
    if not contract_id:
        raise ValidationError("Contratto non specificato.")
    try:
        method = PaymentMethod(method)
    except ValueError as exc:
        raise ValidationError(f"Metodo di pagamento non supportato: {method}.") from exc
    amount = _parse_amount(final_amount)
    logger.info(
        "Chiusura contratto %s: %s con %s.", contract_id, amount, method.value
    )
    return CompletePaymentRequest(
        path=f"/api/contracts/{contract_id}/complete-payment",
        body={
            "paymentMethod": method.value,
            "paymentNotes": notes or "",
            "finalAmount": float(amount),
        },
    )
