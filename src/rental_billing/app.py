"""Command line entry point."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from dateutil import parser as date_parser

from rental_billing.config import AppConfig
from rental_billing.domain.models import Bill, Contract
from rental_billing.logging_config import configure_logging, get_logger
from rental_billing.paths import get_config_path, get_pdfs_dir
from rental_billing.repositories.mappers import bill_to_document, contract_from_document
from rental_billing.services.errors import ServiceError
from rental_billing.services.payment_service import (
    PaymentMethod,
    build_complete_payment,
    reservation_deposit,
    suggest_final_amount,
)
from rental_billing.services.pricing_service import calculate_bill
from rental_billing.utils.formatting import format_currency, format_duration
from rental_billing.utils.pdf_generator import generate_bill_pdf
from rental_billing.utils.pricing_settings import PricingSettings, load_pricing_settings

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rental-billing",
        description="Calcolo del conto di un contratto di noleggio.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="File JSON delle impostazioni prezzi.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    bill = subparsers.add_parser("bill", help="Calcola il conto di un contratto.")
    bill.add_argument("contract", type=Path, help="Documento JSON del contratto.")
    bill.add_argument("--now", help="Istante di riferimento ISO 8601 per i contratti aperti.")
    bill.add_argument("--json", action="store_true", help="Stampa il conto in JSON.")
    bill.add_argument(
        "--pdf",
        nargs="?",
        const="",
        help="Scrive la ricevuta PDF; senza percorso usa la cartella ricevute.",
    )

    payment = subparsers.add_parser(
        "payment", help="Prepara la richiesta di chiusura pagamento."
    )
    payment.add_argument("contract", type=Path, help="Documento JSON del contratto.")
    payment.add_argument(
        "--method",
        choices=[method.value for method in PaymentMethod],
        default=PaymentMethod.CASH.value,
    )
    payment.add_argument("--amount", help="Importo finale; predefinito il totale calcolato.")
    payment.add_argument("--notes", default="")
    payment.add_argument("--now", help="Istante di riferimento ISO 8601 per i contratti aperti.")
    return parser


def _load_contract(path: Path) -> Contract:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ServiceError(f"Impossibile leggere il contratto {path}: {exc}") from exc
    return contract_from_document(document)


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return date_parser.isoparse(value)
    except ValueError as exc:
        raise ServiceError(f"Data non valida: {value}") from exc


def _default_receipt_path(contract: Contract) -> Path:
    return get_pdfs_dir() / f"{contract.id or 'contratto'}_ricevuta.pdf"


def _print_bill(bill: Bill, settings: PricingSettings) -> None:
    if bill.duration is not None:
        print(f"Durata: {format_duration(bill.duration)}")
    for charge in bill.items:
        logic = charge.pricing_logic.value if charge.pricing_logic else "-"
        print(
            f"  {charge.name:<28} {charge.duration_label:<55} "
            f"{format_currency(charge.total):>12}  [{logic}]"
        )
    if bill.contract_insurance > 0:
        label = "Assicurazione Contratto"
        print(f"  {label:<28} {'Flat':<55} {format_currency(bill.contract_insurance):>12}")
    for extra in bill.extra_charges:
        reason = extra.reason or ""
        print(f"  {extra.description:<28} {reason:<55} {format_currency(extra.amount):>12}")
    print(f"Noleggio:      {format_currency(bill.subtotal)}")
    print(f"Assicurazione: {format_currency(bill.insurance_total)}")
    if bill.extras_total:
        print(f"Extra:         {format_currency(bill.extras_total)}")
    print(f"Totale:        {format_currency(bill.final_total)}")
    if bill.is_reservation:
        deposit = reservation_deposit(bill, settings)
        print(f"Acconto:       {format_currency(deposit.prepaid)}")
        print(f"Saldo:         {format_currency(deposit.remaining)}")


def _run_bill(args: argparse.Namespace, settings: PricingSettings) -> int:
    contract = _load_contract(args.contract)
    bill = calculate_bill(contract, now=_parse_now(args.now), settings=settings)
    if args.json:
        print(json.dumps(bill_to_document(bill), ensure_ascii=False, indent=2))
    else:
        _print_bill(bill, settings)
    if args.pdf is not None:
        output = Path(args.pdf) if args.pdf else _default_receipt_path(contract)
        path = generate_bill_pdf(contract, bill, output)
        logger.info("Ricevuta salvata in %s", path)
    return 0


def _run_payment(args: argparse.Namespace, settings: PricingSettings) -> int:
    contract = _load_contract(args.contract)
    amount: Any = args.amount
    if amount is None:
        amount = suggest_final_amount(contract, now=_parse_now(args.now), settings=settings)
    request = build_complete_payment(contract.id, args.method, amount, args.notes)
    print(json.dumps({"path": request.path, "body": request.body}, ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the RentalBilling command line."""
    args = _build_parser().parse_args(argv)
    configure_logging()
    config = AppConfig()
    logger.info("Avvio %s (%s)", config.app_name, args.command)
    settings = load_pricing_settings(args.config or get_config_path())
    try:
        if args.command == "bill":
            return _run_bill(args, settings)
        return _run_payment(args, settings)
    except ServiceError as exc:
        logger.warning("Comando %s fallito: %s", args.command, exc)
        print(f"Errore: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
