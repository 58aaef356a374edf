from __future__ import annotations

import json
import logging
import sys

import pytest

from rental_billing.app import main


@pytest.fixture(autouse=True)
def isolated_app_data(tmp_path, monkeypatch):
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def contract_file(tmp_path, contract_document):
    path = tmp_path / "contract.json"
    path.write_text(json.dumps(contract_document), encoding="utf-8")
    return path


def test_bill_prints_json(contract_file, capsys):
    assert main(["bill", str(contract_file), "--json"]) == 0
    document = json.loads(capsys.readouterr().out)
    assert document["total"] == 36.0
    assert document["breakdown"][0]["pricingLogic"] == "new_contract_hourly"


def test_bill_prints_breakdown(contract_file, capsys):
    assert main(["bill", str(contract_file)]) == 0
    out = capsys.readouterr().out
    assert "Durata: 4 ore" in out
    assert "Totale:        € 36,00" in out


def test_bill_writes_receipt_pdf(contract_file, tmp_path):
    output = tmp_path / "out" / "ricevuta.pdf"
    assert main(["bill", str(contract_file), "--pdf", str(output)]) == 0
    assert output.read_bytes().startswith(b"%PDF")


def test_bill_writes_receipt_to_default_folder(contract_file, tmp_path):
    assert main(["bill", str(contract_file), "--pdf"]) == 0
    receipts = list((tmp_path / "appdata").rglob("*_ricevuta.pdf"))
    assert len(receipts) == 1


def test_reservation_shows_deposit(tmp_path, contract_document, capsys):
    contract_document["status"] = "reserved"
    path = tmp_path / "reserved.json"
    path.write_text(json.dumps(contract_document), encoding="utf-8")
    assert main(["bill", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Acconto:" in out
    assert "Saldo:" in out


def test_payment_uses_computed_total(contract_file, capsys):
    assert main(["payment", str(contract_file), "--method", "card"]) == 0
    request = json.loads(capsys.readouterr().out)
    assert request["path"].endswith("/complete-payment")
    assert request["body"] == {
        "paymentMethod": "card",
        "paymentNotes": "",
        "finalAmount": 36.0,
    }


def test_payment_rejects_zero_amount(contract_file, capsys):
    assert main(["payment", str(contract_file), "--amount", "0"]) == 1
    assert "Errore" in capsys.readouterr().err


def test_missing_contract_file(tmp_path, capsys):
    assert main(["bill", str(tmp_path / "missing.json")]) == 1
    assert "Impossibile leggere" in capsys.readouterr().err


def test_custom_config_file(contract_file, tmp_path, capsys, contract_document):
    contract_document["items"][0]["insuranceFlat"] = None
    contract_file.write_text(json.dumps(contract_document), encoding="utf-8")
    config = tmp_path / "settings.json"
    config.write_text(
        json.dumps({"pricing": {"default_insurance_flat": "8"}}), encoding="utf-8"
    )
    assert main(["--config", str(config), "bill", str(contract_file), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["total"] == 39.0
