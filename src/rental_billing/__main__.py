"""Module entry point for python -m rental_billing."""

from __future__ import annotations

from rental_billing.app import main


if __name__ == "__main__":
    raise SystemExit(main())
