"""Rental pricing and billing engine for bike and accessory rentals."""

from rental_billing.version import __version__

__all__ = ["__version__"]
