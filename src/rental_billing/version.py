"""Version information for RentalBilling."""

__app_name__ = "RentalBilling"
__company__ = "Noleggio Bici"
__version__ = "1.0.0"
