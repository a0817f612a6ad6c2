"""Parking-lot management: slots, reservations, fees, settlements, CSV storage and a Tk window."""

__version__ = "0.1.0"
__all__ = ["__version__"]