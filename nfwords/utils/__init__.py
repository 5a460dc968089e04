"""Utility functions for NFwords."""

from .card_spacing import longest_run, space_cards, verify_spacing

__all__ = [
    "space_cards",
    "verify_spacing",
    "longest_run",
]
