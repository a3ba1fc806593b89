"""Referral Hub - program referral intake service."""

__version__ = "1.0.0"
