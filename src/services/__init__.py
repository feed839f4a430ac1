"""
Service utilities for notification delivery.

This package contains the background delivery executor and the email
content helpers (recipient filtering, body building).
"""

__all__ = ['email', 'executor']
