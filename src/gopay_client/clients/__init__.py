"""
Client module for the GoPay-Lite API.

Provides the transport client every API operation is issued through.
"""

from .http_client import GoPayClient

__all__ = ["GoPayClient"]
