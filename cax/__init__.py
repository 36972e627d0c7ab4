"""
Async client for the CAX exchange REST API.
"""
from cax.exchanges.cax import CaxClient
from cax.utils import convert_to_iso8601
from cax.wallet import Wallet

__all__ = ["CaxClient", "Wallet", "convert_to_iso8601"]
