from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

# POST bodies: plain dicts are sent verbatim, models are dumped first
Payload = Union[Dict[str, Any], BaseModel]

class ExchangeAdapter(ABC):
    """
    Abstract surface of the CAX REST API.
    Private endpoints need an API key, public ones do not.
    """

    # --- Credentials ---

    @abstractmethod
    def update_api_key(self, api_key: Optional[str]) -> None:
        """Replace the API key sent on authenticated requests."""
        pass

    @abstractmethod
    async def generate_api_key(self) -> str:
        """Sign a nonce with the wallet and obtain a fresh API key."""
        pass

    @abstractmethod
    async def create_api_key(self, sig: str, payload: Dict[str, str]) -> str:
        pass

    @abstractmethod
    async def ensure_api_key(self) -> str:
        """Return the held API key, provisioning one first if absent."""
        pass

    # --- Account (private) ---

    @abstractmethod
    async def get_balances(self, symbol: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def get_deposits(self, start_time: Optional[str] = None, end_time: Optional[str] = None,
                           symbol: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def get_deposit_info(self, tx_id: str) -> Any:
        pass

    @abstractmethod
    async def get_refunds(self, start_time: Optional[str] = None, end_time: Optional[str] = None,
                          symbol: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def get_refund_info(self, tx_id: str) -> Any:
        pass

    @abstractmethod
    async def get_withdraws(self, status: Optional[str] = None, start_time: Optional[str] = None,
                            end_time: Optional[str] = None, symbol: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def request_withdraw(self, payload: Payload) -> Any:
        pass

    @abstractmethod
    async def get_withdraw_info(self, tx_id: str) -> Any:
        pass

    # --- Market data (public) ---

    @abstractmethod
    async def get_orderbooks(self) -> Any:
        pass

    @abstractmethod
    async def get_orderbook_info(self, pair: str) -> Any:
        pass

    @abstractmethod
    async def get_orderbook_depth(self, pair: str) -> Any:
        pass

    @abstractmethod
    async def get_orderbook_quote(self, pair: str) -> Any:
        """Latest quote (best bid/ask) for a pair."""
        pass

    @abstractmethod
    async def get_trade_history(self, pair: str, date: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def get_exchange_status(self) -> Any:
        pass

    @abstractmethod
    async def get_symbols(self) -> Any:
        pass

    @abstractmethod
    async def get_symbols_info(self, name: str) -> Any:
        pass

    # --- Trading (private) ---

    @abstractmethod
    async def get_orders(self, status: Optional[str] = None, start_time: Optional[str] = None,
                         end_time: Optional[str] = None, pair: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def submit_limit_order(self, payload: Payload) -> Any:
        pass

    @abstractmethod
    async def get_order_info(self, order_id: str) -> Any:
        pass

    @abstractmethod
    async def cancel_order(self, order_id: str) -> Any:
        pass

    @abstractmethod
    async def get_trades(self, start_time: Optional[str] = None, end_time: Optional[str] = None,
                         pair: Optional[str] = None, order_id: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    async def get_trade_info(self, trade_id: str) -> Any:
        pass
