import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from cax.config import settings
from cax.exchanges.interface import ExchangeAdapter, Payload
from cax.utils import convert_to_iso8601
from cax.wallet import Wallet

logger = logging.getLogger(__name__)

class CaxClient(ExchangeAdapter):
    """
    CAX exchange REST API client.
    Authenticates with an Ethereum wallet signature: a signed nonce is exchanged
    for an API key, which is then sent as the `API-Key` header.
    The key is provisioned lazily on the first private call.
    """

    def __init__(self,
                 private_key: Optional[str] = None,
                 api_key: Optional[str] = None,
                 base_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        private_key = private_key or settings.CAX_PRIVATE_KEY
        if not private_key:
            raise ValueError("CAX_PRIVATE_KEY must be provided")

        self.wallet = Wallet(private_key)
        self.address = self.wallet.address
        self.base_url = base_url or settings.CAX_BASE_URL
        self.timeout = timeout if timeout is not None else settings.CAX_TIMEOUT
        self._transport = transport

        self.api_key = api_key or settings.CAX_API_KEY or None
        self.config = {
            "headers": {
                "API-Key": self.api_key
            }
        }
        # Serializes key provisioning so concurrent callers share one request.
        # Bound to the running loop on first use, see _get_key_lock.
        self._key_lock: Optional[asyncio.Lock] = None
        self._key_lock_loop: Optional[asyncio.AbstractEventLoop] = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    async def _request(self,
                       method: str,
                       endpoint: str,
                       data: Optional[Payload] = None,
                       params: Optional[Dict[str, str]] = None,
                       headers: Optional[Dict[str, str]] = None) -> Any:
        """
        Issue a single request and return the decoded JSON body.
        Non-2xx responses raise httpx.HTTPStatusError. No retries.
        """
        url = f"{self.base_url}{endpoint}"
        if isinstance(data, BaseModel):
            data = data.model_dump()

        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        body_str = None
        if data is not None:
            # Compact form matches the string signed for /apikeys
            body_str = json.dumps(data, separators=(",", ":"))
            request_headers["Content-Type"] = "application/json"

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(method, url, params=params, headers=request_headers,
                                                content=body_str)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"CAX API Error {e.response.status_code} on {method} {endpoint}: {e.response.text}")
                raise
            except httpx.RequestError as e:
                logger.error(f"Network Error on {method} {endpoint}: {e}")
                raise

    async def _private(self, method: str, endpoint: str, data: Optional[Payload] = None,
                       params: Optional[Dict[str, str]] = None) -> Any:
        await self.ensure_api_key()
        return await self._request(method, endpoint, data=data, params=params,
                                   headers=self.config["headers"])

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    def update_api_key(self, api_key: Optional[str]) -> None:
        """Replace the API key used for all later private calls."""
        self.api_key = api_key
        self.config["headers"]["API-Key"] = self.api_key

    async def generate_api_key(self) -> str:
        """Sign a timestamp nonce with the wallet and exchange it for a new API key."""
        message = {"nonce": f"{int(time.time() * 1000)}"}
        sig = self.wallet.sign_message(json.dumps(message, separators=(",", ":")))
        return await self.create_api_key(sig, message)

    async def create_api_key(self, sig: str, payload: Dict[str, str]) -> str:
        """POST the signed nonce to /apikeys and store the returned key."""
        logger.info(f"Requesting new API key for {self.address}")
        data = await self._request("POST", "/apikeys", data=payload, headers={"api-sig": sig})
        self.update_api_key(data["apikey"])
        logger.info("API key provisioned")
        return data["apikey"]

    def _get_key_lock(self) -> asyncio.Lock:
        # asyncio.Lock belongs to one loop; a client reused under a new
        # asyncio.run() gets a fresh lock instead of a RuntimeError
        loop = asyncio.get_running_loop()
        if self._key_lock is None or self._key_lock_loop is not loop:
            self._key_lock = asyncio.Lock()
            self._key_lock_loop = loop
        return self._key_lock

    async def ensure_api_key(self) -> str:
        """Provision an API key if none is held. Concurrent callers share one request."""
        if self.api_key:
            return self.api_key
        async with self._get_key_lock():
            if not self.api_key:
                await self.generate_api_key()
        return self.api_key

    # ------------------------------------------------------------------
    # Balances, deposits, refunds, withdrawals
    # ------------------------------------------------------------------
    async def get_balances(self, symbol: Optional[str] = None) -> Any:
        endpoint = f"/balances/{symbol}" if symbol else "/balances"
        return await self._private("GET", endpoint)

    async def get_deposits(self, start_time: Optional[str] = None, end_time: Optional[str] = None,
                           symbol: Optional[str] = None) -> Any:
        """
        List deposits. Times are 'YYYY-MM-DD-HH:MM:SS'.
        The filter only applies when all three arguments are given.
        """
        if start_time and end_time and symbol:
            return await self._private("GET", "/deposits/", params=_time_filter(start_time, end_time, symbol=symbol))
        return await self._private("GET", "/deposits")

    async def get_deposit_info(self, tx_id: str) -> Any:
        return await self._private("GET", f"/deposits/{tx_id}")

    async def get_refunds(self, start_time: Optional[str] = None, end_time: Optional[str] = None,
                          symbol: Optional[str] = None) -> Any:
        if start_time and end_time and symbol:
            return await self._private("GET", "/refunds/", params=_time_filter(start_time, end_time, symbol=symbol))
        return await self._private("GET", "/refunds")

    async def get_refund_info(self, tx_id: str) -> Any:
        return await self._private("GET", f"/refunds/{tx_id}")

    async def get_withdraws(self, status: Optional[str] = None, start_time: Optional[str] = None,
                            end_time: Optional[str] = None, symbol: Optional[str] = None) -> Any:
        """
        List withdrawals. status is one of accepted, pending, complete,
        failed, error, refunded. All four filters must be given to apply.
        """
        if status and start_time and end_time and symbol:
            params = _time_filter(start_time, end_time, status=status, symbol=symbol)
            return await self._private("GET", "/withdraws/", params=params)
        return await self._private("GET", "/withdraws")

    async def request_withdraw(self, payload: Payload) -> Any:
        """payload: {"amount": "...", "symbol": "..."}, sent as is."""
        return await self._private("POST", "/withdraws", data=payload)

    async def get_withdraw_info(self, tx_id: str) -> Any:
        return await self._private("GET", f"/withdraws/{tx_id}")

    # ------------------------------------------------------------------
    # Market data (public)
    # ------------------------------------------------------------------
    async def get_orderbooks(self) -> Any:
        return await self._request("GET", "/orderbooks")

    async def get_orderbook_info(self, pair: str) -> Any:
        return await self._request("GET", f"/orderbooks/{pair}")

    async def get_orderbook_depth(self, pair: str) -> Any:
        """Bid and ask quantities per price level."""
        return await self._request("GET", f"/orderbooks/{pair}/depth")

    async def get_orderbook_quote(self, pair: str) -> Any:
        return await self._request("GET", f"/orderbooks/{pair}/quote")

    async def get_trade_history(self, pair: str, date: Optional[str] = None) -> Any:
        """
        Public trades for a pair. Without a date the server returns the
        last 24 hours; date ('YYYY-MM-DD') selects a single day.
        """
        if date:
            return await self._request("GET", f"/orderbooks/{pair}/trades/", params={"date": date})
        return await self._request("GET", f"/orderbooks/{pair}/trades")

    async def get_exchange_status(self) -> Any:
        return await self._request("GET", "/status")

    async def get_symbols(self) -> Any:
        return await self._request("GET", "/symbols")

    async def get_symbols_info(self, name: str) -> Any:
        return await self._request("GET", f"/symbols/{name}")

    # ------------------------------------------------------------------
    # Orders and trades
    # ------------------------------------------------------------------
    async def get_orders(self, status: Optional[str] = None, start_time: Optional[str] = None,
                         end_time: Optional[str] = None, pair: Optional[str] = None) -> Any:
        if status and start_time and end_time and pair:
            # The orders filter names the pair "symbol"
            params = _time_filter(start_time, end_time, status=status, symbol=pair)
            return await self._private("GET", "/orders/", params=params)
        return await self._private("GET", "/orders")

    async def submit_limit_order(self, payload: Payload) -> Any:
        """
        Place a limit order.
        payload: {"amount": "...", "pair": "ATN-USD", "price": "...", "side": "bid" | "ask"}
        """
        side = payload.side if isinstance(payload, BaseModel) else payload.get("side")
        pair = payload.pair if isinstance(payload, BaseModel) else payload.get("pair")
        logger.info(f"Submitting {side} limit order on {pair}")
        return await self._private("POST", "/orders/", data=payload)

    async def get_order_info(self, order_id: str) -> Any:
        return await self._private("GET", f"/orders/{order_id}")

    async def cancel_order(self, order_id: str) -> Any:
        logger.info(f"Cancelling order {order_id}")
        return await self._private("DELETE", f"/orders/{order_id}")

    async def get_trades(self, start_time: Optional[str] = None, end_time: Optional[str] = None,
                         pair: Optional[str] = None, order_id: Optional[str] = None) -> Any:
        if start_time and end_time and pair and order_id:
            params = _time_filter(start_time, end_time, pair=pair, orderId=order_id)
            return await self._private("GET", "/trades/", params=params)
        return await self._private("GET", "/trades")

    async def get_trade_info(self, trade_id: str) -> Any:
        return await self._private("GET", f"/trades/{trade_id}")


def _time_filter(start_time: str, end_time: str, status: Optional[str] = None, **extra: str) -> Dict[str, str]:
    """Build query params in the order the API documents: status, end, start, then the rest."""
    params = {}
    if status:
        params["status"] = status
    params["end"] = convert_to_iso8601(end_time)
    params["start"] = convert_to_iso8601(start_time)
    params.update(extra)
    return params
