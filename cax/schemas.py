from pydantic import BaseModel
from typing import Literal

class LimitOrderRequest(BaseModel):
    amount: str
    pair: str  # e.g. "ATN-USD"
    price: str
    side: Literal["bid", "ask"]  # bid = buy, ask = sell

class WithdrawRequest(BaseModel):
    amount: str
    symbol: str
