from cax.config import settings
from cax.exchanges.cax import CaxClient
import asyncio
import logging

logging.basicConfig(level=settings.LOG_LEVEL)

async def check():
    client = CaxClient()
    print(f"Wallet: {client.address}")

    status = await client.get_exchange_status()
    print(f"Exchange status: {status}")

    symbols = await client.get_symbols()
    print(f"Symbols: {symbols}")

    # Provisions an API key on first use if CAX_API_KEY is empty
    balances = await client.get_balances()
    print(f"Balances: {balances}")

if __name__ == "__main__":
    asyncio.run(check())
