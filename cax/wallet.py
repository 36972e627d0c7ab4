import logging
from eth_account import Account
from eth_account.messages import encode_defunct

logger = logging.getLogger(__name__)

class Wallet:
    """
    Ethereum wallet used to prove address ownership to the exchange.
    Signs plain text messages with the EIP-191 personal message prefix.
    """

    def __init__(self, private_key: str):
        try:
            self._account = Account.from_key(private_key)
        except Exception as e:
            # Never echo the key itself
            logger.error("Failed to load wallet private key")
            raise ValueError(f"Invalid private key: {e}") from e
        self.address = self._account.address

    def sign_message(self, message: str) -> str:
        """Return the 0x-prefixed hex signature over a UTF-8 message."""
        signed = self._account.sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()
