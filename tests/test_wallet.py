import pytest
from eth_account import Account
from eth_account.messages import encode_defunct
from cax.wallet import Wallet
from tests.conftest import TEST_PRIVATE_KEY, TEST_ADDRESS

def test_address_derivation():
    wallet = Wallet(TEST_PRIVATE_KEY)
    assert wallet.address == TEST_ADDRESS

def test_signature_recovers_to_address():
    wallet = Wallet(TEST_PRIVATE_KEY)
    message = '{"nonce":"1700000000000"}'
    sig = wallet.sign_message(message)

    assert sig.startswith("0x")
    assert len(sig) == 2 + 130  # r (32) + s (32) + v (1) bytes
    recovered = Account.recover_message(encode_defunct(text=message), signature=sig)
    assert recovered == wallet.address

def test_signature_deterministic():
    wallet = Wallet(TEST_PRIVATE_KEY)
    assert wallet.sign_message("hello") == wallet.sign_message("hello")
    assert wallet.sign_message("hello") != wallet.sign_message("hello!")

def test_invalid_key_rejected():
    with pytest.raises(ValueError):
        Wallet("not-a-key")
