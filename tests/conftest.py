import json
import httpx
import pytest

# Hardhat development account #0, never funded on a real network
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TEST_BASE_URL = "https://cax.test/api"


class FakeExchange:
    """
    httpx.MockTransport handler that records every request.
    /apikeys issues `apikey`; other paths answer from `responses` (keyed by path
    below the base URL) or with an empty object.
    """
    def __init__(self, apikey: str = "issued-key", responses: dict = None, status_codes: dict = None):
        self.apikey = apikey
        self.responses = responses or {}
        self.status_codes = status_codes or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/api"):]
        status = self.status_codes.get(path, 200)
        if status >= 400:
            return httpx.Response(status, json={"message": "rejected"})
        if path == "/apikeys":
            return httpx.Response(200, json={"apikey": self.apikey})
        return httpx.Response(200, json=self.responses.get(path, {}))

    def paths(self):
        return [r.url.path[len("/api"):] for r in self.requests]

    def body(self, index: int):
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_exchange():
    return FakeExchange()


@pytest.fixture
def make_client(fake_exchange):
    from cax.exchanges.cax import CaxClient

    def _make(api_key=None, exchange=None):
        return CaxClient(
            private_key=TEST_PRIVATE_KEY,
            api_key=api_key,
            base_url=TEST_BASE_URL,
            transport=httpx.MockTransport(exchange or fake_exchange),
        )
    return _make
