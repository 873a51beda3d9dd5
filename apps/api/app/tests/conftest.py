from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

import httpx
import pytest
from fastapi.testclient import TestClient

from walletauth_sdk.canonical import canonicalize
from walletauth_sdk.client import PrivyClient
from walletauth_sdk.crypto import build_signable_payload, generate_keys, verify_signature
from walletauth_sdk.types import GeneratedKeys

from app.main import app
from app.modules.custody.service import get_custody_client

UPSTREAM_BASE_URL = "http://custody.test"
APP_ID = "app_1"
APP_SECRET = "secret"


@dataclass
class FakeCustody:
    handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})
    requests: list[httpx.Request] = field(default_factory=list)

    def transport(self) -> httpx.MockTransport:
        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.handler(request)

        return httpx.MockTransport(_handle)


@pytest.fixture
def signing_keys() -> GeneratedKeys:
    return generate_keys()


@pytest.fixture
def configured_env(monkeypatch: pytest.MonkeyPatch, signing_keys: GeneratedKeys) -> GeneratedKeys:
    monkeypatch.setenv("PRIVY_APP_ID", APP_ID)
    monkeypatch.setenv("PRIVY_APP_SECRET", APP_SECRET)
    monkeypatch.setenv("PRIVY_SIGNING_KEY", signing_keys["private_key_base64"])
    monkeypatch.setenv("PRIVY_API_BASE_URL", UPSTREAM_BASE_URL)
    return signing_keys


@pytest.fixture
def custody() -> FakeCustody:
    return FakeCustody()


@pytest.fixture
def client(configured_env: GeneratedKeys, custody: FakeCustody) -> Iterator[TestClient]:
    def _client_with_fake_transport() -> PrivyClient:
        privy = get_custody_client()
        privy._transport = custody.transport()
        return privy

    app.dependency_overrides[get_custody_client] = _client_with_fake_transport
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def bearer() -> dict[str, str]:
    return {"Authorization": "Bearer user-session-token"}


@pytest.fixture
def signature_verifies(signing_keys: GeneratedKeys) -> Callable[[httpx.Request, dict[str, object]], bool]:
    def _verify(request: httpx.Request, body: dict[str, object]) -> bool:
        payload = build_signable_payload(
            url=str(request.url), body=body, method=request.method, app_id=APP_ID
        )
        return verify_signature(
            public_key_pem=signing_keys["public_key_pem"],
            signature_base64=request.headers["privy-authorization-signature"],
            canonical_json=canonicalize(payload),
        )

    return _verify
