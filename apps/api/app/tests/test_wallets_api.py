import json

import httpx
from fastapi.testclient import TestClient

EXPORT_BODY = {"walletId": "w_1", "address": "0xabc", "publicKey": "recipient-pk"}


def test_export_wallet_requires_bearer_token(client: TestClient, custody) -> None:
    response = client.post("/api/export-wallet", json=EXPORT_BODY)

    assert response.status_code == 401
    assert custody.requests == []


def test_export_wallet_relays_ciphertext(
    client: TestClient, custody, bearer, signature_verifies
) -> None:
    custody.handler = lambda request: httpx.Response(
        200,
        json={"encryption_type": "HPKE", "encapsulated_key": "ek", "ciphertext": "ct"},
    )

    response = client.post("/api/export-wallet", json=EXPORT_BODY, headers=bearer)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "encryptedData": {"encapsulated_key": "ek", "ciphertext": "ct"},
    }

    [upstream] = custody.requests
    assert upstream.method == "POST"
    assert str(upstream.url) == "http://custody.test/v1/wallets/w_1/export"
    body = json.loads(upstream.content)
    assert body == {"encryption_type": "HPKE", "recipient_public_key": "recipient-pk"}
    assert signature_verifies(upstream, body)


def test_export_wallet_incomplete_upstream_response(client: TestClient, custody, bearer) -> None:
    custody.handler = lambda request: httpx.Response(200, json={"encapsulated_key": "ek"})

    response = client.post("/api/export-wallet", json=EXPORT_BODY, headers=bearer)

    assert response.status_code == 502
    assert response.json()["detail"]["code"] == "UPSTREAM_INVALID_RESPONSE"


def test_export_wallet_missing_public_key(client: TestClient, custody, bearer) -> None:
    response = client.post(
        "/api/export-wallet", json={"walletId": "w_1", "address": "0xabc"}, headers=bearer
    )

    assert response.status_code == 422
    assert "publicKey" in response.json()["detail"]["message"]
    assert custody.requests == []


def test_update_wallet_policy_signs_patch(client: TestClient, custody, signature_verifies) -> None:
    custody.handler = lambda request: httpx.Response(
        200, json={"id": "w_1", "policy_ids": ["p1"], "owner_id": "o1"}
    )

    response = client.post(
        "/api/update-wallet-policy",
        json={"walletId": "w_1", "policyIds": ["p1"], "ownerId": "o1"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "wallet": {"id": "w_1", "policy_ids": ["p1"], "owner_id": "o1"},
    }

    [upstream] = custody.requests
    assert upstream.method == "PATCH"
    assert str(upstream.url) == "http://custody.test/v1/wallets/w_1"
    body = json.loads(upstream.content)
    assert body == {"policy_ids": ["p1"], "owner_id": "o1"}
    assert signature_verifies(upstream, body)


def test_update_wallet_policy_without_owner(client: TestClient, custody, signature_verifies) -> None:
    custody.handler = lambda request: httpx.Response(200, json={"id": "w_1", "policy_ids": []})

    response = client.post("/api/update-wallet-policy", json={"walletId": "w_1", "policyIds": []})

    assert response.status_code == 200
    [upstream] = custody.requests
    assert json.loads(upstream.content) == {"policy_ids": []}
    assert signature_verifies(upstream, {"policy_ids": []})


def test_update_wallet_policy_requires_policy_array(client: TestClient, custody) -> None:
    response = client.post(
        "/api/update-wallet-policy", json={"walletId": "w_1", "policyIds": "p1"}
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "VALIDATION_ERROR"
    assert custody.requests == []
