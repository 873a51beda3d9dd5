from typing import Any, NotRequired, TypedDict

SignablePayloadHeaders = TypedDict("SignablePayloadHeaders", {"privy-app-id": str})


class SignablePayload(TypedDict):
    version: int
    method: str
    url: str
    body: dict[str, Any]
    headers: SignablePayloadHeaders


class SignRequestResult(TypedDict):
    signature_base64: str
    canonical_json: str
    sha256_hex: str


class GeneratedKeys(TypedDict):
    private_key_base64: str
    public_key_pem: str


class LinkedAccount(TypedDict, total=False):
    type: str
    address: str
    chain_type: str
    wallet_client_type: str
    id: str


class User(TypedDict):
    id: str
    created_at: NotRequired[int]
    linked_accounts: list[LinkedAccount]


class WalletExportResponse(TypedDict):
    encapsulated_key: str
    ciphertext: str
    encryption_type: NotRequired[str]


class Wallet(TypedDict, total=False):
    id: str
    address: str
    chain_type: str
    policy_ids: list[str]
    owner_id: str | None
    created_at: int
