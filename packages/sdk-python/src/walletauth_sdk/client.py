import base64
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote

import httpx

from walletauth_sdk.canonical import canonical_bytes
from walletauth_sdk.crypto import APP_ID_HEADER, SIGNATURE_HEADER, sign_request
from walletauth_sdk.types import User, Wallet, WalletExportResponse

DEFAULT_BASE_URL = "https://auth.privy.io"

# (url, body, method) -> base64 signature
Signer = Callable[[str, Mapping[str, Any], str], str]


def _segment(value: str) -> str:
    # Path ids such as "did:privy:..." keep ":"; "/", "?", "#" and spaces are escaped.
    return quote(value, safe=":@")


def basic_auth_header(app_id: str, app_secret: str) -> str:
    token = base64.b64encode(f"{app_id}:{app_secret}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def build_request_headers(*, app_id: str, app_secret: str, signature: str) -> dict[str, str]:
    return {
        "Authorization": basic_auth_header(app_id, app_secret),
        APP_ID_HEADER: app_id,
        SIGNATURE_HEADER: signature,
        "Content-Type": "application/json",
    }


class _SignedRequestBuilder:
    """Shared request construction for the sync and async clients.

    Every request is signed over exactly the URL, method and body that will be
    transmitted, before any network I/O happens. Pass ``signer`` to delegate
    signing (e.g. to read the key from configuration per call); otherwise
    ``signing_key`` is used directly.
    """

    def __init__(
        self,
        *,
        app_id: str,
        app_secret: str,
        signing_key: str | None,
        signer: Signer | None,
        base_url: str,
        timeout: float,
    ) -> None:
        self._app_id = app_id
        self._app_secret = app_secret
        self._signing_key = signing_key
        self._signer = signer
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _sign(self, url: str, body: Mapping[str, Any], method: str) -> str:
        if self._signer is not None:
            return self._signer(url, body, method)
        signed = sign_request(
            url=url,
            body=body,
            method=method,
            app_id=self._app_id,
            signing_key=self._signing_key,
        )
        return signed["signature_base64"]

    def _build(self, method: str, path: str, body: Mapping[str, Any]) -> dict[str, Any]:
        # Sign the URL exactly as httpx will put it on the wire.
        url = str(httpx.URL(f"{self._base_url}{path}"))
        request: dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": build_request_headers(
                app_id=self._app_id,
                app_secret=self._app_secret,
                signature=self._sign(url, body, method),
            ),
        }
        # Bodiless requests are signed over an empty object but send nothing;
        # others send the canonical bytes so the wire body matches the signed one.
        if method != "DELETE":
            request["content"] = canonical_bytes(body)
        return request

    def _user_by_email(self, email: str) -> dict[str, Any]:
        return self._build("POST", "/api/v1/users/email/address", {"type": "email", "address": email})

    def _delete_user(self, user_id: str) -> dict[str, Any]:
        return self._build("DELETE", f"/api/v1/users/{_segment(user_id)}", {})

    def _export_wallet(self, wallet_id: str, recipient_public_key: str) -> dict[str, Any]:
        return self._build(
            "POST",
            f"/v1/wallets/{_segment(wallet_id)}/export",
            {"encryption_type": "HPKE", "recipient_public_key": recipient_public_key},
        )

    def _update_wallet(
        self, wallet_id: str, policy_ids: list[str], owner_id: str | None
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"policy_ids": list(policy_ids)}
        if owner_id is not None:
            body["owner_id"] = owner_id
        return self._build("PATCH", f"/v1/wallets/{_segment(wallet_id)}", body)


class PrivyClient(_SignedRequestBuilder):
    def __init__(
        self,
        *,
        app_id: str,
        app_secret: str,
        signing_key: str | None = None,
        signer: Signer | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(
            app_id=app_id,
            app_secret=app_secret,
            signing_key=signing_key,
            signer=signer,
            base_url=base_url,
            timeout=timeout,
        )
        self._transport = transport

    def _send(self, request: dict[str, Any]) -> httpx.Response:
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            response = client.request(**request)
            response.raise_for_status()
            return response

    def get_user_by_email(self, email: str) -> User:
        return self._send(self._user_by_email(email)).json()

    def delete_user(self, user_id: str) -> None:
        self._send(self._delete_user(user_id))

    def export_wallet(self, wallet_id: str, recipient_public_key: str) -> WalletExportResponse:
        return self._send(self._export_wallet(wallet_id, recipient_public_key)).json()

    def update_wallet(
        self, wallet_id: str, policy_ids: list[str], owner_id: str | None = None
    ) -> Wallet:
        return self._send(self._update_wallet(wallet_id, policy_ids, owner_id)).json()


class AsyncPrivyClient(_SignedRequestBuilder):
    def __init__(
        self,
        *,
        app_id: str,
        app_secret: str,
        signing_key: str | None = None,
        signer: Signer | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            app_id=app_id,
            app_secret=app_secret,
            signing_key=signing_key,
            signer=signer,
            base_url=base_url,
            timeout=timeout,
        )
        self._transport = transport

    async def _send(self, request: dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.request(**request)
            response.raise_for_status()
            return response

    async def get_user_by_email(self, email: str) -> User:
        return (await self._send(self._user_by_email(email))).json()

    async def delete_user(self, user_id: str) -> None:
        await self._send(self._delete_user(user_id))

    async def export_wallet(self, wallet_id: str, recipient_public_key: str) -> WalletExportResponse:
        return (await self._send(self._export_wallet(wallet_id, recipient_public_key))).json()

    async def update_wallet(
        self, wallet_id: str, policy_ids: list[str], owner_id: str | None = None
    ) -> Wallet:
        return (await self._send(self._update_wallet(wallet_id, policy_ids, owner_id))).json()
