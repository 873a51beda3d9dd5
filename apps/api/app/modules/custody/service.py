import logging
from collections.abc import Callable
from time import perf_counter
from typing import Any, TypeVar

import httpx
from fastapi import HTTPException, status

from walletauth_sdk.client import PrivyClient

from app.core.config import get_settings
from app.core.signing import get_authorization_signature

logger = logging.getLogger("walletauth.custody")

T = TypeVar("T")


def get_custody_client() -> PrivyClient:
    config = get_settings()
    if not config.privy_app_id or not config.app_secret:
        logger.error("custody_credentials_missing", extra={"event_name": "custody_credentials_missing"})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "code": "SERVER_MISCONFIGURED",
                "message": "Server misconfiguration: Missing Privy credentials",
            },
        )

    return PrivyClient(
        app_id=config.privy_app_id,
        app_secret=config.app_secret,
        signer=get_authorization_signature,
        base_url=config.privy_api_base_url,
        timeout=config.custody_timeout_seconds,
    )


def _safe_json(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return {"raw": resp.text}


def _call(operation: str, message: str, fn: Callable[[], T]) -> T:
    start = perf_counter()
    try:
        result = fn()
    except httpx.HTTPStatusError as exc:
        upstream_status = exc.response.status_code
        logger.warning(
            "custody_call_failed",
            extra={
                "event_name": "custody_call_failed",
                "operation": operation,
                "upstream_status": upstream_status,
                "latency_ms": round((perf_counter() - start) * 1000, 2),
            },
        )
        details = _safe_json(exc.response)
        if upstream_status >= 500:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={"code": "UPSTREAM_ERROR", "message": message, "details": details},
            ) from exc
        raise HTTPException(
            status_code=upstream_status,
            detail={"code": "UPSTREAM_REJECTED", "message": message, "details": details},
        ) from exc
    except httpx.TimeoutException as exc:
        logger.warning(
            "custody_call_failed",
            extra={"event_name": "custody_call_failed", "operation": operation},
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail={"code": "UPSTREAM_TIMEOUT", "message": message},
        ) from exc
    except httpx.RequestError as exc:
        logger.warning(
            "custody_call_failed",
            extra={"event_name": "custody_call_failed", "operation": operation},
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "UPSTREAM_UNREACHABLE", "message": message},
        ) from exc

    logger.info(
        "custody_call",
        extra={
            "event_name": "custody_call",
            "operation": operation,
            "status": "ok",
            "latency_ms": round((perf_counter() - start) * 1000, 2),
        },
    )
    return result


def find_user_by_email(client: PrivyClient, email: str) -> dict[str, Any]:
    user = _call(
        "get_user_by_email",
        "Failed to query user by email",
        lambda: client.get_user_by_email(email),
    )
    if not isinstance(user, dict) or not user.get("id"):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "USER_NOT_FOUND", "message": "No user found with this email address"},
        )

    wallet = next(
        (
            account
            for account in user.get("linked_accounts") or []
            if account.get("type") == "wallet"
        ),
        None,
    )
    return {"id": user["id"], "email": email, "wallet": wallet}


def delete_user(client: PrivyClient, user_id: str) -> None:
    _call("delete_user", "Failed to delete user", lambda: client.delete_user(user_id))


def export_wallet(client: PrivyClient, wallet_id: str, recipient_public_key: str) -> dict[str, str]:
    exported = _call(
        "export_wallet",
        "Failed to export wallet private key",
        lambda: client.export_wallet(wallet_id, recipient_public_key),
    )
    if not isinstance(exported, dict) or not exported.get("encapsulated_key") or not exported.get("ciphertext"):
        logger.warning(
            "custody_call_failed",
            extra={"event_name": "custody_call_failed", "operation": "export_wallet"},
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "code": "UPSTREAM_INVALID_RESPONSE",
                "message": "Export response missing expected data",
            },
        )
    return {"encapsulated_key": exported["encapsulated_key"], "ciphertext": exported["ciphertext"]}


def update_wallet_policy(
    client: PrivyClient, wallet_id: str, policy_ids: list[str], owner_id: str | None
) -> dict[str, Any]:
    return _call(
        "update_wallet",
        "Failed to update wallet",
        lambda: client.update_wallet(wallet_id, policy_ids, owner_id),
    )
