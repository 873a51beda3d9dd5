from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

OPENAPI_TAGS_METADATA = [
    {
        "name": "health",
        "description": "Runtime liveness check.",
    },
    {
        "name": "users",
        "description": "Custody user lookup by email and user deletion.",
    },
    {
        "name": "wallets",
        "description": "Encrypted wallet key export and wallet policy updates.",
    },
]

API_DESCRIPTION = """
## Wallet Auth BFF

Backend-for-frontend around the Privy wallet custody API.

### Request signing
Every outbound custody call carries three headers:

* `Authorization: Basic base64(app_id:app_secret)`
* `privy-app-id`
* `privy-authorization-signature`: base64 ECDSA P-256 / SHA-256 signature over
  the JSON-canonicalized `{version, method, url, body, headers}` record.

The signing key is read from `PRIVY_SIGNING_KEY` on every call. If it is missing
or malformed the request is rejected before anything is sent upstream.

### Error format
Business errors are returned as:

```json
{"detail": {"code": "SOME_CODE", "message": "Human readable message"}}
```

Upstream rejections also carry the upstream body under `detail.details`.
"""

COMMON_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {
        "description": "Missing bearer token on a protected route.",
        "content": {
            "application/json": {
                "example": {"detail": {"code": "AUTH_BEARER_MISSING", "message": "Unauthorized"}}
            }
        },
    },
    422: {
        "description": "Validation error on the request body.",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "code": "VALIDATION_ERROR",
                        "message": "Missing required field: walletId",
                    }
                }
            }
        },
    },
    500: {
        "description": "Custody credentials or signing key are not configured correctly.",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "code": "SIGNER_MISCONFIGURED",
                        "message": "Signing key is not configured",
                    }
                }
            }
        },
    },
    502: {
        "description": "Custody API failed or returned an unusable response.",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "code": "UPSTREAM_UNREACHABLE",
                        "message": "Failed to delete user",
                    }
                }
            }
        },
    },
}


def install_custom_openapi(app: FastAPI) -> Callable[[], dict[str, Any]]:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        app.openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            summary=app.summary,
            description=app.description,
            routes=app.routes,
            tags=OPENAPI_TAGS_METADATA,
            servers=app.servers,
        )
        return app.openapi_schema

    return custom_openapi
