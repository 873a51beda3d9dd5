import logging
from collections.abc import Mapping
from typing import Any

from walletauth_sdk.crypto import sign_request
from walletauth_sdk.exceptions import ConfigurationError

from app.core.config import get_settings

logger = logging.getLogger("walletauth.signing")


def get_authorization_signature(url: str, body: Mapping[str, Any], method: str = "POST") -> str:
    """Return the base64 ``privy-authorization-signature`` for an outbound request.

    App id and signing key come from ``PRIVY_APP_ID`` and ``PRIVY_SIGNING_KEY``
    at call time. Failures propagate; nothing is signed with a fallback key.
    """
    config = get_settings()
    try:
        signed = sign_request(
            url=url,
            body=body,
            method=method,
            app_id=config.privy_app_id,
            signing_key=config.signing_key,
        )
    except ConfigurationError:
        logger.error(
            "signer_misconfigured",
            extra={"event_name": "signer_misconfigured", "method": method},
        )
        raise
    return signed["signature_base64"]
