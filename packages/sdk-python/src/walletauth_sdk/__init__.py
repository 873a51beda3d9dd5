from walletauth_sdk.canonical import canonical_bytes, canonicalize
from walletauth_sdk.client import (
    AsyncPrivyClient,
    PrivyClient,
    basic_auth_header,
    build_request_headers,
)
from walletauth_sdk.crypto import (
    APP_ID_HEADER,
    SIGNATURE_HEADER,
    build_signable_payload,
    generate_keys,
    load_signing_key,
    sha256_hex,
    sign_request,
    verify_signature,
    wrap_pem,
)
from walletauth_sdk.exceptions import (
    CanonicalizationError,
    ConfigurationError,
    SigningError,
    WalletAuthError,
)

__all__ = [
    "canonicalize",
    "canonical_bytes",
    "generate_keys",
    "sha256_hex",
    "wrap_pem",
    "load_signing_key",
    "build_signable_payload",
    "sign_request",
    "verify_signature",
    "basic_auth_header",
    "build_request_headers",
    "PrivyClient",
    "AsyncPrivyClient",
    "APP_ID_HEADER",
    "SIGNATURE_HEADER",
    "WalletAuthError",
    "ConfigurationError",
    "CanonicalizationError",
    "SigningError",
]
