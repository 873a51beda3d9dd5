class WalletAuthError(Exception):
    """Base class for request-signing failures."""


class ConfigurationError(WalletAuthError):
    """App id or signing key is missing or malformed."""


class CanonicalizationError(WalletAuthError):
    """Request body cannot be serialized canonically."""


class SigningError(WalletAuthError):
    """The cryptographic sign operation failed."""
