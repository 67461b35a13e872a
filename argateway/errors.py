"""Error kinds raised by the storage adapter and request validation.

Each error carries a short user-facing ``message``; route handlers turn it
into either a 404 or a ``{"success": false, "message": ...}`` body.
"""


class GatewayError(Exception):
    """Base gateway error."""

    default_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# --- Wallet key (fatal at startup) ---

class KeyMissing(GatewayError):
    default_message = "Arweave keystore not found."


class KeyInvalid(GatewayError):
    default_message = "Arweave keystore is not a valid JWK."


# --- Network ---

class NetworkError(GatewayError):
    default_message = "Arweave network request failed."


class NotFound(GatewayError):
    default_message = "Transaction not found."


class SigningError(GatewayError):
    default_message = "Failed to sign transaction."


# --- Request validation ---

class ValidationError(GatewayError):
    default_message = "Invalid request."


class PayloadTooLarge(ValidationError):
    default_message = "File too large."
