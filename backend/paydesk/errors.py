"""
Domain Errors — Failure taxonomy shared by every service.
Rendered by the API as ErrorResponse(detail, error_code).
"""


class PayDeskError(Exception):
    """Base class for all errors raised by the payments core."""

    status_code: int = 400
    error_code: str = "ERROR"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(PayDeskError):
    """Malformed input. Surfaced verbatim to the user."""

    status_code = 422
    error_code = "VALIDATION_ERROR"


class AuthorizationError(PayDeskError):
    """Capability or ownership violation. The user only sees a generic denial."""

    status_code = 403
    error_code = "AUTHORIZATION_ERROR"
    public_detail = "Not authorized to perform this action"


class ConflictError(PayDeskError):
    """Uniqueness violation on registration or ledger insert."""

    status_code = 409
    error_code = "CONFLICT"


class ConfigurationError(PayDeskError):
    """Checkout attempted before the payment provider was configured."""

    status_code = 412
    error_code = "NOT_CONFIGURED"


class ProviderError(PayDeskError):
    """External payment gateway failure.

    ``diagnostic`` keeps the provider's original message for logging;
    ``detail`` is the sanitized text shown to the user.
    """

    status_code = 502
    error_code = "PROVIDER_ERROR"

    def __init__(self, diagnostic: str, detail: str = "Payment provider is unavailable. Please try again."):
        super().__init__(detail)
        self.diagnostic = diagnostic


class RateLimitError(PayDeskError):
    """Caller exceeded the request budget for a throttled route."""

    status_code = 429
    error_code = "RATE_LIMITED"
