"""Error taxonomy surfaced by the gateway as ``{"error": {"message": ...}}`` bodies."""

from typing import Optional


class GatewayError(Exception):
    """Base exception carrying the HTTP status it maps to."""

    status_code: int = 500
    default_message: str = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class MissingParameter(GatewayError):
    """The caller omitted a required field."""

    status_code = 400
    default_message = "Missing required parameters"


class ExternalProcessorError(GatewayError):
    """The payment processor rejected an operation; its message is relayed as-is."""

    status_code = 400
    default_message = "Payment processor request failed"


class AggregationFailure(GatewayError):
    """Joining concurrent lookups failed unexpectedly."""

    status_code = 500
    default_message = "Failed to load products"


class NotFound(GatewayError):
    status_code = 404
    default_message = "API endpoint not found"
