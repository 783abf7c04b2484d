"""Errors raised by the gateway and rendered as structured JSON responses."""

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Base error carrying the HTTP status and error code of the response."""

    status_code = 500
    code = "GATEWAY_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ClientNotReadyError(GatewayError):
    status_code = 503
    code = "CLIENT_NOT_READY"

    def __init__(self, message: str = "WhatsApp client not ready", details: Optional[Any] = None):
        super().__init__(message, details)


class ClientOperationError(GatewayError):
    """The WhatsApp client raised while performing an operation."""
    status_code = 500
    code = "CLIENT_ERROR"


class NotAGroupError(GatewayError):
    status_code = 400
    code = "NOT_A_GROUP"

    def __init__(self, message: str = "This can only be used in a group", details: Optional[Any] = None):
        super().__init__(message, details)


class NotOwnMessageError(GatewayError):
    status_code = 400
    code = "NOT_OWN_MESSAGE"


class NoMediaError(GatewayError):
    status_code = 400
    code = "NO_MEDIA"

    def __init__(self, message: str = "Message does not have media", details: Optional[Any] = None):
        super().__init__(message, details)


class NoQuotedMessageError(GatewayError):
    status_code = 400
    code = "NO_QUOTED_MESSAGE"

    def __init__(self, message: str = "Message does not have quoted message", details: Optional[Any] = None):
        super().__init__(message, details)


class UploadTooLargeError(GatewayError):
    status_code = 413
    code = "FILE_TOO_LARGE"


class ClientSetupError(GatewayError):
    """The WhatsApp client could not be created."""
    status_code = 500
    code = "CLIENT_SETUP_ERROR"
