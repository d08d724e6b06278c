"""
chatwire error types.

Decode errors are frame-local; connection errors end the session.
"""

from typing import Any, Optional


class ChatWireError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ConnectionFailure(ChatWireError):
    """The transport could not be established or was lost."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("connection_failure", message, details)


class SendFailure(ChatWireError):
    """The outbound enqueue was rejected. The message was dropped."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("send_failure", message, details)


class MalformedEnvelope(ChatWireError):
    def __init__(self, message: str, code: str = "malformed_envelope", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class MalformedPayload(MalformedEnvelope):
    """A `message` envelope whose inner payload is not a chat message."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="malformed_payload", details=details)
