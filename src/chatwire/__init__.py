"""
chatwire — real-time chat client core.

Keeps a live roster and timeline in sync with a WebSocket chat server.
"""

from chatwire.chat import ChatCore, ChatInput, CoreState, RenderedEntry
from chatwire.client import AsyncChatClient
from chatwire.errors import ChatWireError, ConnectionFailure, MalformedEnvelope, MalformedPayload, SendFailure
from chatwire.models.envelope import Envelope, MessageType
from chatwire.models.message import ChatMessage
from chatwire.models.session import Session
from chatwire.models.user import UserProfile
from chatwire.relay import EventRelay

__version__ = "0.1.0"
__all__ = [
    "AsyncChatClient",
    "ChatCore",
    "ChatInput",
    "CoreState",
    "RenderedEntry",
    "EventRelay",
    "Envelope",
    "MessageType",
    "ChatMessage",
    "UserProfile",
    "Session",
    "ChatWireError",
    "ConnectionFailure",
    "SendFailure",
    "MalformedEnvelope",
    "MalformedPayload",
]
