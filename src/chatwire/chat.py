"""
Chat core — applies inbound envelopes to the roster and timeline.

State machine:
- UNREGISTERED: before the register handshake is sent
- REGISTERED: handshake sent at construction
- ACTIVE: from the first inbound frame on

A malformed frame is dropped and counted; the next frame is processed as
usual. With strict=True the decode error propagates instead.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from chatwire.errors import MalformedEnvelope, MalformedPayload, SendFailure
from chatwire.models.envelope import Envelope, MessageType
from chatwire.models.message import ChatMessage
from chatwire.models.session import Session
from chatwire.models.user import UserProfile
from chatwire.relay import EventRelay
from chatwire.transport.envelope import decode_chat_message, encode, parse_frame
from chatwire.transport.websocket import WebSocketManager

logger = logging.getLogger(__name__)


class CoreState(str, Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    ACTIVE = "active"


@dataclass(frozen=True)
class RenderedEntry:
    """A visible timeline entry. `index` is the position in the full timeline."""

    index: int
    profile: UserProfile
    message: ChatMessage
    kind: str  # "media" | "text"


class ChatInput:
    """Text entry buffer owned by the presentation layer."""

    __slots__ = ("value",)

    def __init__(self, value: str = ""):
        self.value = value

    def clear(self) -> None:
        self.value = ""


class ChatCore:
    def __init__(
        self,
        session: Session,
        connection: WebSocketManager,
        relay: EventRelay,
        *,
        strict: bool = False,
    ):
        self._session = session
        self._conn = connection
        self._relay = relay
        self._strict = strict
        self._state = CoreState.UNREGISTERED
        self._users: list[UserProfile] = []
        self._messages: list[ChatMessage] = []
        self._listeners: list[Callable[[], None]] = []
        self.decode_failures = 0

        self._subscription: Optional[int] = relay.subscribe(self.handle_frame)
        self._register()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> CoreState:
        return self._state

    @property
    def roster(self) -> list[UserProfile]:
        return list(self._users)

    @property
    def timeline(self) -> list[ChatMessage]:
        return list(self._messages)

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call `listener` after every state change. Returns a cleanup function."""
        self._listeners.append(listener)

        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
        return remove

    def _register(self) -> None:
        try:
            self._conn.send(encode(Envelope.register(self._session.username)))
        except SendFailure as e:
            logger.warning("Register handshake for %r not sent: %s", self._session.username, e)
        self._state = CoreState.REGISTERED

    def handle_frame(self, frame: str) -> bool:
        """Apply one inbound frame. Returns True if the roster or timeline changed."""
        self._state = CoreState.ACTIVE
        result = parse_frame(frame)
        envelope = result.envelope
        if envelope is None:
            return self._reject(frame, result.error)  # type: ignore[arg-type]

        kind = envelope.kind
        if kind is MessageType.USERS:
            self._users = [UserProfile.for_name(name) for name in envelope.names]
        elif kind is MessageType.MESSAGE:
            try:
                message = decode_chat_message(envelope.data)
            except MalformedPayload as e:
                return self._reject(frame, e)
            self._messages.append(message)
        else:
            logger.debug("Ignoring %r envelope", envelope.message_type)
            return False

        self._notify()
        return True

    def _reject(self, frame: str, error: MalformedEnvelope) -> bool:
        self.decode_failures += 1
        logger.warning("Dropping frame (%s): %s: %.200s", error.code, error, frame)
        if self._strict:
            raise error
        return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def render(self) -> list[RenderedEntry]:
        """Timeline entries whose sender is in the current roster.

        Entries from senders not in the roster stay in the timeline but are
        left out here.
        """
        profiles: dict[str, UserProfile] = {}
        for profile in self._users:
            profiles.setdefault(profile.name, profile)

        entries = []
        for index, message in enumerate(self._messages):
            profile = profiles.get(message.sender)
            if profile is None:
                continue
            kind = "media" if message.is_media else "text"
            entries.append(RenderedEntry(index=index, profile=profile, message=message, kind=kind))
        return entries

    def send_message(self, text: str) -> bool:
        """Fire-and-forget send. Returns False if the frame was dropped."""
        try:
            self._conn.send(encode(Envelope.message(text)))
        except SendFailure as e:
            logger.warning("Message dropped: %s", e)
            return False
        return True

    def submit(self, chat_input: ChatInput) -> bool:
        """Send the input's text, then clear it whether or not the send succeeded."""
        sent = self.send_message(chat_input.value)
        chat_input.clear()
        return sent

    def close(self) -> None:
        if self._subscription is not None:
            self._relay.unsubscribe(self._subscription)
            self._subscription = None
        self._listeners.clear()
