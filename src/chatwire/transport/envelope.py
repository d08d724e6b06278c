"""
Envelope encoding and decoding.

`decode` raises; `parse_frame` returns a `DecodeResult` so callers can handle a
bad frame without unwinding.
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import ValidationError

from chatwire.errors import MalformedEnvelope, MalformedPayload
from chatwire.models.envelope import Envelope
from chatwire.models.message import ChatMessage


@dataclass(frozen=True)
class DecodeResult:
    envelope: Optional[Envelope] = None
    error: Optional[MalformedEnvelope] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def encode(envelope: Envelope) -> str:
    """Serialize an envelope to frame text. Absent fields are omitted."""
    return envelope.model_dump_json(by_alias=True, exclude_none=True)


def decode(text: Union[str, bytes]) -> Envelope:
    """Parse frame text into an envelope.

    Unknown `messageType` values decode fine (`kind` is None); anything that is
    not a JSON object of the envelope shape raises MalformedEnvelope.
    """
    try:
        return Envelope.model_validate_json(text)
    except ValidationError as e:
        raise MalformedEnvelope(
            f"Malformed envelope: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e


def encode_chat_message(message: ChatMessage) -> str:
    return message.model_dump_json(by_alias=True)


def decode_chat_message(data: Optional[str]) -> ChatMessage:
    """Decode the inner payload of a `message` envelope."""
    if data is None:
        raise MalformedPayload("Message envelope carries no payload")
    try:
        return ChatMessage.model_validate_json(data)
    except ValidationError as e:
        raise MalformedPayload(
            f"Malformed chat payload: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e


def parse_frame(text: Union[str, bytes]) -> DecodeResult:
    try:
        return DecodeResult(envelope=decode(text))
    except MalformedEnvelope as e:
        return DecodeResult(error=e)
