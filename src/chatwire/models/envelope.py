"""
Wire envelope — `{"messageType", "dataArray"?, "data"?}`.

The model mirrors the wire record; `kind` gives the tagged-union view.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageType(str, Enum):
    USERS = "users"
    REGISTER = "register"
    MESSAGE = "message"


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    message_type: str = Field(alias="messageType")
    data_array: Optional[list[str]] = Field(default=None, alias="dataArray")  # "users" only
    data: Optional[str] = None  # "register" and "message"

    @classmethod
    def register(cls, username: str) -> "Envelope":
        return cls(message_type=MessageType.REGISTER.value, data=username)

    @classmethod
    def users(cls, names: list[str]) -> "Envelope":
        return cls(message_type=MessageType.USERS.value, data_array=list(names))

    @classmethod
    def message(cls, text: str) -> "Envelope":
        return cls(message_type=MessageType.MESSAGE.value, data=text)

    @property
    def kind(self) -> Optional[MessageType]:
        """The recognized kind, or None for a kind this client does not handle."""
        try:
            return MessageType(self.message_type)
        except ValueError:
            return None

    @property
    def names(self) -> list[str]:
        return list(self.data_array or [])

    @property
    def text(self) -> str:
        return self.data or ""
