"""
Chat message payload carried inside a `message` envelope.
"""

from pydantic import BaseModel, ConfigDict, Field

MEDIA_SUFFIX = ".gif"


def is_media(text: str) -> bool:
    return text.endswith(MEDIA_SUFFIX)


class ChatMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sender: str = Field(alias="from")
    message: str

    @property
    def is_media(self) -> bool:
        return is_media(self.message)
