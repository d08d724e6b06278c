"""
Roster entries.
"""

from pydantic import BaseModel, ConfigDict

AVATAR_URL_TEMPLATE = "https://avatars.dicebear.com/api/adventurer-neutral/{name}.svg"


def avatar_url(name: str) -> str:
    return AVATAR_URL_TEMPLATE.format(name=name)


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    avatar: str

    @classmethod
    def for_name(cls, name: str) -> "UserProfile":
        return cls(name=name, avatar=avatar_url(name))
