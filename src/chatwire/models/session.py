"""
Session identity — supplied once by the host, never changed.
"""

from pydantic import BaseModel, ConfigDict


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
