from typing import List

from pydantic import Field

from .common import FrozenCamelModel


class LeaderboardEntry(FrozenCamelModel):
    name: str
    score: int
    rank: int = 0
    badges: List[str] = Field(default_factory=list)
    is_current_user: bool = False


class LeaderboardResponse(FrozenCamelModel):
    entries: List[LeaderboardEntry]
