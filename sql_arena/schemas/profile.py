from pydantic import Field, field_validator

from .common import CamelModel, FrozenCamelModel
from .quiz import Difficulty


class UserProfile(FrozenCamelModel):
    name: str = ""
    current_score: int = 0
    streak: int = 0
    selected_difficulty: Difficulty = Difficulty.intermediate


class ProfileUpdateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=64)
    difficulty: Difficulty = Difficulty.intermediate

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name must not be blank")
        return cleaned


class DifficultyUpdateRequest(CamelModel):
    difficulty: Difficulty


class HomeResponse(CamelModel):
    active: bool
    profile: UserProfile
