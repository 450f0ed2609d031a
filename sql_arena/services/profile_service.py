import logging
import threading
from typing import Any, Callable, Dict

from pydantic import ValidationError

from sql_arena.schemas.profile import UserProfile
from sql_arena.schemas.quiz import Difficulty, next_difficulty
from sql_arena.services.storage import PROFILE_KEY, KeyValueStore

logger = logging.getLogger(__name__)


def load_profile(store: KeyValueStore) -> UserProfile:
    """Read the saved profile; anything unreadable counts as no saved profile."""
    try:
        raw = store.get(PROFILE_KEY)
    except Exception as exc:
        logger.warning("Profile storage unavailable, starting with defaults: %s", exc)
        return UserProfile()
    if not raw:
        return UserProfile()
    try:
        return UserProfile.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Saved profile is unreadable, starting with defaults: %s", exc)
        return UserProfile()


class ProfileState:
    """The learner profile plus its write-through persistence.

    Every mutation builds a new full record and stores it before it becomes the
    current value.
    """

    def __init__(self, store: KeyValueStore, profile: UserProfile | None = None):
        self.store = store
        self._profile = profile if profile is not None else UserProfile()
        self._lock = threading.Lock()

    @classmethod
    def load(cls, store: KeyValueStore) -> "ProfileState":
        return cls(store, load_profile(store))

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def is_active(self) -> bool:
        return bool(self._profile.name)

    def _update(self, changes: Callable[[UserProfile], Dict[str, Any]]) -> UserProfile:
        with self._lock:
            updated = self._profile.model_copy(update=changes(self._profile))
            self.store.set(PROFILE_KEY, updated.model_dump_json(by_alias=True))
            self._profile = updated
            return updated

    def set_identity(self, name: str, difficulty: Difficulty) -> UserProfile:
        return self._update(lambda _: {"name": name, "selected_difficulty": difficulty})

    def record_correct_answer(self, points: float) -> UserProfile:
        return self._update(
            lambda current: {
                "current_score": current.current_score + int(round(points)),
                "streak": current.streak + 1,
            }
        )

    def set_difficulty(self, difficulty: Difficulty) -> UserProfile:
        return self._update(lambda _: {"selected_difficulty": difficulty})

    def level_up(self) -> UserProfile:
        if next_difficulty(self._profile.selected_difficulty) is None:
            return self._profile
        return self._update(
            lambda current: {
                "selected_difficulty": next_difficulty(current.selected_difficulty) or current.selected_difficulty
            }
        )

    def reset(self) -> UserProfile:
        with self._lock:
            self.store.remove(PROFILE_KEY)
            self._profile = UserProfile()
            return self._profile
