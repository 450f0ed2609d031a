import os
import sys
import uuid

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from sql_arena.db.session import SessionLocal, init_db
from sql_arena.schemas.quiz import Difficulty
from sql_arena.services.profile_service import ProfileState, load_profile
from sql_arena.services.storage import PROFILE_KEY, SqlKeyValueStore


def main() -> None:
    init_db()
    store = SqlKeyValueStore(SessionLocal)
    saved = store.get(PROFILE_KEY)
    try:
        state = ProfileState.load(store)
        state.set_identity(f"verify-{uuid.uuid4().hex[:8]}", Difficulty.advanced)
        state.record_correct_answer(75)
        loaded = load_profile(store)

        print(
            "name={name} score={score} streak={streak} difficulty={difficulty} round_trip={ok}".format(
                name=loaded.name,
                score=loaded.current_score,
                streak=loaded.streak,
                difficulty=loaded.selected_difficulty.value,
                ok=loaded == state.profile,
            )
        )
    finally:
        if saved is None:
            store.remove(PROFILE_KEY)
        else:
            store.set(PROFILE_KEY, saved)


if __name__ == "__main__":
    main()
