from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from sql_arena.db import models

PROFILE_KEY = "sql_arena_profile"
THEORY_KEY_PREFIX = "sql_arena_theory_"


def theory_cache_key(topic_id: str) -> str:
    return f"{THEORY_KEY_PREFIX}{topic_id}"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class SqlKeyValueStore(KeyValueStore):
    """Key-value store backed by the ``kv_store`` table.

    Every call opens its own session and commits before returning, so each
    write replaces the whole value at once.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            entry = db.query(models.KeyValueEntry).filter(models.KeyValueEntry.key == key).first()
            return entry.value if entry else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            entry = db.query(models.KeyValueEntry).filter(models.KeyValueEntry.key == key).first()
            if entry:
                entry.value = value
            else:
                db.add(models.KeyValueEntry(key=key, value=value))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def remove(self, key: str) -> None:
        db = self.session_factory()
        try:
            db.query(models.KeyValueEntry).filter(models.KeyValueEntry.key == key).delete()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
