import json
from typing import Any, Dict, List, Optional

import pytest
from sqlalchemy.orm import sessionmaker

from sql_arena.db.session import Base, build_engine
from sql_arena.services.llm.base import ProviderError
from sql_arena.services.storage import SqlKeyValueStore


class ScriptedLLM:
    """Replays queued responses; queued exceptions are raised instead."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    def complete(self, prompt: str, schema: Optional[Dict[str, Any]] = None) -> str:
        self.calls.append({"prompt": prompt, "schema": schema})
        if not self.responses:
            raise ProviderError("no scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


@pytest.fixture
def store():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield SqlKeyValueStore(sessionmaker(bind=engine, autocommit=False, autoflush=False))
    engine.dispose()


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def verdict():
    return {
        "isCorrect": True,
        "scoreAwarded": 80,
        "explanation": "DENSE_RANK keeps ranks sequential.",
        "correctQuery": "SELECT name, DENSE_RANK() OVER (PARTITION BY dept_id ORDER BY salary DESC) FROM employees;",
        "optimizationTip": "Index dept_id, salary.",
        "userFeedback": "Good use of PARTITION BY.",
        "suggestDifficultyIncrease": True,
    }
