import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from sql_arena.schemas.profile import UserProfile
from sql_arena.schemas.quiz import EvaluationResult, QuizQuestion
from sql_arena.services.evaluation_service import evaluate_submission
from sql_arena.services.llm.base import LLMClient
from sql_arena.services.profile_service import ProfileState
from sql_arena.services.question_service import provide_question

logger = logging.getLogger(__name__)


class QuizSessionError(Exception):
    def __init__(
        self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


@dataclass(frozen=True)
class SubmissionOutcome:
    question: QuizQuestion
    result: EvaluationResult
    applied: bool
    profile: UserProfile


@dataclass(frozen=True)
class LevelUpOutcome:
    question: Optional[QuizQuestion]
    difficulty_changed: bool
    profile: UserProfile


class QuizSession:
    """Current-question state for the quiz view.

    Question loads and evaluations each carry a generation number. A result is
    only installed (or scored) when no newer request of the same kind, and for
    evaluations no newer question load, started while it was in flight.
    """

    def __init__(self, llm: LLMClient, profile_state: ProfileState, rng: Optional[random.Random] = None):
        self.llm = llm
        self.profile_state = profile_state
        self.rng = rng
        self._lock = threading.Lock()
        self._question: Optional[QuizQuestion] = None
        self._topic_id: Optional[str] = None
        self._question_generation = 0
        self._evaluation_generation = 0

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        return self._question

    def question_for(self, topic_id: str) -> Optional[QuizQuestion]:
        """The loaded question, or None when nothing is loaded for ``topic_id``."""
        with self._lock:
            if self._topic_id != topic_id:
                return None
            return self._question

    def load_question(self, topic_id: str) -> QuizQuestion:
        difficulty = self.profile_state.profile.selected_difficulty
        with self._lock:
            self._question_generation += 1
            generation = self._question_generation

        question = provide_question(self.llm, topic_id, difficulty, self.rng)

        with self._lock:
            if generation != self._question_generation:
                logger.info("Discarding superseded question load for topic=%s", topic_id)
                return self._question or question
            self._question = question
            self._topic_id = topic_id
            return question

    def first_hint(self, topic_id: str) -> Tuple[QuizQuestion, Optional[str]]:
        """Only the first hint of a question is ever shown."""
        question = self._require_question(topic_id)
        return question, (question.hints[0] if question.hints else None)

    def submit(self, topic_id: str, query_text: str) -> SubmissionOutcome:
        if not (query_text or "").strip():
            raise QuizSessionError(422, "QUERY_REQUIRED", "Query text is required", {"topic_id": topic_id})

        with self._lock:
            question = self._require_question_locked(topic_id)
            self._evaluation_generation += 1
            evaluation_generation = self._evaluation_generation
            question_generation = self._question_generation

        result = evaluate_submission(self.llm, question, query_text)

        with self._lock:
            current = (
                evaluation_generation == self._evaluation_generation
                and question_generation == self._question_generation
            )
        if not current:
            logger.info("Discarding superseded evaluation for question=%s", question.id)
            return SubmissionOutcome(question, result, False, self.profile_state.profile)

        profile = self.profile_state.profile
        if result.is_correct:
            profile = self.profile_state.record_correct_answer(result.score_awarded)
        return SubmissionOutcome(question, result, True, profile)

    def level_up_and_reload(self, topic_id: str) -> LevelUpOutcome:
        before = self.profile_state.profile.selected_difficulty
        profile = self.profile_state.level_up()
        if profile.selected_difficulty == before:
            return LevelUpOutcome(None, False, profile)
        question = self.load_question(topic_id)
        return LevelUpOutcome(question, True, self.profile_state.profile)

    def _require_question(self, topic_id: str) -> QuizQuestion:
        with self._lock:
            return self._require_question_locked(topic_id)

    def _require_question_locked(self, topic_id: str) -> QuizQuestion:
        if self._question is None:
            raise QuizSessionError(409, "NO_QUESTION", "No question loaded", {"topic_id": topic_id})
        if self._topic_id != topic_id:
            raise QuizSessionError(
                409,
                "TOPIC_MISMATCH",
                "Loaded question belongs to another topic",
                {"topic_id": topic_id, "loaded_topic_id": self._topic_id},
            )
        return self._question
