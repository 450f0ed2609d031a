import logging
import random
import threading
import time
import uuid
from typing import Optional

from sql_arena.content.curriculum import get_context_for_topic
from sql_arena.content.question_bank import STATIC_QUIZ_QUESTIONS
from sql_arena.schemas.quiz import (
    QUESTION_RESPONSE_SCHEMA,
    Difficulty,
    GeneratedQuestion,
    QuestionKind,
    QuizQuestion,
)
from sql_arena.services.llm.base import LLMClient, ProviderError
from sql_arena.services.provider_utils import decode_json_response

FALLBACK_QUESTION_ID = "fallback"
logger = logging.getLogger(__name__)

_stamp_lock = threading.Lock()
_last_stamp = 0


def _fresh_stamp() -> int:
    """Millisecond timestamp, bumped when needed so no two draws share a value."""
    global _last_stamp
    with _stamp_lock:
        stamp = max(int(time.time() * 1000), _last_stamp + 1)
        _last_stamp = stamp
        return stamp


def build_fallback_question(topic: str, difficulty: Difficulty) -> QuizQuestion:
    return QuizQuestion(
        id=FALLBACK_QUESTION_ID,
        topic=topic,
        difficulty=difficulty,
        type=QuestionKind.query_writing,
        question_text="Explain the difference between RANK() and DENSE_RANK() using the Class of '26 schema.",
        schema_context="Table: Student_Scores (student_id, subject, score)",
        hints=["Think about gaps in ranking", "Consider duplicate values"],
    )


def build_question_prompt(topic: str, difficulty: Difficulty) -> str:
    curriculum_context = get_context_for_topic(topic)
    return (
        "Generate a unique, challenging SQL interview question based strictly on the following curriculum context.\n\n"
        "CURRICULUM CONTEXT:\n"
        f"{curriculum_context.strip()}\n\n"
        f"Topic: {topic}\n"
        f"Difficulty: {difficulty.value}\n"
        "Source Material Style: LeetCode, FAANG Interview, Academic Exam.\n\n"
        "If difficulty is Expert, combine concepts (e.g., Recursive CTEs with Window Functions, "
        "or complex BCNF decomposition).\n\n"
        "Return a JSON object with:\n"
        "- questionText: The problem description. Ensure it strictly uses terminology from the curriculum context.\n"
        "- schemaContext: Text description of the tables, columns, and sample data types involved.\n"
        "- hints: An array of 2 short hints.\n"
    )


def draw_static_question(topic: str, rng: Optional[random.Random] = None) -> Optional[QuizQuestion]:
    questions = STATIC_QUIZ_QUESTIONS.get(topic) or []
    if not questions:
        return None
    picked = (rng or random).choice(questions)
    return picked.model_copy(update={"id": f"{picked.id}_{_fresh_stamp()}"})


def provide_question(
    llm: LLMClient,
    topic: str,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> QuizQuestion:
    """Return a question for ``topic``; never raises.

    Topics with a static bank are served from it without touching the provider.
    Everything else is generated, and any provider or decode failure yields the
    canned fallback question.
    """
    # Static entries keep their authored difficulty; only generated questions
    # follow the requested one.
    static_question = draw_static_question(topic, rng)
    if static_question is not None:
        return static_question

    prompt = build_question_prompt(topic, difficulty)
    try:
        raw = llm.complete(prompt, QUESTION_RESPONSE_SCHEMA)
        generated = decode_json_response(raw, GeneratedQuestion)
    except ProviderError as exc:
        logger.warning("Question generation failed for topic=%s, using fallback: %s", topic, exc)
        return build_fallback_question(topic, difficulty)
    except Exception:
        logger.exception("Unexpected error generating question for topic=%s, using fallback.", topic)
        return build_fallback_question(topic, difficulty)

    return QuizQuestion(
        id=str(uuid.uuid4()),
        topic=topic,
        difficulty=difficulty,
        type=QuestionKind.query_writing,
        question_text=generated.question_text,
        schema_context=generated.schema_context,
        hints=list(generated.hints),
    )
