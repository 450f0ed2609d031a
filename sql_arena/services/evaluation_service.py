import logging

from sql_arena.content.curriculum import get_context_for_topic
from sql_arena.schemas.quiz import EVALUATION_RESPONSE_SCHEMA, EvaluationResult, QuizQuestion
from sql_arena.services.llm.base import LLMClient, ProviderError
from sql_arena.services.provider_utils import decode_json_response

logger = logging.getLogger(__name__)

GRADING_FAILURE = EvaluationResult(
    is_correct=False,
    score_awarded=0,
    explanation="Error connecting to grading server.",
    correct_query="SELECT 'Error';",
    optimization_tip="N/A",
    user_feedback="We could not grade your answer at this time.",
    suggest_difficulty_increase=False,
)


def build_grading_prompt(question: QuizQuestion, submitted_query: str) -> str:
    curriculum_context = get_context_for_topic(question.topic)
    return (
        "You are a Senior SQL Professor for the Class of '26. Grade this submission.\n\n"
        "CURRICULUM CONTEXT:\n"
        f"{curriculum_context.strip()}\n\n"
        "Context:\n"
        f"Question: {question.question_text}\n"
        f"Schema: {question.schema_context}\n"
        f"Difficulty: {question.difficulty.value}\n\n"
        "Student's Answer:\n"
        f"{submitted_query}\n\n"
        "Task:\n"
        "1. Determine if the query is logically correct based on the Curriculum Rules provided.\n"
        "2. Check for syntax errors.\n"
        "3. Check for efficiency.\n"
        "4. Provide the optimal correct solution using the specific functions mentioned in the curriculum "
        "(e.g. if the curriculum mentions NTH_VALUE, prefer that over self-joins).\n\n"
        "Return JSON.\n"
    )


def evaluate_submission(llm: LLMClient, question: QuizQuestion, submitted_query: str) -> EvaluationResult:
    """Grade ``submitted_query`` against ``question``.

    The verdict is taken from the provider as-is (scores are not clamped). Any
    failure returns GRADING_FAILURE. The learner profile is not touched here.
    """
    prompt = build_grading_prompt(question, submitted_query)
    try:
        raw = llm.complete(prompt, EVALUATION_RESPONSE_SCHEMA)
        return decode_json_response(raw, EvaluationResult)
    except ProviderError as exc:
        logger.warning("Grading failed for question=%s: %s", question.id, exc)
    except Exception:
        logger.exception("Unexpected error grading question=%s.", question.id)
    return GRADING_FAILURE
