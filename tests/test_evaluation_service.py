import json

from sql_arena.schemas.quiz import EVALUATION_RESPONSE_SCHEMA, Difficulty, QuizQuestion
from sql_arena.services.evaluation_service import GRADING_FAILURE, evaluate_submission
from sql_arena.services.llm.base import ProviderError


def _question(topic="Window Functions"):
    return QuizQuestion(
        id="wf_1_1",
        topic=topic,
        difficulty=Difficulty.intermediate,
        question_text="Rank employees by salary within each department.",
        schema_context="Table: EMPLOYEES (EMP_ID, NAME, DEPT_ID, SALARY)",
        hints=["Use PARTITION BY"],
    )


def test_verdict_is_parsed_from_provider_json(llm, verdict):
    llm.queue(verdict)
    submission = "SELECT name, DENSE_RANK() OVER (PARTITION BY dept_id ORDER BY salary DESC) FROM employees;"
    result = evaluate_submission(llm, _question(), submission)

    assert result.is_correct is True
    assert result.score_awarded == 80
    assert result.suggest_difficulty_increase is True
    assert result.user_feedback == "Good use of PARTITION BY."
    call = llm.calls[0]
    assert call["schema"] == EVALUATION_RESPONSE_SCHEMA
    assert submission in call["prompt"]
    assert "NTH_VALUE" in call["prompt"]
    assert "Difficulty: Intermediate" in call["prompt"]
    assert "Schema: Table: EMPLOYEES" in call["prompt"]


def test_out_of_range_score_is_passed_through(llm, verdict):
    llm.queue({**verdict, "isCorrect": False, "scoreAwarded": -15})
    result = evaluate_submission(llm, _question(), "SELECT 1;")
    assert result.score_awarded == -15
    assert result.is_correct is False


def test_provider_failure_returns_canned_result(llm):
    llm.queue(ProviderError("network down"))
    result = evaluate_submission(llm, _question(), "SELECT 1;")
    assert result == GRADING_FAILURE
    assert result.is_correct is False
    assert result.score_awarded == 0
    assert result.explanation == "Error connecting to grading server."
    assert result.correct_query == "SELECT 'Error';"
    assert result.optimization_tip == "N/A"
    assert result.user_feedback == "We could not grade your answer at this time."
    assert result.suggest_difficulty_increase is False


def test_missing_field_returns_canned_result(llm, verdict):
    partial = dict(verdict)
    partial.pop("correctQuery")
    llm.queue(partial)
    assert evaluate_submission(llm, _question(), "SELECT 1;") == GRADING_FAILURE


def test_unknown_topic_uses_generic_context(llm, verdict):
    llm.queue(verdict)
    evaluate_submission(llm, _question(topic="Joins"), "SELECT 1;")
    assert "standard SQL best practices" in llm.calls[0]["prompt"]


def test_non_finite_score_returns_canned_result(llm, verdict):
    llm.queue(json.dumps({**verdict, "isCorrect": True}).replace('"scoreAwarded": 80', '"scoreAwarded": 1e400'))
    result = evaluate_submission(llm, _question(), "SELECT 1;")
    assert result == GRADING_FAILURE
