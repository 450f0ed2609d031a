from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import FrozenCamelModel


class Difficulty(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"
    expert = "Expert"


DIFFICULTY_ORDER = [
    Difficulty.beginner,
    Difficulty.intermediate,
    Difficulty.advanced,
    Difficulty.expert,
]


def next_difficulty(difficulty: Difficulty) -> Optional[Difficulty]:
    index = DIFFICULTY_ORDER.index(difficulty)
    if index + 1 < len(DIFFICULTY_ORDER):
        return DIFFICULTY_ORDER[index + 1]
    return None


class QuestionKind(str, Enum):
    query_writing = "query_writing"
    multiple_choice = "multiple_choice"


class QuizQuestion(FrozenCamelModel):
    id: str
    topic: str
    difficulty: Difficulty
    type: QuestionKind = QuestionKind.query_writing
    question_text: str
    schema_context: str
    hints: List[str] = Field(default_factory=list)
    options: Optional[List[str]] = None


class GeneratedQuestion(FrozenCamelModel):
    """Question fields as returned by the provider, before topic/difficulty are attached."""

    question_text: str
    schema_context: str
    hints: List[str]


class EvaluationResult(FrozenCamelModel):
    is_correct: bool
    score_awarded: float = Field(..., allow_inf_nan=False)
    explanation: str
    correct_query: str
    optimization_tip: str
    user_feedback: str
    suggest_difficulty_increase: bool


QUESTION_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "questionText": {"type": "string"},
        "schemaContext": {"type": "string"},
        "hints": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["questionText", "schemaContext", "hints"],
}

EVALUATION_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "isCorrect": {"type": "boolean"},
        "scoreAwarded": {"type": "number", "description": "Score between 0 and 100"},
        "explanation": {
            "type": "string",
            "description": "Deep dive explanation relating back to the curriculum slides.",
        },
        "correctQuery": {"type": "string", "description": "The ideal SQL query."},
        "optimizationTip": {"type": "string", "description": "How to make it faster."},
        "userFeedback": {"type": "string", "description": "Specific feedback on the user's specific code."},
        "suggestDifficultyIncrease": {"type": "boolean"},
    },
    "required": [
        "isCorrect",
        "scoreAwarded",
        "explanation",
        "correctQuery",
        "optimizationTip",
        "userFeedback",
        "suggestDifficultyIncrease",
    ],
}
