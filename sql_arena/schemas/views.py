from typing import List, Optional

from pydantic import Field

from .common import CamelModel
from .profile import UserProfile
from .quiz import EvaluationResult, QuizQuestion
from .topic import Topic


class TopicListResponse(CamelModel):
    topics: List[Topic]


class TheoryResponse(CamelModel):
    topic: Topic
    content: str


class QuestionResponse(CamelModel):
    question: QuizQuestion
    difficulty_changed: Optional[bool] = None


class HintResponse(CamelModel):
    question_id: str
    hint: Optional[str] = None


class QuizSubmitRequest(CamelModel):
    query: str = Field(..., max_length=20000)


class QuizSubmitResponse(CamelModel):
    question_id: str
    result: EvaluationResult
    applied: bool
    profile: UserProfile
