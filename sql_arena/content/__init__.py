from .curriculum import DEFAULT_CONTEXT, get_context_for_topic
from .question_bank import STATIC_QUIZ_QUESTIONS
from .theory import STATIC_THEORY
from .topics import TOPICS, get_topic

__all__ = [
    "DEFAULT_CONTEXT",
    "STATIC_QUIZ_QUESTIONS",
    "STATIC_THEORY",
    "TOPICS",
    "get_context_for_topic",
    "get_topic",
]
