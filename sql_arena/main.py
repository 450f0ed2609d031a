import logging
import random
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import sessionmaker

from sql_arena.content.topics import TOPICS, get_topic
from sql_arena.core.config import Settings, load_settings
from sql_arena.db.session import build_engine, init_db
from sql_arena.schemas.leaderboard import LeaderboardResponse
from sql_arena.schemas.profile import DifficultyUpdateRequest, HomeResponse, ProfileUpdateRequest, UserProfile
from sql_arena.schemas.views import (
    HintResponse,
    QuestionResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
    TheoryResponse,
    TopicListResponse,
)
from sql_arena.services.leaderboard_service import build_leaderboard
from sql_arena.services.llm.base import LLMClient
from sql_arena.services.profile_service import ProfileState
from sql_arena.services.provider_factory import build_llm_client
from sql_arena.services.quiz_session import QuizSession, QuizSessionError
from sql_arena.services.storage import KeyValueStore, SqlKeyValueStore
from sql_arena.services.theory_service import get_theory

logger = logging.getLogger(__name__)


class ProfileRequiredError(Exception):
    """A protected view was requested without an active learner."""


def _error_response(status: int, code: str, message: str, details: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"code": code, "message": message, "details": details or {}},
    )


def get_profile_state(request: Request) -> ProfileState:
    return request.app.state.profile_state


def get_quiz_session(request: Request) -> QuizSession:
    return request.app.state.quiz_session


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_llm(request: Request) -> LLMClient:
    return request.app.state.llm_client


def require_profile(profile_state: ProfileState = Depends(get_profile_state)) -> ProfileState:
    if not profile_state.is_active:
        raise ProfileRequiredError()
    return profile_state


def create_app(
    settings: Optional[Settings] = None,
    llm_client: Optional[LLMClient] = None,
    store: Optional[KeyValueStore] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="SQL Arena", docs_url="/api-docs", redoc_url="/api-redoc")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def build_state_on_startup():
        kv_store = store
        if kv_store is None:
            db_engine = build_engine(settings.database_url)
            if settings.create_tables:
                init_db(db_engine)
            kv_store = SqlKeyValueStore(sessionmaker(bind=db_engine, autocommit=False, autoflush=False))
        llm = llm_client or build_llm_client(settings)
        profile_state = ProfileState.load(kv_store)
        app.state.store = kv_store
        app.state.llm_client = llm
        app.state.profile_state = profile_state
        app.state.quiz_session = QuizSession(llm, profile_state, rng)
        logger.info("SQL Arena ready (provider=%s, active=%s)", settings.llm_provider, profile_state.is_active)

    @app.exception_handler(ProfileRequiredError)
    def redirect_to_home(request: Request, exc: ProfileRequiredError):
        return RedirectResponse(url="/", status_code=303)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/", response_model=HomeResponse)
    def home(profile_state: ProfileState = Depends(get_profile_state)):
        return HomeResponse(active=profile_state.is_active, profile=profile_state.profile)

    @app.post("/profile", response_model=UserProfile)
    def start_session(
        request: ProfileUpdateRequest,
        profile_state: ProfileState = Depends(get_profile_state),
    ):
        return profile_state.set_identity(request.name, request.difficulty)

    @app.put("/profile/difficulty", response_model=UserProfile)
    def change_difficulty(
        request: DifficultyUpdateRequest,
        profile_state: ProfileState = Depends(require_profile),
    ):
        return profile_state.set_difficulty(request.difficulty)

    @app.delete("/profile", response_model=UserProfile)
    def reset_profile(profile_state: ProfileState = Depends(get_profile_state)):
        return profile_state.reset()

    @app.get("/learn", response_model=TopicListResponse, dependencies=[Depends(require_profile)])
    def list_topics():
        return TopicListResponse(topics=TOPICS)

    @app.get("/learn/{topic_id}", response_model=TheoryResponse, dependencies=[Depends(require_profile)])
    def topic_theory(
        topic_id: str,
        refresh: bool = Query(False),
        llm: LLMClient = Depends(get_llm),
        kv_store: KeyValueStore = Depends(get_store),
    ):
        topic = get_topic(topic_id)
        if not topic:
            return _error_response(404, "TOPIC_NOT_FOUND", "Topic not found", {"topic_id": topic_id})
        content = get_theory(llm, kv_store, topic.id.value, topic.title, force_refresh=refresh)
        return TheoryResponse(topic=topic, content=content)

    @app.post("/quiz/{topic_id}/question", response_model=QuestionResponse, dependencies=[Depends(require_profile)])
    def load_question(topic_id: str, quiz_session: QuizSession = Depends(get_quiz_session)):
        return QuestionResponse(question=quiz_session.load_question(topic_id))

    @app.get("/quiz/{topic_id}/hint", response_model=HintResponse, dependencies=[Depends(require_profile)])
    def show_hint(topic_id: str, quiz_session: QuizSession = Depends(get_quiz_session)):
        try:
            question, hint = quiz_session.first_hint(topic_id)
        except QuizSessionError as exc:
            return _error_response(exc.status_code, exc.code, exc.message, exc.details)
        return HintResponse(question_id=question.id, hint=hint)

    @app.post("/quiz/{topic_id}/submit", response_model=QuizSubmitResponse, dependencies=[Depends(require_profile)])
    def submit_query(
        topic_id: str,
        request: QuizSubmitRequest,
        quiz_session: QuizSession = Depends(get_quiz_session),
    ):
        try:
            outcome = quiz_session.submit(topic_id, request.query)
        except QuizSessionError as exc:
            return _error_response(exc.status_code, exc.code, exc.message, exc.details)
        return QuizSubmitResponse(
            question_id=outcome.question.id,
            result=outcome.result,
            applied=outcome.applied,
            profile=outcome.profile,
        )

    @app.post("/quiz/{topic_id}/level-up", response_model=QuestionResponse, dependencies=[Depends(require_profile)])
    def level_up(topic_id: str, quiz_session: QuizSession = Depends(get_quiz_session)):
        outcome = quiz_session.level_up_and_reload(topic_id)
        question = outcome.question or quiz_session.question_for(topic_id)
        if question is None:
            question = quiz_session.load_question(topic_id)
        return QuestionResponse(question=question, difficulty_changed=outcome.difficulty_changed)

    @app.get("/leaderboard", response_model=LeaderboardResponse, dependencies=[Depends(require_profile)])
    def leaderboard(profile_state: ProfileState = Depends(get_profile_state)):
        return LeaderboardResponse(entries=build_leaderboard(profile_state.profile))

    return app


app = create_app()
