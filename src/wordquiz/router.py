from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse

from .engine import QuizEngine
from .exceptions import (
    EmptyPoolError,
    InvalidAnswerError,
    NoActiveSessionError,
    NothingToReviewError,
    QuestionNotAnsweredError,
)
from .models import AnswerRecord, AnswerStyle, Direction, Session, SessionSettings


router = APIRouter(prefix="/api")


# --- Dependencies ---
def get_engine(request: Request) -> QuizEngine:
    return request.app.state.engine


def _error(e: Exception, status_code: int) -> JSONResponse:
    return JSONResponse({"error": str(e)}, status_code=status_code)


def _session_payload(engine: QuizEngine, session: Session) -> dict:
    return {
        "kind": session.kind.value,
        "total_questions": session.total,
        "question": question_payload(engine),
    }


def question_payload(engine: QuizEngine) -> Optional[dict]:
    session = engine.session
    question = engine.current_question()
    if question is None:
        return None
    record = session.answers[session.cursor] if session.is_judged() else None
    return {
        "prompt": question.prompt,
        "style": question.style.value,
        "options": question.options,
        "current_index": session.cursor,
        "total_questions": session.total,
        "correct_count": session.correct_count,
        "answer_record": record,
    }


# --- Routes ---


@router.get("/categories")
async def get_categories(engine: QuizEngine = Depends(get_engine)):
    return engine.categories()


@router.post("/start")
async def start_quiz_session(
    direction: Direction = Form(Direction.FORWARD),
    style: AnswerStyle = Form(AnswerStyle.CHOICE),
    category: str = Form("all"),
    count: str = Form("all"),
    engine: QuizEngine = Depends(get_engine),
):
    if count != "all":
        if not count.isdigit() or int(count) < 1:
            return JSONResponse({"error": "Invalid question count"}, status_code=400)
    session_settings = SessionSettings(
        direction=direction,
        style=style,
        category=category,
        count=None if count == "all" else int(count),
    )
    try:
        session = engine.start(session_settings)
    except EmptyPoolError as e:
        return _error(e, 400)
    return _session_payload(engine, session)


@router.post("/retry")
async def retry_session(engine: QuizEngine = Depends(get_engine)):
    try:
        session = engine.retry()
    except EmptyPoolError as e:
        return _error(e, 400)
    return _session_payload(engine, session)


@router.post("/review")
async def review_missed(engine: QuizEngine = Depends(get_engine)):
    try:
        session = engine.start_review()
    except NothingToReviewError as e:
        return _error(e, 400)
    return _session_payload(engine, session)


@router.get("/quiz")
async def get_question_data(engine: QuizEngine = Depends(get_engine)):
    if engine.session is None:
        return _error(NoActiveSessionError(), 404)
    payload = question_payload(engine)
    if payload is None:
        return {"finished": True}
    return payload


@router.post("/submit_answer", response_model=AnswerRecord)
async def submit_answer(
    current_index: int = Form(...),
    selected_option_index: Optional[int] = Form(None),
    text: Optional[str] = Form(None),
    engine: QuizEngine = Depends(get_engine),
):
    try:
        if selected_option_index is not None:
            return engine.answer_choice(selected_option_index, current_index)
        return engine.answer_text(text or "", current_index)
    except NoActiveSessionError as e:
        return _error(e, 404)
    except InvalidAnswerError as e:
        return _error(e, 400)


@router.post("/next")
async def next_question(engine: QuizEngine = Depends(get_engine)):
    try:
        engine.advance()
    except NoActiveSessionError as e:
        return _error(e, 404)
    except QuestionNotAnsweredError as e:
        return _error(e, 409)
    payload = question_payload(engine)
    if payload is None:
        return {"finished": True}
    return payload


@router.get("/result")
async def get_result_data(engine: QuizEngine = Depends(get_engine)):
    try:
        return engine.summary()
    except NoActiveSessionError as e:
        return _error(e, 404)


@router.post("/reset")
async def reset_session(engine: QuizEngine = Depends(get_engine)):
    engine.abandon()
    return {"status": "success"}


@router.get("/stats")
async def get_stats(engine: QuizEngine = Depends(get_engine)):
    return engine.word_stats()
