"""
Quiz engine.

One QuizEngine owns the corpus, the performance store and the current
session. Every quiz operation goes through it; nothing is held in module
globals, so tests can run engines side by side.
"""

import logging
import random
from typing import Dict, List, Optional

from .answers import matches
from .config import settings
from .database import KeyValueStore, init_db
from .exceptions import (
    InvalidAnswerError,
    NoActiveSessionError,
    QuestionNotAnsweredError,
)
from .models import (
    AnswerRecord,
    AnswerStyle,
    CategoryInfo,
    PerformanceRecord,
    Question,
    Session,
    SessionKind,
    SessionSettings,
    SessionSummary,
    Word,
)
from .questions import QuestionFactory
from .recorder import AnswerRecorder
from .scoring import PriorityScorer, ScoringWeights
from .session_builder import SessionBuilder, make_filter
from .store import PerformanceStore
from .vocabulary import VocabularyLoader, get_categories

logger = logging.getLogger(__name__)


class QuizEngine:
    def __init__(
        self,
        corpus: List[Word],
        store: PerformanceStore,
        weights: Optional[ScoringWeights] = None,
        rng: Optional[random.Random] = None,
    ):
        self.corpus = corpus
        self.store = store
        self.rng = rng or random.Random()
        self.scorer = PriorityScorer(store.records, weights or ScoringWeights(), store.clock)
        self.builder = SessionBuilder(self.scorer, rng=self.rng)
        self.recorder = AnswerRecorder(store)
        self.questions = QuestionFactory(corpus, rng=self.rng)
        self._by_id: Dict[str, Word] = {w.id: w for w in corpus}

        self.session: Optional[Session] = None
        self.last_settings: Optional[SessionSettings] = None
        self._session_settings: Optional[SessionSettings] = None
        # Missed words of a session that was abandoned
        self._carried_missed: List[str] = []

    # --- Session lifecycle ---

    def start(self, session_settings: SessionSettings) -> Session:
        """Start a normal session. Raises EmptyPoolError if nothing matches."""
        predicate = make_filter(session_settings.category, session_settings.style)
        session = self.builder.build(self.corpus, predicate, session_settings.count)
        self.last_settings = session_settings
        return self._activate(session, session_settings)

    def retry(self) -> Session:
        return self.start(self.last_settings or SessionSettings())

    def start_review(self) -> Session:
        """Replay the words missed in the most recent session."""
        missed = [self._by_id[i] for i in self.missed_ids if i in self._by_id]
        session = self.builder.build_remediation(missed)
        return self._activate(session, self._session_settings or SessionSettings())

    def abandon(self):
        if self.session is not None:
            self._carried_missed = list(self.session.missed)
            logger.info(f"Session abandoned at question {self.session.cursor}")
        self.session = None

    def _activate(self, session: Session, session_settings: SessionSettings) -> Session:
        session.questions = self.questions.prepare(
            session.words, session_settings.direction, session_settings.style
        )
        self.session = session
        self._session_settings = session_settings
        self._carried_missed = []
        logger.info(
            f"New {session.kind.value} session: {session.total} questions "
            f"[{session_settings.direction.value}/{session_settings.style.value}, "
            f"category={session_settings.category}]"
        )
        return session

    @property
    def missed_ids(self) -> List[str]:
        if self.session is not None:
            return list(self.session.missed)
        return list(self._carried_missed)

    # --- Questions and answers ---

    def _require_session(self) -> Session:
        if self.session is None:
            raise NoActiveSessionError()
        return self.session

    def current_question(self) -> Optional[Question]:
        session = self._require_session()
        if session.cursor >= len(session.questions):
            return None
        return session.questions[session.cursor]

    def _judged_record(self, session: Session, index: Optional[int]) -> Optional[AnswerRecord]:
        """Earlier record for the question at `index` (current when None).

        Raises InvalidAnswerError for a question that is neither judged nor
        current, so a late answer never lands on the next question.
        """
        index = session.cursor if index is None else index
        if 0 <= index < len(session.answers):
            return session.answers[index]
        if index != session.cursor:
            raise InvalidAnswerError("Not the current question.")
        if self.current_question() is None:
            raise InvalidAnswerError("The quiz is already finished.")
        return None

    def answer_choice(self, option_index: int, index: Optional[int] = None) -> AnswerRecord:
        session = self._require_session()
        earlier = self._judged_record(session, index)
        if earlier is not None:
            return earlier
        question = self.current_question()
        if question.style != AnswerStyle.CHOICE or not (
            0 <= option_index < len(question.options)
        ):
            raise InvalidAnswerError("Invalid option.")
        chosen = question.options[option_index]
        return self.recorder.submit(
            session, session.current_word, chosen == question.answer, chosen
        )

    def answer_text(self, text: str, index: Optional[int] = None) -> AnswerRecord:
        session = self._require_session()
        earlier = self._judged_record(session, index)
        if earlier is not None:
            return earlier
        question = self.current_question()
        if question.style != AnswerStyle.INPUT:
            raise InvalidAnswerError("Pick one of the options.")
        is_correct = matches(text, question.acceptable_answers)
        return self.recorder.submit(session, session.current_word, is_correct, text)

    def advance(self) -> Optional[Question]:
        """Move to the next question once the current one is judged."""
        session = self._require_session()
        if session.cursor >= session.total:
            return None
        if not session.is_judged():
            raise QuestionNotAnsweredError()
        session.cursor += 1
        return self.current_question()

    # --- Results ---

    def summary(self) -> SessionSummary:
        session = self._require_session()
        total = session.total
        percent = round(session.correct_count / total * 100, 1) if total else 0.0

        if total == 0:
            message = "No questions were asked. Change the settings and try again."
        elif session.correct_count == total:
            if session.kind == SessionKind.REMEDIATION:
                message = "You got every previously missed word right."
            else:
                message = "Perfect score! Keep it up."
        else:
            message = "Use review to retry only the words you missed."

        return SessionSummary(
            kind=session.kind,
            correct_count=session.correct_count,
            total_questions=total,
            score_percentage=percent,
            message=message,
            missed_count=len(session.missed),
            answers=session.answers,
        )

    def categories(self) -> List[CategoryInfo]:
        return get_categories(self.corpus)

    def word_stats(self) -> Dict[str, PerformanceRecord]:
        return {k: v.model_copy() for k, v in self.store.records.items()}


def build_engine(
    csv_source: Optional[str] = None,
    db_path: Optional[str] = None,
) -> QuizEngine:
    """Load the corpus and stored stats. Raises CorpusLoadError if there
    are no words to quiz on."""
    corpus = VocabularyLoader(csv_source or settings.CSV_SOURCE).load()
    init_db(db_path)
    store = PerformanceStore(KeyValueStore(db_path), key=settings.STATS_KEY)
    store.load()
    logger.info(f"Loaded stats for {len(store.records)} words")
    return QuizEngine(corpus, store)
