import logging
from typing import Optional

from .models import AnswerRecord, Question, Session, Word
from .store import PerformanceStore

logger = logging.getLogger(__name__)


class AnswerRecorder:
    """Applies judged answers to the session tally and the performance store."""

    def __init__(self, store: PerformanceStore):
        self.store = store

    def submit(
        self,
        session: Session,
        word: Word,
        is_correct: bool,
        user_answer: str = "",
    ) -> AnswerRecord:
        """Record the outcome of the current question.

        A question is judged once. Submitting again for the same question
        returns the earlier record and changes nothing.
        """
        if session.is_judged():
            logger.debug(f"Ignoring repeated answer for question {session.cursor}")
            return session.answers[session.cursor]

        current = session.current_word
        if current is None or current.id != word.id:
            # A late repeat for a question the cursor has already passed
            for earlier in reversed(session.answers):
                if earlier.word_id == word.id:
                    logger.debug(f"Ignoring late answer for word {word.id}")
                    return earlier
            raise ValueError(f"Word {word.id} is not the current question")

        if is_correct:
            session.correct_count += 1
        elif word.id not in session.missed:
            session.missed.append(word.id)

        self.store.record(word.id, is_correct)

        question = _question_at(session)
        record = AnswerRecord(
            word_id=word.id,
            prompt=question.prompt if question else word.source,
            user_answer=user_answer,
            correct_answer=question.answer if question else word.target,
            is_correct=is_correct,
        )
        session.answers.append(record)
        return record


def _question_at(session: Session) -> Optional[Question]:
    if session.cursor < len(session.questions):
        return session.questions[session.cursor]
    return None
