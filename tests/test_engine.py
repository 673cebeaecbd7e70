import pytest

from wordquiz.exceptions import (
    EmptyPoolError,
    InvalidAnswerError,
    NoActiveSessionError,
    NothingToReviewError,
    QuestionNotAnsweredError,
)
from wordquiz.models import AnswerStyle, Direction, SessionKind, SessionSettings, SessionStatus


def answer_all(engine, correct):
    """Answer every remaining question; `correct` decides per prompt."""
    while engine.current_question() is not None:
        q = engine.current_question()
        if correct(q):
            engine.answer_choice(q.options.index(q.answer))
        else:
            wrong = next(o for o in q.options if o != q.answer)
            engine.answer_choice(q.options.index(wrong))
        engine.advance()


def test_full_normal_session(engine):
    session = engine.start(SessionSettings(count=4))
    assert session.total == 4

    answer_all(engine, lambda q: True)

    assert session.status == SessionStatus.COMPLETED
    summary = engine.summary()
    assert summary.correct_count == 4
    assert summary.score_percentage == 100.0
    assert summary.message.startswith("Perfect")
    assert sum(r.times_seen for r in engine.word_stats().values()) == 4


def test_advance_requires_an_answer(engine):
    engine.start(SessionSettings(count=2))
    with pytest.raises(QuestionNotAnsweredError):
        engine.advance()


def test_operations_need_a_session(engine):
    with pytest.raises(NoActiveSessionError):
        engine.current_question()
    with pytest.raises(NoActiveSessionError):
        engine.summary()


def test_double_answer_is_ignored(engine):
    engine.start(SessionSettings(count=3))
    q = engine.current_question()
    wrong = next(o for o in q.options if o != q.answer)

    first = engine.answer_choice(q.options.index(wrong))
    second = engine.answer_choice(q.options.index(q.answer))

    assert second == first
    assert engine.session.correct_count == 0
    assert engine.session.missed == [q.word_id]


def test_invalid_option_index(engine):
    engine.start(SessionSettings(count=1))
    with pytest.raises(InvalidAnswerError):
        engine.answer_choice(99)


def test_text_answers_are_normalized(engine):
    engine.start(
        SessionSettings(
            direction=Direction.REVERSE, style=AnswerStyle.INPUT, category="2022"
        )
    )
    q = engine.current_question()
    record = engine.answer_text(f"  {q.answer.upper()} ")
    assert record.is_correct is True


def test_empty_filter_keeps_previous_session(engine):
    previous = engine.start(SessionSettings(count=2))
    with pytest.raises(EmptyPoolError):
        engine.start(SessionSettings(category="1999"))
    assert engine.session is previous


def test_review_replays_missed_words(engine):
    engine.start(SessionSettings(count=4))
    missed_prompts = []

    def miss_first_two(q):
        if len(missed_prompts) < 2:
            missed_prompts.append(q.word_id)
            return False
        return True

    answer_all(engine, miss_first_two)
    assert "review" in engine.summary().message

    review = engine.start_review()
    assert review.kind == SessionKind.REMEDIATION
    assert sorted(w.id for w in review.words) == sorted(missed_prompts)

    answer_all(engine, lambda q: True)
    assert engine.summary().message == "You got every previously missed word right."


def test_review_without_misses(engine):
    with pytest.raises(NothingToReviewError):
        engine.start_review()

    engine.start(SessionSettings(count=2))
    answer_all(engine, lambda q: True)
    with pytest.raises(NothingToReviewError):
        engine.start_review()


def test_abandon_keeps_missed_words_for_review(engine):
    engine.start(SessionSettings(count=3))
    q = engine.current_question()
    wrong = next(o for o in q.options if o != q.answer)
    engine.answer_choice(q.options.index(wrong))

    engine.abandon()
    assert engine.session is None

    review = engine.start_review()
    assert [w.id for w in review.words] == [q.word_id]


def test_retry_builds_a_new_session_with_same_settings(engine):
    first = engine.start(SessionSettings(category="2023", count=2))
    answer_all(engine, lambda q: True)

    second = engine.retry()

    assert second is not first
    assert second.total == 2
    assert {w.category for w in second.words} == {"2023"}
    assert second.cursor == 0


def test_wrong_answers_raise_priority_next_time(engine, clock):
    engine.start(SessionSettings(count=6))
    answer_all(engine, lambda q: q.prompt != "run")
    clock.advance(days=1)

    scores = {w.source: engine.scorer.score(w) for w in engine.corpus}
    assert scores["run"] == max(scores.values())


def test_late_answer_for_passed_question_changes_nothing(engine):
    engine.start(SessionSettings(count=3))
    q = engine.current_question()
    first = engine.answer_choice(q.options.index(q.answer), index=0)
    engine.advance()

    again = engine.answer_choice(0, index=0)

    assert again == first
    assert engine.session.cursor == 1
    assert not engine.session.is_judged()
    assert engine.session.correct_count == 1


def test_answer_for_future_question_raises(engine):
    engine.start(SessionSettings(count=3))
    with pytest.raises(InvalidAnswerError):
        engine.answer_choice(0, index=2)
    assert engine.session.answers == []


def test_text_answer_needs_input_question(engine):
    engine.start(SessionSettings(count=2))
    with pytest.raises(InvalidAnswerError):
        engine.answer_text("run")
    assert not engine.session.is_judged()
