import random

from wordquiz.models import AnswerStyle, Direction
from wordquiz.questions import QuestionFactory

from .conftest import make_word


def test_forward_choice_question(corpus):
    factory = QuestionFactory(corpus, rng=random.Random(3))
    q = factory.create(corpus[0], Direction.FORWARD, AnswerStyle.CHOICE)

    assert q.prompt == "run"
    assert q.answer == "走る"
    assert q.acceptable_answers == ["走る"]
    assert len(q.options) == 4
    assert len(set(q.options)) == 4
    assert "走る" in q.options


def test_reverse_direction_accepts_alternate(corpus):
    factory = QuestionFactory(corpus, rng=random.Random(3))
    q = factory.create(corpus[0], Direction.REVERSE, AnswerStyle.INPUT)

    assert q.prompt == "走る"
    assert q.acceptable_answers == ["run", "jog"]
    assert q.options == []


def test_distractors_come_from_same_field(corpus):
    factory = QuestionFactory(corpus, rng=random.Random(5))
    q = factory.create(corpus[3], Direction.REVERSE, AnswerStyle.CHOICE)
    sources = {w.source for w in corpus}
    assert set(q.options) <= sources


def test_small_corpus_gives_fewer_options():
    words = [make_word("a", "あ"), make_word("i", "い")]
    q = QuestionFactory(words, rng=random.Random(1)).create(
        words[0], Direction.FORWARD, AnswerStyle.CHOICE
    )
    assert sorted(q.options) == ["あ", "い"]


def test_prepare_keeps_session_order(corpus):
    questions = QuestionFactory(corpus).prepare(corpus, Direction.FORWARD, AnswerStyle.CHOICE)
    assert [q.word_id for q in questions] == [w.id for w in corpus]
