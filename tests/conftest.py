import logging
import random
from datetime import datetime, timedelta, timezone

import pytest

from wordquiz.config import settings
from wordquiz.database import KeyValueStore, init_db
from wordquiz.engine import QuizEngine
from wordquiz.models import Word
from wordquiz.store import PerformanceStore
from wordquiz.vocabulary import word_id

SAMPLE_CSV = """en,ja,year,alt,input
run,走る,2022,jog,true
eat,食べる,2022,,true
see,見る,2022,watch,false
go,行く,2023,,true
come,来る,2023,,true
,空欄,2023,,true
blank,,2023,,true
"""


class FakeClock:
    """Settable clock for scoring and store timestamps."""

    def __init__(self, now=None):
        self.now = now or datetime(2025, 4, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_word(source, target, category="", alt_source="", input_eligible=True):
    return Word(
        id=word_id(source, target),
        source=source,
        target=target,
        alt_source=alt_source,
        category=category,
        input_eligible=input_eligible,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "db" / "test.db")
    init_db(path)
    return path


@pytest.fixture
def store(db_path, clock):
    s = PerformanceStore(KeyValueStore(db_path), key="testStats", clock=clock)
    s.load()
    return s


@pytest.fixture
def corpus():
    return [
        make_word("run", "走る", "2022", alt_source="jog"),
        make_word("eat", "食べる", "2022"),
        make_word("see", "見る", "2022", input_eligible=False),
        make_word("go", "行く", "2023"),
        make_word("come", "来る", "2023"),
        make_word("write", "書く", "2023"),
    ]


@pytest.fixture
def ten_words():
    return [make_word(f"word{i}", f"単語{i}") for i in range(10)]


@pytest.fixture
def engine(corpus, store):
    return QuizEngine(corpus, store, rng=random.Random(7))


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def app_settings(tmp_path, csv_file, monkeypatch):
    """Points logs, database and the word list at a temp directory."""
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))
    monkeypatch.setattr(settings, "DB_DIR", str(tmp_path / "db"))
    monkeypatch.setattr(settings, "CSV_SOURCE", str(csv_file))
    yield settings
    logger = logging.getLogger("wordquiz")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
