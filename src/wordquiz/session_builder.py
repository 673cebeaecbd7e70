"""
Session building.

Normal sessions lean toward high-priority words without always showing the
same ones: the pool is sorted by priority, a candidate window twice the
requested size is cut from the top, and the window is shuffled before it is
truncated to the requested count. Remediation sessions replay exactly the
missed words in random order.
"""

import logging
import random
from typing import Callable, Iterable, List, Optional, Sequence

from .config import settings
from .exceptions import EmptyPoolError, NothingToReviewError
from .models import AnswerStyle, CountOption, Session, SessionKind, Word
from .scoring import PriorityScorer

logger = logging.getLogger(__name__)

WordPredicate = Callable[[Word], bool]


def make_filter(category: str = "all", style: AnswerStyle = AnswerStyle.CHOICE) -> WordPredicate:
    """Predicate for a category selection ("all" matches everything).

    Free-text sessions only take words marked as input-eligible.
    """

    def predicate(word: Word) -> bool:
        if category and category != "all" and word.category != category:
            return False
        if style == AnswerStyle.INPUT and not word.input_eligible:
            return False
        return True

    return predicate


def resolve_count(desired_count: CountOption, pool_size: int) -> int:
    if desired_count is None or desired_count == "all":
        return pool_size
    count = int(desired_count)
    if count < 1:
        raise ValueError(f"Question count must be positive, got {count}")
    return min(count, pool_size)


class SessionBuilder:
    def __init__(
        self,
        scorer: PriorityScorer,
        rng: Optional[random.Random] = None,
        window_factor: int = settings.CANDIDATE_WINDOW_FACTOR,
    ):
        self.scorer = scorer
        self.rng = rng or random.Random()
        self.window_factor = window_factor

    def build(
        self,
        corpus: Iterable[Word],
        predicate: WordPredicate,
        desired_count: CountOption = None,
    ) -> Session:
        pool = [w for w in corpus if predicate(w)]
        if not pool:
            raise EmptyPoolError()

        count = resolve_count(desired_count, len(pool))

        # Ties keep no particular order
        pool.sort(key=self.scorer.score, reverse=True)
        window = pool[: min(len(pool), count * self.window_factor)]
        self.rng.shuffle(window)

        words = window[:count]
        logger.info(
            f"Built normal session: {len(words)} of {len(pool)} words "
            f"(window {len(window)})"
        )
        return Session(words=words, kind=SessionKind.NORMAL)

    def build_remediation(self, missed_words: Sequence[Word]) -> Session:
        if not missed_words:
            raise NothingToReviewError()

        words: List[Word] = list(missed_words)
        self.rng.shuffle(words)
        logger.info(f"Built remediation session: {len(words)} words")
        return Session(words=words, kind=SessionKind.REMEDIATION)
