from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Mapping

from .config import settings
from .models import PerformanceRecord, Word
from .store import utcnow

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class ScoringWeights:
    unseen_priority: float = settings.UNSEEN_PRIORITY
    accuracy_weight: float = settings.ACCURACY_WEIGHT
    recency_cap_days: float = settings.RECENCY_CAP_DAYS


class PriorityScorer:
    """Ranks words by how urgently they should be asked again.

    Unseen words get ``unseen_priority``. Seen words score
    ``(1 - accuracy) * accuracy_weight + min(days_since_answered, recency_cap_days)``,
    so weak and stale words rise to the top.
    """

    def __init__(
        self,
        records: Mapping[str, PerformanceRecord],
        weights: ScoringWeights = ScoringWeights(),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.records = records
        self.weights = weights
        self.clock = clock

    def score(self, word: Word) -> float:
        rec = self.records.get(word.id)
        if rec is None or rec.times_seen == 0:
            return self.weights.unseen_priority

        accuracy = rec.times_correct / rec.times_seen
        if rec.last_answered_at is None:
            days_since = self.weights.recency_cap_days
        else:
            days_since = (self.clock() - rec.last_answered_at) / ONE_DAY
        return (1 - accuracy) * self.weights.accuracy_weight + min(
            days_since, self.weights.recency_cap_days
        )
