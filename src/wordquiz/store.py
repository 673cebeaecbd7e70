import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Callable, Dict

from pydantic import TypeAdapter, ValidationError

from .config import settings
from .database import KeyValueStore
from .models import PerformanceMap, PerformanceRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(Dict[str, PerformanceRecord])


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PerformanceStore:
    """Durable per-word performance counters.

    The whole mapping lives under one key and is rewritten after every
    answer. Storage problems never reach the caller: a bad read yields an
    empty mapping and a failed write is dropped, both with a warning.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = settings.STATS_KEY,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.backend = backend
        self.key = key
        self.clock = clock
        self.records: PerformanceMap = {}

    def load(self) -> PerformanceMap:
        try:
            raw = self.backend.get(self.key)
            records = _records_adapter.validate_json(raw) if raw else {}
        except (sqlite3.Error, ValidationError, ValueError) as e:
            logger.warning(f"Could not read stats '{self.key}', starting empty: {e}")
            records = {}
        # Updated in place; scorers hold a reference to this mapping
        self.records.clear()
        self.records.update(records)
        return self.records

    def save(self, records: PerformanceMap):
        try:
            payload = {
                word_id: rec.model_dump(mode="json")
                for word_id, rec in records.items()
            }
            self.backend.set(self.key, json.dumps(payload, ensure_ascii=False))
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.warning(f"Could not save stats '{self.key}': {e}")

    def record(self, word_id: str, is_correct: bool) -> PerformanceRecord:
        rec = self.records.get(word_id)
        if rec is None:
            rec = PerformanceRecord()
            self.records[word_id] = rec
        rec.times_seen += 1
        if is_correct:
            rec.times_correct += 1
        else:
            rec.times_wrong += 1
        rec.last_answered_at = self.clock()
        self.save(self.records)
        return rec
