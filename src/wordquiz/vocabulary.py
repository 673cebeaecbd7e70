import hashlib
import logging
from typing import Dict, List, Optional

import pandas as pd

from .config import settings
from .exceptions import CorpusLoadError
from .models import CategoryInfo, Word

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes", "y", "x"}


def word_id(source: str, target: str) -> str:
    """Content-derived id, stable across row reordering."""
    digest = hashlib.sha1(f"{source}\t{target}".encode("utf-8")).hexdigest()
    return digest[:12]


def to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_STRINGS


class VocabularyLoader:
    """Loads the word corpus from a CSV export (URL or local path)."""

    def __init__(self, source: str = settings.CSV_SOURCE):
        self.source = source

    def read_rows(self) -> List[Dict[str, str]]:
        try:
            df = pd.read_csv(self.source, dtype=str, keep_default_na=False, encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to read word list from {self.source}: {e}")
            raise CorpusLoadError() from e
        df.columns = [str(c).strip().lower() for c in df.columns]
        return df.to_dict("records")

    def load(self) -> List[Word]:
        words = parse_words(self.read_rows())
        if not words:
            logger.error(f"Word list at {self.source} has no usable rows")
            raise CorpusLoadError("The word list is empty. Check the spreadsheet contents.")
        logger.info(f"Loaded {len(words)} words from {self.source}")
        return words


def normalize_row(row: Dict[str, str]) -> Optional[Word]:
    """Maps one sheet row to a Word, or None if a primary field is blank."""

    def cell(name: str) -> str:
        value = row.get(name)
        return "" if value is None else str(value).strip()

    source = cell(settings.FORWARD_COLUMN)
    target = cell(settings.REVERSE_COLUMN)
    if not source or not target:
        return None

    category = cell(settings.CATEGORY_COLUMN) or cell("category")
    if settings.INPUT_COLUMN in row:
        input_eligible = to_bool(cell(settings.INPUT_COLUMN))
    else:
        input_eligible = True

    return Word(
        id=word_id(source, target),
        source=source,
        target=target,
        alt_source=cell(settings.ALT_COLUMN),
        category=category,
        input_eligible=input_eligible,
    )


def parse_words(rows: List[Dict[str, str]]) -> List[Word]:
    words: List[Word] = []
    seen = set()
    skipped = 0
    for row in rows:
        word = normalize_row(row)
        if word is None:
            skipped += 1
            continue
        if word.id in seen:
            logger.debug(f"Dropping duplicate row for '{word.source}'")
            continue
        seen.add(word.id)
        words.append(word)
    if skipped:
        logger.warning(f"Skipped {skipped} rows missing a word or its meaning")
    return words


def get_categories(words: List[Word]) -> List[CategoryInfo]:
    counts: Dict[str, int] = {}
    for w in words:
        if w.category:
            counts[w.category] = counts.get(w.category, 0) + 1
    categories = [
        CategoryInfo(id=key, name=key.replace("_", " ").title(), count=count)
        for key, count in counts.items()
    ]
    categories.sort(key=lambda x: x.name)
    return categories
