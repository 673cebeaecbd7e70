import re
from typing import Iterable

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase, collapse whitespace runs to one space, trim."""
    return _WHITESPACE.sub(" ", text or "").strip().lower()


def matches(user_answer: str, acceptable: Iterable[str]) -> bool:
    answer = normalize(user_answer)
    if not answer:
        return False
    return any(answer == normalize(a) for a in acceptable if a)
