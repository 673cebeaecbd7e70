import random
from typing import List, Optional, Sequence

from .config import settings
from .models import AnswerStyle, Direction, Question, Word


def prompt_and_answer(word: Word, direction: Direction):
    if direction == Direction.FORWARD:
        return word.source, word.target
    return word.target, word.source


class QuestionFactory:
    """Prepares the question for each session word up front, so options stay
    fixed if a question is shown again."""

    def __init__(
        self,
        corpus: Sequence[Word],
        rng: Optional[random.Random] = None,
        num_distractors: int = settings.NUM_DISTRACTORS,
    ):
        self.corpus = corpus
        self.rng = rng or random.Random()
        self.num_distractors = num_distractors

    def create(self, word: Word, direction: Direction, style: AnswerStyle) -> Question:
        prompt, answer = prompt_and_answer(word, direction)

        acceptable = [answer]
        if direction == Direction.REVERSE and word.alt_source:
            acceptable.append(word.alt_source)

        options: List[str] = []
        if style == AnswerStyle.CHOICE:
            options = self._generate_options(word, answer, direction)

        return Question(
            word_id=word.id,
            prompt=prompt,
            answer=answer,
            acceptable_answers=acceptable,
            options=options,
            style=style,
        )

    def prepare(
        self, words: Sequence[Word], direction: Direction, style: AnswerStyle
    ) -> List[Question]:
        return [self.create(w, direction, style) for w in words]

    def _generate_options(self, word: Word, answer: str, direction: Direction) -> List[str]:
        """Correct answer plus distinct distractors taken from other words."""
        others = {
            prompt_and_answer(w, direction)[1]
            for w in self.corpus
            if w.id != word.id
        }
        others.discard(answer)
        others.discard("")

        pool = sorted(others)
        distractors = self.rng.sample(pool, min(self.num_distractors, len(pool)))

        options = [answer] + distractors
        self.rng.shuffle(options)
        return options
