"""Errors raised by the quiz core.

Recoverable errors carry a message that can be shown to the user as-is.
"""

from typing import Optional


class QuizError(Exception):
    """Base class for quiz errors."""

    message = "Quiz error."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class CorpusLoadError(QuizError):
    """The word list could not be fetched, or it held no usable words."""

    message = "Failed to load the word list."


class EmptyPoolError(QuizError):
    message = "No words match the current filter."


class NothingToReviewError(QuizError):
    message = "Nothing to review yet. Finish a normal round first."


class NoActiveSessionError(QuizError):
    message = "No quiz is in progress."


class QuestionNotAnsweredError(QuizError):
    message = "Answer the current question first."


class InvalidAnswerError(QuizError):
    message = "Invalid answer."
