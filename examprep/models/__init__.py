"""Database models."""

from examprep.models.progress import ExamSession, QuestionResult

__all__ = ["ExamSession", "QuestionResult"]
