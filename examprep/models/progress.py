"""Exam session and per-question result models (read by the performance store)."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from examprep.db.base import Base


class ExamSession(Base):
    """A submitted practice exam."""

    __tablename__ = "exam_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=True, index=True)  # None = anonymous
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    total_questions = Column(Integer, nullable=False)
    correct = Column(Integer, nullable=False)
    percentage = Column(Float, nullable=False)

    results = relationship(
        "QuestionResult",
        back_populates="session",
        cascade="all, delete-orphan",
    )


class QuestionResult(Base):
    """One answered question within a session."""

    __tablename__ = "question_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        Integer,
        ForeignKey("exam_sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id = Column(String(64), nullable=True)

    question_id = Column(String(64), nullable=False)
    question_text = Column(Text, nullable=False, default="")
    user_answer = Column(String(32), nullable=False, default="")
    correct_answer = Column(String(32), nullable=False, default="")
    is_correct = Column(Boolean, nullable=False)
    subtopic = Column(String(64), nullable=True)

    session = relationship("ExamSession", back_populates="results")

    __table_args__ = (
        Index("ix_question_results_session", "session_id"),
        Index("ix_question_results_question", "question_id"),
        Index("ix_question_results_subtopic", "subtopic"),
        Index("ix_question_results_user", "user_id"),
    )
