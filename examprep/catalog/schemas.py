"""Pydantic schemas for the question catalog."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuestionType(str, Enum):
    """Answer cardinality of a question."""

    SINGLE = "single"
    MULTI = "multi"


class AnswerOption(BaseModel):
    """One lettered answer option."""

    model_config = ConfigDict(frozen=True)

    letter: str = Field(min_length=1, max_length=2)
    text: str


class Question(BaseModel):
    """Immutable multiple-choice question as loaded from the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Opaque unique id")
    text: str
    options: tuple[AnswerOption, ...] = Field(min_length=1)
    correct_answers: frozenset[str] = Field(min_length=1)
    question_type: QuestionType
    explanation: str | None = None
    subtopic: str = Field(min_length=1, description="Topic id from the registry")

    # Provenance in the source material (optional)
    source_file: str | None = None
    question_number: int | None = None

    @model_validator(mode="after")
    def correct_answers_match_options(self) -> "Question":
        letters = {option.letter for option in self.options}
        unknown = self.correct_answers - letters
        if unknown:
            raise ValueError(
                f"Question {self.id}: correct answers {sorted(unknown)} are not option letters"
            )
        if self.question_type == QuestionType.SINGLE and len(self.correct_answers) != 1:
            raise ValueError(f"Question {self.id}: single-answer question needs exactly one correct answer")
        return self

    @property
    def topic(self) -> str:
        """Alias for the grouping key used by selection."""
        return self.subtopic


class QuestionCatalog(BaseModel):
    """Top-level catalog document: {"questions": [...]}."""

    questions: list[Question]

    @model_validator(mode="after")
    def unique_ids(self) -> "QuestionCatalog":
        seen: set[str] = set()
        duplicates: list[str] = []
        for question in self.questions:
            if question.id in seen:
                duplicates.append(question.id)
            seen.add(question.id)
        if duplicates:
            raise ValueError(f"Duplicate question ids: {sorted(set(duplicates))}")
        return self
