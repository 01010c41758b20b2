"""Adaptive question selection: weights, sampling and mode dispatch."""

from examprep.learning_engine.selection.sampler import create_seeded_rng, shuffle_take, weighted_sample
from examprep.learning_engine.selection.service import (
    QuestionSelector,
    SelectionMode,
    SelectionOutcome,
    Strategy,
)
from examprep.learning_engine.selection.weights import (
    compute_question_weight,
    compute_topic_weights,
    topic_weight,
)

__all__ = [
    "QuestionSelector",
    "SelectionMode",
    "SelectionOutcome",
    "Strategy",
    "compute_question_weight",
    "compute_topic_weights",
    "create_seeded_rng",
    "shuffle_take",
    "topic_weight",
    "weighted_sample",
]
