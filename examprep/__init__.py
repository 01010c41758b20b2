"""Exam practice backend: question catalog, learner progress and adaptive selection."""

__version__ = "0.1.0"
