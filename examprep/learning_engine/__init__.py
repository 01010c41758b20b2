"""
Learning engine: adaptive question selection.

Weights questions by the learner's per-topic accuracy and recent
per-question results, then samples without replacement.
"""
