"""
Learning Engine Configuration - Central Constants Registry.

All constants used by the selection algorithm are defined here with provenance.
No magic numbers in algorithm implementations. Values are preserved exactly;
change them only with product guidance.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourcedValue:
    """
    A constant value with documented provenance.

    All selection constants use this type to enforce documentation.
    """

    value: Any
    source: str
    notes: str = ""
    validated: bool = False

    def __post_init__(self):
        if not self.source or self.source.strip() == "":
            raise ValueError(f"SourcedValue must have non-empty source. Got: {self.source}")


# =============================================================================
# Topic weighting
# =============================================================================

# Accuracy assumed for a topic with no attempts
NEUTRAL_TOPIC_ACCURACY = SourcedValue(
    value=0.5,
    source="Legacy adaptive selector (topic accuracy default)",
    notes="Unattempted topics are average risk: neither starved nor over-served.",
    validated=True,
)

# weight = 1 - accuracy + offset, giving [0.3, 1.3]
TOPIC_WEIGHT_OFFSET = SourcedValue(
    value=0.3,
    source="Legacy adaptive selector (topic weight formula)",
    notes="Floor for a fully mastered topic; weakest topic is ~4.3x more likely (1.3/0.3).",
    validated=True,
)

# Base weight for a question whose topic has no computed weight
UNKNOWN_TOPIC_WEIGHT = SourcedValue(
    value=1.0,
    source="Legacy adaptive selector (missing topic default)",
    notes="Neutral multiplier for topics outside the registry.",
    validated=True,
)

# =============================================================================
# Question weighting
# =============================================================================

RECENT_ATTEMPT_WINDOW = SourcedValue(
    value=3,
    source="Legacy adaptive selector (last 3 attempts)",
    notes="Only the most recent attempts on a question adjust its weight.",
    validated=True,
)

MISSED_BOOST = SourcedValue(
    value=1.5,
    source="Legacy adaptive selector (consistently missed boost)",
    notes="Every recent attempt wrong -> surface the question more often.",
    validated=True,
)

CORRECT_DAMPING = SourcedValue(
    value=0.7,
    source="Legacy adaptive selector (consistently correct damping)",
    notes="Every recent attempt right -> let the question recede.",
    validated=True,
)

# =============================================================================
# Mode thresholds
# =============================================================================

WEAK_TOPIC_ACCURACY_THRESHOLD = SourcedValue(
    value=0.7,
    source="Legacy adaptive selector (weak mode, accuracy below 70%)",
    notes="Strictly below: a topic at exactly 70% is not weak.",
    validated=True,
)


def get_selection_params() -> dict[str, Any]:
    """Flat view of the constants (for run logging)."""
    return {
        "neutral_topic_accuracy": NEUTRAL_TOPIC_ACCURACY.value,
        "topic_weight_offset": TOPIC_WEIGHT_OFFSET.value,
        "unknown_topic_weight": UNKNOWN_TOPIC_WEIGHT.value,
        "recent_attempt_window": RECENT_ATTEMPT_WINDOW.value,
        "missed_boost": MISSED_BOOST.value,
        "correct_damping": CORRECT_DAMPING.value,
        "weak_topic_accuracy_threshold": WEAK_TOPIC_ACCURACY_THRESHOLD.value,
    }
