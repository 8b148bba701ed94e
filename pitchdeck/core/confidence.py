"""
Decision policy turning a model probability into a verdict.

The threshold and the repair bound are explicit values rather than
literals scattered through the pipeline, so tests and config can change them.
"""

from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_THRESHOLD = 60
DEFAULT_MAX_REPAIR_ATTEMPTS = 5


@dataclass(frozen=True)
class ClassificationPolicy:
    """
    Attributes:
        threshold: Minimum probability (0-100) that counts as a pitch deck
        max_repair_attempts: Attempt number at which the repair loop gives
            up with probability 0; the initial answer is attempt 1
    """

    threshold: int = DEFAULT_THRESHOLD
    max_repair_attempts: int = DEFAULT_MAX_REPAIR_ATTEMPTS

    def __post_init__(self):
        if not 0 <= self.threshold <= 100:
            raise ValueError(f"threshold must be within 0-100, got {self.threshold}")
        if self.max_repair_attempts < 1:
            raise ValueError(
                f"max_repair_attempts must be at least 1, got {self.max_repair_attempts}"
            )

    def passes(self, probability: float) -> bool:
        """True when the probability reaches the threshold."""
        return probability >= self.threshold

    @classmethod
    def from_config(cls, config: Optional[Dict] = None) -> "ClassificationPolicy":
        """Build from the `classification` config section."""
        config = config or {}
        return cls(
            threshold=config.get("threshold", DEFAULT_THRESHOLD),
            max_repair_attempts=config.get("max_repair_attempts", DEFAULT_MAX_REPAIR_ATTEMPTS),
        )
