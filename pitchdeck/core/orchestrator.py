"""
Orchestrator module - pitch deck classification pipeline.

Flow: normalize -> primary tier -> (on failure) secondary tier -> verdict.
Fails closed: when no tier yields a usable answer the verdict is False.
"""

import logging

from .classifiers import ProbabilityClassifier, YesNoClassifier
from ..providers.base import ProviderError
from ..utils.sanitize import normalize_text

logger = logging.getLogger(__name__)


class PitchDeckOrchestrator:
    """
    Sequences the classification tiers.

    Each tier gets a single attempt; retries only happen inside the
    secondary tier's repair loop. Holds no per-message state, so one
    instance can serve concurrent messages.
    """

    def __init__(self, primary: YesNoClassifier, secondary: ProbabilityClassifier):
        self.primary = primary
        self.secondary = secondary

    def classify(self, subject: str, body: str) -> bool:
        """
        Decide whether the message carries a pitch deck.

        Never raises for backend failures.
        """
        clean_subject = normalize_text(subject)
        clean_body = normalize_text(body)
        logger.debug(f"Classifying subject={clean_subject!r}")

        try:
            return self.primary.classify(clean_subject, clean_body)
        except ProviderError as e:
            logger.warning(f"Primary tier failed, falling back to secondary: {e}")

        try:
            return self.secondary.classify(clean_subject, clean_body)
        except ProviderError as e:
            logger.error(f"Both classification tiers failed, assuming no pitch deck: {e}")
            return False
