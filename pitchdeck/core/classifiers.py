"""
Tier adapters: each turns one backend into a pitch deck yes/no verdict.

Both raise ProviderError subclasses on failure; choosing what happens
next is the orchestrator's job.
"""

import logging
from typing import Optional

from .confidence import ClassificationPolicy
from .prompts import build_probability_messages, build_yes_no_prompt
from .score_repair import ScoreRepairLoop
from ..providers.base import ChatProvider, ProviderResponseError, TextGenerationProvider

logger = logging.getLogger(__name__)


class YesNoClassifier:
    """
    Primary tier: a text-generation model answering exactly "yes" or "no".
    """

    def __init__(self, provider: TextGenerationProvider):
        self.provider = provider

    def classify(self, subject: str, body: str) -> bool:
        """
        Raises:
            ProviderTransportError: backend call failed
            ProviderResponseError: payload malformed or answer not yes/no
        """
        answer = self.provider.generate(build_yes_no_prompt(subject, body))

        if answer == "yes":
            logger.info(f"Analysed using {self.provider.get_name()}: yes")
            return True
        if answer == "no":
            logger.info(f"Analysed using {self.provider.get_name()}: no")
            return False

        raise ProviderResponseError(
            f"{self.provider.get_name()} answered neither yes nor no", payload=answer
        )


class ProbabilityClassifier:
    """
    Secondary tier: a chat model asked for {"probability": x}, with the
    score repair loop coercing malformed answers.
    """

    def __init__(self, provider: ChatProvider, policy: Optional[ClassificationPolicy] = None):
        self.provider = provider
        self.repair_loop = ScoreRepairLoop(provider, policy)

    def classify(self, subject: str, body: str) -> bool:
        """
        Raises:
            ProviderError: the initial call or a repair call failed
        """
        answer = self.provider.complete(build_probability_messages(subject, body))
        verdict = self.repair_loop.repair(answer)
        logger.info(f"Analysed using {self.provider.get_name()}: {verdict}")
        return verdict
