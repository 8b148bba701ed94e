"""
Score repair loop for the secondary tier.

The chat model is asked for {"probability": x} but drifts: prose, JSON
with nested text, or both. Each malformed answer is sent back once with
instructions to coerce it into shape, until a numeric probability comes
out or the attempt bound is reached, which resolves to probability 0.

States:
    AWAITING_JSON            - inspect the latest answer
    AWAITING_NUMERIC_REPAIR  - answer was JSON without a numeric probability
    AWAITING_REPHRASE_REPAIR - answer was not JSON at all
    DONE                     - a probability is known
"""

import json
import logging
from enum import Enum
from typing import Any, Optional, Tuple

from .confidence import ClassificationPolicy
from .prompts import build_numeric_repair_messages, build_rephrase_repair_messages
from ..providers.base import ChatProvider

logger = logging.getLogger(__name__)


class RepairState(Enum):
    AWAITING_JSON = "awaiting_json"
    AWAITING_NUMERIC_REPAIR = "awaiting_numeric_repair"
    AWAITING_REPHRASE_REPAIR = "awaiting_rephrase_repair"
    DONE = "done"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def inspect_answer(raw_text: str) -> Tuple[RepairState, Any]:
    """
    Classify one model answer.

    Returns:
        (DONE, probability), (AWAITING_NUMERIC_REPAIR, parsed_json)
        or (AWAITING_REPHRASE_REPAIR, raw_text)
    """
    try:
        parsed = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError):
        # RecursionError: pathologically nested JSON
        return RepairState.AWAITING_REPHRASE_REPAIR, raw_text

    probability = parsed.get("probability") if isinstance(parsed, dict) else None
    if _is_number(probability):
        return RepairState.DONE, probability
    return RepairState.AWAITING_NUMERIC_REPAIR, parsed


class ScoreRepairLoop:
    """
    Bounded loop resolving a chat answer into a probability.

    Every repair step issues exactly one backend call. With the default
    policy at most four repair calls follow the initial answer.
    """

    def __init__(self, provider: ChatProvider, policy: Optional[ClassificationPolicy] = None):
        self.provider = provider
        self.policy = policy or ClassificationPolicy()

    def resolve(self, raw_text: str) -> float:
        """
        Return the probability carried by `raw_text`, repairing as needed.

        Returns 0 once the attempt bound is reached. Provider errors raised
        by a repair call propagate to the caller.
        """
        state = RepairState.AWAITING_JSON
        value: Any = raw_text
        attempt = 1

        while state is not RepairState.DONE:
            if state is RepairState.AWAITING_JSON:
                if attempt >= self.policy.max_repair_attempts:
                    logger.warning(
                        f"No usable probability after {attempt - 1} repair attempts; scoring 0"
                    )
                    value = 0
                    state = RepairState.DONE
                    continue
                state, value = inspect_answer(value)
                continue

            if state is RepairState.AWAITING_NUMERIC_REPAIR:
                logger.info(f"Attempt {attempt}: JSON without numeric probability, asking for repair")
                messages = build_numeric_repair_messages(value)
            else:
                logger.info(f"Attempt {attempt}: answer is not JSON, asking for rephrase")
                messages = build_rephrase_repair_messages(value)

            value = self.provider.complete(messages)
            attempt += 1
            state = RepairState.AWAITING_JSON

        logger.debug(f"Resolved probability {value} after {attempt} attempt(s)")
        return value

    def repair(self, raw_text: str) -> bool:
        """Resolve and apply the threshold."""
        return self.policy.passes(self.resolve(raw_text))
