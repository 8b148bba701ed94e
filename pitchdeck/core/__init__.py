"""
Core pipeline for PitchDeck Scout.

- decoder: Gmail payload -> subject, body, sender
- prompts: prompt templates for both tiers and repairs
- confidence: threshold and repair bound policy
- score_repair: bounded repair of malformed probability answers
- classifiers: primary (yes/no) and secondary (probability) tiers
- orchestrator: tier fallback, fail-closed verdict
- extractor: pre-filters, classification and attachment saving
"""

from .classifiers import ProbabilityClassifier, YesNoClassifier
from .confidence import ClassificationPolicy
from .decoder import DecodedEmail, decode_email
from .extractor import AttachmentExtractor, AttachmentRecord, ExtractionResult
from .orchestrator import PitchDeckOrchestrator
from .score_repair import RepairState, ScoreRepairLoop

__all__ = [
    "ProbabilityClassifier",
    "YesNoClassifier",
    "ClassificationPolicy",
    "DecodedEmail",
    "decode_email",
    "AttachmentExtractor",
    "AttachmentRecord",
    "ExtractionResult",
    "PitchDeckOrchestrator",
    "RepairState",
    "ScoreRepairLoop",
]
