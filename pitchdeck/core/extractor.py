"""
Attachment extraction for messages classified as carrying a pitch deck.

Cheap structural pre-filters run before any inference call; the model
is only paid for on messages that look like "body + attachments".
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .decoder import decode_email
from .orchestrator import PitchDeckOrchestrator
from ..mail.base import AttachmentStorage, MailTransport, MailTransportError
from ..mail.storage import generate_file_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttachmentRecord:
    generated_file_name: str
    source_file_name: str
    data: bytes = field(repr=False)


@dataclass
class ExtractionResult:
    subject: str
    body: str
    from_email: str
    attachments: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "subject": self.subject,
            "body": self.body,
            "attachments": list(self.attachments),
            "from": self.from_email,
        }


def _attachment_id(part: Dict) -> Optional[str]:
    return (part.get("body") or {}).get("attachmentId")


class AttachmentExtractor:
    """
    Runs decode -> classify -> save for one message at a time.

    Args:
        transport: Mailbox access
        storage: Where attachment bytes go
        orchestrator: Classification pipeline
        self_address: Mailbox owner; messages from it are skipped
        strict_part_layout: Require the attachment at part index 1 (body at
            index 0). When False, any part with an attachment id qualifies.
        namer: File name generator, `generate_file_name` by default
    """

    def __init__(
        self,
        transport: MailTransport,
        storage: AttachmentStorage,
        orchestrator: PitchDeckOrchestrator,
        self_address: str = "",
        strict_part_layout: bool = True,
        namer: Optional[Callable[[str], str]] = None,
    ):
        self.transport = transport
        self.storage = storage
        self.orchestrator = orchestrator
        self.self_address = self_address
        self.strict_part_layout = strict_part_layout
        self.namer = namer or generate_file_name

    def attachment_parts(self, payload: Dict) -> List[Dict]:
        """Parts to download, or [] when the message shape disqualifies it."""
        parts = payload.get("parts") or []

        if self.strict_part_layout:
            if len(parts) < 2 or not _attachment_id(parts[1]):
                return []
            candidates = parts[1:]
        else:
            candidates = parts

        return [p for p in candidates if _attachment_id(p)]

    def extract(self, message_id: str, self_address: Optional[str] = None) -> Optional[ExtractionResult]:
        """
        Classify one message and save its attachments if it carries a pitch deck.

        Returns:
            ExtractionResult, or None when the message is filtered out,
            classified negative, or a transport/storage failure occurs
        """
        if self_address is None:
            self_address = self.self_address

        try:
            message = self.transport.get_message(message_id)
        except MailTransportError as e:
            logger.warning(f"Cannot fetch message {message_id}: {e}")
            return None

        payload = message.get("payload") or {}
        parts = self.attachment_parts(payload)
        if not parts:
            logger.debug(f"Message {message_id} has no attachment part, skipping")
            return None

        email = decode_email(payload)
        if not email.from_email:
            logger.debug(f"Message {message_id} has no sender address, skipping")
            return None
        if self_address and self_address in email.from_email:
            logger.debug(f"Message {message_id} was sent by the mailbox owner, skipping")
            return None

        if not self.orchestrator.classify(email.subject, email.body):
            logger.info(f"Message {message_id}: no pitch deck")
            return None
        logger.info(f"Message {message_id}: pitch deck detected")

        result = ExtractionResult(subject=email.subject, body=email.body, from_email=email.from_email)
        try:
            for part in parts:
                record = self._fetch(part, message_id)
                self.storage.save(record.data, record.generated_file_name)
                result.attachments.append(record.generated_file_name)
        except (MailTransportError, OSError) as e:
            logger.error(f"Extraction of message {message_id} failed: {e}")
            return None

        return result

    def _fetch(self, part: Dict, message_id: str) -> AttachmentRecord:
        data = self.transport.get_attachment(_attachment_id(part), message_id)
        source = part.get("filename") or ""
        return AttachmentRecord(
            generated_file_name=self.namer(source),
            source_file_name=source,
            data=data,
        )
