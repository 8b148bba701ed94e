"""
Collaborator interfaces consumed by the attachment extractor.
"""

from abc import ABC, abstractmethod
from typing import Dict


class MailTransportError(Exception):
    """Failure talking to the mail provider."""


class MailTransport(ABC):
    """Read access to a mailbox."""

    @abstractmethod
    def get_message(self, message_id: str) -> Dict:
        """
        Return the message resource ({"id", "payload": {...}}).

        Raises:
            MailTransportError: on any transport failure
        """
        pass

    @abstractmethod
    def get_attachment(self, attachment_id: str, message_id: str) -> bytes:
        """
        Return the decoded attachment bytes.

        Raises:
            MailTransportError: on any transport failure
        """
        pass


class AttachmentStorage(ABC):
    """Destination for extracted attachments."""

    @abstractmethod
    def save(self, data: bytes, file_name: str) -> None:
        """Persist `data` under `file_name`; raises OSError on failure."""
        pass
