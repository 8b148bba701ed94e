"""
Mail transport and attachment storage collaborators.
"""

from .base import AttachmentStorage, MailTransport, MailTransportError
from .gmail import GmailTransport
from .storage import AttachmentNamer, FileSystemStorage, generate_file_name

__all__ = [
    "AttachmentStorage",
    "MailTransport",
    "MailTransportError",
    "GmailTransport",
    "AttachmentNamer",
    "FileSystemStorage",
    "generate_file_name",
]
