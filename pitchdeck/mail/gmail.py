"""
Gmail REST API transport.

Authentication is outside this module: it expects a ready OAuth access
token (keyring/env `gmail`, see utils.secrets).
"""

import base64
import binascii
import threading
from typing import Dict, List, Optional

import requests

from .base import MailTransport, MailTransportError
from ..utils.logger import logger
from ..utils.secrets import get_api_key


class GmailTransport(MailTransport):
    """
    Thin wrapper over `users.getProfile`, `users.messages.list`,
    `users.messages.get` and `users.messages.attachments.get`.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Args:
            config: `gmail` config section with:
                - access_token: OAuth token (or retrieved from keyring/env)
                - base_url: API root (default: https://gmail.googleapis.com/gmail/v1)
                - user_id: Mailbox (default: me)
                - timeout: Request timeout in seconds
        """
        config = config or {}
        self.access_token = config.get("access_token") or get_api_key("gmail")
        self.base_url = config.get("base_url", "https://gmail.googleapis.com/gmail/v1")
        self.user_id = config.get("user_id", "me")
        self.timeout = config.get("timeout", 30)

        if not self.access_token:
            raise ValueError(
                "Gmail access token not configured. Set GMAIL_ACCESS_TOKEN or store it with "
                "pitchdeck.utils.secrets.set_api_key('gmail', '...')"
            )

        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Session of the calling thread; scan workers never share one."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update({"Authorization": f"Bearer {self.access_token}"})
            self._local.session = session
        return session

    def _get(self, path: str, params: Optional[Dict] = None) -> Dict:
        url = f"{self.base_url}/users/{self.user_id}/{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise MailTransportError(f"Gmail request to {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MailTransportError(f"Gmail returned non-JSON body for {path}") from e

    def get_profile(self) -> Dict:
        """Mailbox profile; `emailAddress` is the account's own address."""
        return self._get("profile")

    def list_messages(self, max_results: int = 100) -> List[Dict]:
        """Most recent message stubs ([{"id", "threadId"}])."""
        data = self._get("messages", params={"maxResults": max_results})
        messages = data.get("messages") or []
        logger.info(f"Listed {len(messages)} messages")
        return messages

    def get_message(self, message_id: str) -> Dict:
        return self._get(f"messages/{message_id}")

    def get_attachment(self, attachment_id: str, message_id: str) -> bytes:
        data = self._get(f"messages/{message_id}/attachments/{attachment_id}")
        encoded = data.get("data")
        if encoded is None:
            raise MailTransportError(f"Attachment {attachment_id} has no data")

        try:
            return base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
        except (binascii.Error, ValueError) as e:
            raise MailTransportError(f"Attachment {attachment_id} is not valid base64url") from e
