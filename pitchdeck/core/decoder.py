"""
Decoding of Gmail message resources into the fields the classifier needs.

A payload is the Gmail `MessagePart` JSON: `mimeType`, `headers`,
`body` ({"size", "data"} or {"attachmentId", "size"}) and optional `parts`.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

FORWARD_MARKER = "Fwd:"

# Quoted preamble of a forwarded message ends at its "To: ... <x@gmail.com>" line
QUOTED_PREAMBLE_END = re.compile(r"To:.*?@gmail\.com>\s*\n")


@dataclass(frozen=True)
class DecodedEmail:
    subject: str
    body: str
    from_email: str


def decode_part_data(data: str) -> str:
    """Decode base64url inline body data (Gmail omits the padding)."""
    padded = data + "=" * (-len(data) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError):
        logger.warning("Inline body data is not valid base64url")
        return ""
    return raw.decode("utf-8", errors="replace")


def _is_plain_text_leaf(part: Dict) -> bool:
    body = part.get("body") or {}
    return part.get("mimeType") == "text/plain" and (body.get("size") or 0) > 0


def find_body(part: Optional[Dict]) -> str:
    """
    Return the plain-text body of a part tree.

    Only the first child is followed at each level: siblings are never
    inspected, so a text/plain leaf under a second branch is not found.
    """
    while part:
        if _is_plain_text_leaf(part):
            text = decode_part_data(part["body"].get("data") or "").strip()
            original = QUOTED_PREAMBLE_END.split(text)[-1]
            return original.strip()

        children = part.get("parts") or []
        if not children:
            return ""
        part = children[0]

    return ""


def _header_value(headers: Iterable[Dict], name: str) -> Optional[str]:
    for header in headers:
        if header.get("name") == name:
            return header.get("value") or ""
    return None


def find_subject(headers: Iterable[Dict]) -> str:
    """Subject with every leading "Fwd:" marker dropped."""
    value = _header_value(headers, "Subject")
    if value is None:
        return ""
    return value.split(FORWARD_MARKER)[-1].strip()


def find_from_email(headers: Iterable[Dict]) -> str:
    """Address between the angle brackets of `Display Name <addr>`, or ""."""
    value = _header_value(headers, "From")
    if not value:
        return ""

    start = value.find("<")
    if start < 0:
        return ""
    end = value.find(">", start + 1)
    if end < 0:
        return ""
    return value[start + 1:end]


def decode_email(payload: Dict, headers: Optional[List[Dict]] = None) -> DecodedEmail:
    """
    Extract subject, plain-text body and sender address from a payload.

    Args:
        payload: Gmail message payload
        headers: Header list; defaults to the payload's own headers
    """
    if headers is None:
        headers = payload.get("headers") or []

    return DecodedEmail(
        subject=find_subject(headers),
        body=find_body(payload),
        from_email=find_from_email(headers),
    )
