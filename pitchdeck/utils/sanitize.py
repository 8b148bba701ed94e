"""
Text and file name sanitization utilities.
"""

import re

MAX_FILE_NAME_LENGTH = 200

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Collapse every run of whitespace (newlines and tabs included) into a
    single space.

    Total: None and non-string input are coerced, never rejected.
    """
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return _WHITESPACE_RUN.sub(" ", text)


def sanitize_file_name(name: str) -> str:
    """
    Make an attachment file name safe to write inside the storage directory.

    Args:
        name: File name as announced by the sender

    Returns:
        Name without control characters or path components
    """
    if not name:
        return ""

    # Remove control characters
    name = re.sub(r'[\x00-\x1f\x7f]', '', name)

    # Remove path components; a dot run inside a name is kept
    name = name.replace('/', '')
    name = name.replace('\\', '')

    if len(name) > MAX_FILE_NAME_LENGTH:
        name = name[-MAX_FILE_NAME_LENGTH:]

    name = name.strip()
    if name in (".", ".."):
        return ""
    return name
