import atexit
import base64
import faulthandler
import os
import sys
import tempfile
import threading
import time
from types import SimpleNamespace
from typing import Optional

import pytest

# Keep log files out of the home directory; must run before pitchdeck imports
os.environ.setdefault("PITCHDECK_LOG_DIR", tempfile.mkdtemp(prefix="pitchdeck-logs-"))

def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _start_watchdog(timeout_seconds: int) -> Optional[threading.Timer]:
    if timeout_seconds <= 0:
        return None

    def _kill() -> None:
        try:
            faulthandler.dump_traceback(file=sys.stderr, all_threads=True)
        except Exception:
            pass
        # Hard exit: guarantees CI can't hang forever.
        os._exit(2)

    timer = threading.Timer(timeout_seconds, _kill)
    timer.daemon = True
    timer.start()
    return timer


def pytest_sessionstart(session) -> None:  # noqa: ANN001
    # Always enable faulthandler for better diagnostics on timeouts/hangs.
    try:
        faulthandler.enable(all_threads=True)
    except Exception:
        pass

    # Absolute upper bound for the whole test run.
    # Default: 20 minutes (matches "never hang" requirement but leaves room for CI slowness).
    watchdog_seconds = _env_int("PYTEST_WATCHDOG_TIMEOUT_SECONDS", 20 * 60)
    timer = _start_watchdog(watchdog_seconds)

    if timer is not None:
        atexit.register(timer.cancel)

    # Minor guardrail: if a test suite is extremely slow, at least dump stacks periodically.
    # This doesn't stop execution, but helps debug if the watchdog triggers.
    dump_every = _env_int("PYTEST_DUMP_STACK_EVERY_SECONDS", 0)
    if dump_every > 0:
        _start_periodic_dump(dump_every)


def _start_periodic_dump(every_seconds: int) -> None:
    def _loop() -> None:
        while True:
            time.sleep(every_seconds)
            try:
                faulthandler.dump_traceback(file=sys.stderr, all_threads=True)
            except Exception:
                pass

    t = threading.Thread(target=_loop, daemon=True)
    t.start()


def encode_body(text: str) -> str:
    """Gmail-style base64url without padding."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def make_headers(subject: Optional[str] = None, sender: Optional[str] = None) -> list:
    headers = [{"name": "To", "value": "Inbox Owner <owner@gmail.com>"}]
    if subject is not None:
        headers.append({"name": "Subject", "value": subject})
    if sender is not None:
        headers.append({"name": "From", "value": sender})
    return headers


def text_part(text: str, mime_type: str = "text/plain") -> dict:
    data = encode_body(text)
    return {"mimeType": mime_type, "body": {"size": len(text), "data": data}}


def attachment_part(filename: str, attachment_id: str) -> dict:
    return {
        "mimeType": "application/pdf",
        "filename": filename,
        "body": {"attachmentId": attachment_id, "size": 1024},
    }


@pytest.fixture
def pitch_message():
    """Message with a text body at index 0 and two attachments."""
    return {
        "id": "msg-1",
        "payload": {
            "mimeType": "multipart/mixed",
            "headers": make_headers(
                subject="Fwd: Acme Seed Round",
                sender="Jane Founder <jane@acme.io>",
            ),
            "parts": [
                {
                    "mimeType": "multipart/alternative",
                    "body": {"size": 0},
                    "parts": [
                        text_part("Hi,\n\nPlease find our   pitch deck attached.\n"),
                        text_part("<p>Please find our pitch deck attached.</p>", "text/html"),
                    ],
                },
                attachment_part("deck.pdf", "att-1"),
                attachment_part("financials.xlsx", "att-2"),
            ],
        },
    }


@pytest.fixture
def mail_parts():
    """Builders for Gmail-shaped payload fragments."""
    return SimpleNamespace(
        encode=encode_body,
        headers=make_headers,
        text=text_part,
        attachment=attachment_part,
    )
