"""
Command line driver: scan the most recent messages of a Gmail mailbox
and print one JSON line per extracted pitch deck on stdout.
"""

import argparse
import json
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .core.classifiers import ProbabilityClassifier, YesNoClassifier
from .core.confidence import ClassificationPolicy
from .core.extractor import AttachmentExtractor, ExtractionResult
from .core.orchestrator import PitchDeckOrchestrator
from .mail.base import MailTransportError
from .mail.gmail import GmailTransport
from .mail.storage import FileSystemStorage
from .providers.base import ChatProvider, TextGenerationProvider
from .providers.factory import ProviderFactory
from .utils.config import load_config
from .utils.logger import logger


def build_orchestrator(config: Dict) -> PitchDeckOrchestrator:
    """Wire both tiers from the `providers` and `classification` sections."""
    providers = config["providers"]
    policy = ClassificationPolicy.from_config(config.get("classification"))

    primary = ProviderFactory.create_for_tier(providers["primary"], TextGenerationProvider)
    secondary = ProviderFactory.create_for_tier(providers["secondary"], ChatProvider)

    return PitchDeckOrchestrator(
        YesNoClassifier(primary),
        ProbabilityClassifier(secondary, policy),
    )


def build_extractor(config: Dict, transport: GmailTransport) -> AttachmentExtractor:
    return AttachmentExtractor(
        transport=transport,
        storage=FileSystemStorage(config["attachments_dir"]),
        orchestrator=build_orchestrator(config),
        self_address=config.get("self_address", ""),
        strict_part_layout=config["extraction"]["strict_part_layout"],
    )


def scan_inbox(
    extractor: AttachmentExtractor,
    transport: GmailTransport,
    self_address: str,
    max_results: int = 100,
    max_workers: int = 1,
) -> List[ExtractionResult]:
    """
    Run the extractor over the latest messages.

    Messages are independent, so with max_workers > 1 they are processed
    on a thread pool. Results keep listing order.
    """
    message_ids = [m["id"] for m in transport.list_messages(max_results)]

    def _extract(message_id: str) -> Optional[ExtractionResult]:
        return extractor.extract(message_id, self_address)

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(_extract, message_ids))
    else:
        results = [_extract(message_id) for message_id in message_ids]

    found = [r for r in results if r is not None]
    logger.info(f"Scanned {len(message_ids)} messages, {len(found)} with pitch decks")
    return found


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find pitch deck attachments in a Gmail mailbox and save them"
    )
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument(
        "--max-results", type=int, help="Number of recent messages to scan"
    )
    parser.add_argument(
        "--workers", type=int, help="Messages processed concurrently"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    config = load_config(args.config)

    try:
        transport = GmailTransport(config["gmail"])
        extractor = build_extractor(config, transport)
    except ValueError as e:
        logger.error(f"Cannot start: {e}")
        return 1

    try:
        self_address = config.get("self_address") or transport.get_profile().get("emailAddress", "")
        results = scan_inbox(
            extractor,
            transport,
            self_address,
            max_results=args.max_results or config["gmail"]["max_results"],
            max_workers=args.workers or config["max_workers"],
        )
    except MailTransportError as e:
        logger.error(f"Mailbox scan failed: {e}")
        return 1

    for result in results:
        sys.stdout.write(json.dumps(result.to_dict()) + "\n")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
