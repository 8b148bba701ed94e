"""
Unit tests for the scan driver.
"""

import json

from unittest.mock import Mock, patch

from pitchdeck.core.classifiers import ProbabilityClassifier, YesNoClassifier
from pitchdeck.core.extractor import ExtractionResult
from pitchdeck.main import build_orchestrator, main, scan_inbox
from pitchdeck.mail.base import MailTransportError
from pitchdeck.providers.factory import ProviderFactory
from pitchdeck.utils.config import _DEFAULT_CONFIG


def result_for(message_id):
    return ExtractionResult(subject=message_id, body="", from_email="a@b.com", attachments=[f"{message_id}.pdf"])


class TestScanInbox:

    def setup_method(self):
        self.transport = Mock()
        self.transport.list_messages.return_value = [{"id": "m1"}, {"id": "m2"}, {"id": "m3"}]
        self.extractor = Mock()
        self.extractor.extract.side_effect = lambda mid, addr: None if mid == "m2" else result_for(mid)

    def test_sequential(self):
        results = scan_inbox(self.extractor, self.transport, "owner@gmail.com", max_results=3)

        assert [r.subject for r in results] == ["m1", "m3"]
        self.transport.list_messages.assert_called_once_with(3)
        self.extractor.extract.assert_any_call("m2", "owner@gmail.com")

    def test_thread_pool_keeps_order(self):
        results = scan_inbox(self.extractor, self.transport, "owner@gmail.com", max_workers=3)

        assert [r.subject for r in results] == ["m1", "m3"]
        assert self.extractor.extract.call_count == 3


class TestBuildOrchestrator:

    def setup_method(self):
        ProviderFactory.clear_cache()

    def test_wires_both_tiers(self):
        config = json.loads(json.dumps(_DEFAULT_CONFIG))
        config["providers"]["primary"]["api_key"] = "hf"
        config["providers"]["secondary"]["api_key"] = "sk"
        config["classification"]["threshold"] = 80

        orchestrator = build_orchestrator(config)

        assert isinstance(orchestrator.primary, YesNoClassifier)
        assert isinstance(orchestrator.secondary, ProbabilityClassifier)
        assert orchestrator.secondary.repair_loop.policy.threshold == 80


class TestMain:

    @patch("pitchdeck.main.load_dotenv")
    @patch("pitchdeck.main.load_config")
    @patch("pitchdeck.main.GmailTransport")
    @patch("pitchdeck.main.build_extractor")
    @patch("pitchdeck.main.scan_inbox")
    def test_prints_json_lines(self, mock_scan, mock_build, mock_transport_cls, mock_load, mock_dotenv, capsys):
        mock_load.return_value = json.loads(json.dumps(_DEFAULT_CONFIG))
        mock_transport_cls.return_value.get_profile.return_value = {"emailAddress": "owner@gmail.com"}
        mock_scan.return_value = [result_for("m1")]

        assert main(["--max-results", "5", "--workers", "2"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert json.loads(lines[0]) == {
            "subject": "m1", "body": "", "attachments": ["m1.pdf"], "from": "a@b.com"
        }
        args, kwargs = mock_scan.call_args
        assert args[2] == "owner@gmail.com"
        assert kwargs == {"max_results": 5, "max_workers": 2}

    @patch("pitchdeck.main.load_dotenv")
    @patch("pitchdeck.main.load_config")
    @patch("pitchdeck.main.GmailTransport")
    def test_missing_credentials(self, mock_transport_cls, mock_load, mock_dotenv):
        mock_load.return_value = json.loads(json.dumps(_DEFAULT_CONFIG))
        mock_transport_cls.side_effect = ValueError("Gmail access token not configured")

        assert main([]) == 1

    @patch("pitchdeck.main.load_dotenv")
    @patch("pitchdeck.main.load_config")
    @patch("pitchdeck.main.GmailTransport")
    @patch("pitchdeck.main.build_extractor")
    def test_mailbox_failure(self, mock_build, mock_transport_cls, mock_load, mock_dotenv):
        mock_load.return_value = json.loads(json.dumps(_DEFAULT_CONFIG))
        mock_transport_cls.return_value.get_profile.side_effect = MailTransportError("401")

        assert main([]) == 1
