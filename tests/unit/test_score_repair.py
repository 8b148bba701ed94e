"""
Unit tests for the score repair loop.
"""

import json

import pytest
from unittest.mock import Mock

from pitchdeck.core.confidence import ClassificationPolicy
from pitchdeck.core.score_repair import RepairState, ScoreRepairLoop, inspect_answer
from pitchdeck.providers.base import ChatProvider, ProviderTransportError


def make_provider(*answers):
    provider = Mock(spec=ChatProvider)
    provider.get_name.return_value = "openai"
    provider.complete.side_effect = list(answers)
    return provider


class TestInspectAnswer:

    def test_numeric_probability(self):
        assert inspect_answer('{"probability": 75}') == (RepairState.DONE, 75)

    def test_float_probability(self):
        assert inspect_answer('{"probability": 60.5}') == (RepairState.DONE, 60.5)

    def test_non_numeric_probability(self):
        state, value = inspect_answer('{"probability": "about 80 percent"}')
        assert state is RepairState.AWAITING_NUMERIC_REPAIR
        assert value == {"probability": "about 80 percent"}

    def test_boolean_is_not_numeric(self):
        state, _ = inspect_answer('{"probability": true}')
        assert state is RepairState.AWAITING_NUMERIC_REPAIR

    def test_json_without_object(self):
        state, value = inspect_answer("42")
        assert state is RepairState.AWAITING_NUMERIC_REPAIR
        assert value == 42

    def test_prose(self):
        text = "The probability is quite high."
        assert inspect_answer(text) == (RepairState.AWAITING_REPHRASE_REPAIR, text)


class TestScoreRepairLoop:

    @pytest.mark.parametrize("probability,expected", [
        (0, False), (59, False), (60, True), (61, True), (100, True),
    ])
    def test_well_formed_answer_needs_no_call(self, probability, expected):
        """Valid JSON resolves immediately against the threshold."""
        provider = make_provider()
        loop = ScoreRepairLoop(provider)

        assert loop.repair(json.dumps({"probability": probability})) is expected
        provider.complete.assert_not_called()

    def test_numeric_repair_sends_parsed_json(self):
        """Wrong-shape JSON is sent back as JSON for one repair call."""
        provider = make_provider('{"probability": 85}')
        loop = ScoreRepairLoop(provider)

        assert loop.repair('{"probability": {"value": "85"}}') is True
        assert provider.complete.call_count == 1

        messages = provider.complete.call_args[0][0]
        assert messages[0] == {"role": "system", "content": "I will give a json"}
        assert messages[-1] == {"role": "user", "content": '{"probability": {"value": "85"}}'}

    def test_rephrase_repair_sends_raw_text(self):
        """Prose is sent back verbatim for rephrasing."""
        provider = make_provider('{"probability": 10}')
        loop = ScoreRepairLoop(provider)

        assert loop.repair("I think there is no deck") is False

        messages = provider.complete.call_args[0][0]
        assert messages[0]["content"] == "I will give a description, rephrase it."
        assert messages[-1] == {"role": "user", "content": "I think there is no deck"}

    def test_mixed_repairs_until_valid(self):
        """Branches can alternate; each step makes exactly one call."""
        provider = make_provider('{"probability": "high"}', "still prose", '{"probability": 90}')
        loop = ScoreRepairLoop(provider)

        assert loop.resolve("prose") == 90
        assert provider.complete.call_count == 3

    def test_gives_up_at_attempt_bound(self):
        """Never-parseable output resolves to 0 after four repair calls."""
        provider = Mock(spec=ChatProvider)
        provider.complete.return_value = "no json here"
        loop = ScoreRepairLoop(provider)

        assert loop.repair("no json here") is False
        assert provider.complete.call_count == 4

    def test_valid_answer_after_bound_is_ignored(self):
        """The bound is checked before the last answer is inspected."""
        provider = make_provider("a", "b", "c", '{"probability": 99}')
        loop = ScoreRepairLoop(provider)

        assert loop.resolve("start") == 0
        assert provider.complete.call_count == 4

    def test_policy_bounds_are_configurable(self):
        provider = Mock(spec=ChatProvider)
        provider.complete.return_value = "nope"
        loop = ScoreRepairLoop(provider, ClassificationPolicy(threshold=10, max_repair_attempts=2))

        assert loop.resolve("nope") == 0
        assert provider.complete.call_count == 1

    def test_custom_threshold(self):
        loop = ScoreRepairLoop(make_provider(), ClassificationPolicy(threshold=30))
        assert loop.repair('{"probability": 30}') is True

    def test_provider_error_propagates(self):
        provider = make_provider(ProviderTransportError("down"))
        loop = ScoreRepairLoop(provider)

        with pytest.raises(ProviderTransportError):
            loop.resolve("prose")

    def test_deeply_nested_reply_is_rephrased(self):
        """JSON nested beyond the recursion limit takes the rephrase branch."""
        provider = make_provider('{"probability": 70}')
        loop = ScoreRepairLoop(provider)

        assert loop.repair("[" * 100000) is True
        messages = provider.complete.call_args[0][0]
        assert messages[0]["content"] == "I will give a description, rephrase it."


def test_inspect_answer_survives_deep_nesting():
    state, value = inspect_answer("[" * 100000)

    assert state is RepairState.AWAITING_REPHRASE_REPAIR
    assert value == "[" * 100000
