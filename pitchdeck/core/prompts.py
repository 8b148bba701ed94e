"""
Prompt templates for both classification tiers and the repair loop.

Kept in one place so wording changes are reviewed together; the
builders return plain strings or chat message lists.
"""

import json
from typing import Any, Dict, List

JSON_SHAPE = '{ "probability": x as number }'

YES_NO_TEMPLATE = (
    "I will feed you the subject and body of an email. Understand the context "
    "and tell me whether the email is attached with a document called pitchdeck. "
    "Tell me yes if the email is attached with a pitchdeck and no if the email is "
    "not attached with a pitchdeck. "
    'The subject of the email is "{subject}" and the body of email is "{body}".'
)

PROBABILITY_INSTRUCTIONS = [
    "Understand what is pitchdeck of a portfolio company or a startup from internet",
    "I will feed the subject line and email body of an email to understand whether "
    "a pitchdeck file is attached with the email or not",
    "Analyse both subject line and email body to find the presence of a pitchdeck",
    "Find the probability of attaching a pitchdeck with the email.",
    f"Give the probability in a json format like {JSON_SHAPE} on a scale of 1 to 100 "
    "where x is a number in between 0 and 100. Should not give a description, the json "
    "format output is mandatory. If u cannot process the probability in any case give "
    "the probability as 0 in the mentioned json format",
]

NUMERIC_REPAIR_INSTRUCTIONS = [
    "I will give a json",
    f"Find the probability and give the probability exactly in json format like "
    f"{JSON_SHAPE} on a scale of 1 to 100 where x is a number in between 0 and 100",
    "Should not give a description, the json format output is mandatory",
]

REPHRASE_REPAIR_INSTRUCTIONS = [
    "I will give a description, rephrase it.",
    "Understand the context and find the probability mentioned in the rephrased description",
    "If the description does not say anything about probability consider probability as 0",
    f"return the final probability in json format like {JSON_SHAPE} on a scale of 1 to 100 "
    "where x is a number in between 0 and 100",
    "Should not give a description, the json format output is mandatory",
]


def _system(instructions: List[str]) -> List[Dict[str, str]]:
    return [{"role": "system", "content": line} for line in instructions]


def build_yes_no_prompt(subject: str, body: str) -> str:
    """Single prompt for the primary tier; subject and body are embedded verbatim."""
    return YES_NO_TEMPLATE.format(subject=subject, body=body)


def build_probability_messages(subject: str, body: str) -> List[Dict[str, str]]:
    """Conversation asking the secondary tier for {"probability": x}."""
    return _system(PROBABILITY_INSTRUCTIONS) + [
        {"role": "user", "content": f"Email Subject :{subject}"},
        {"role": "user", "content": f"Email body:{body} "},
    ]


def build_numeric_repair_messages(parsed: Any) -> List[Dict[str, str]]:
    """Ask the model to pull a numeric probability out of JSON it already produced."""
    return _system(NUMERIC_REPAIR_INSTRUCTIONS) + [
        {"role": "user", "content": json.dumps(parsed)},
    ]


def build_rephrase_repair_messages(raw_text: str) -> List[Dict[str, str]]:
    """Ask the model to rephrase prose and extract a probability, 0 if none."""
    return _system(REPHRASE_REPAIR_INSTRUCTIONS) + [
        {"role": "user", "content": raw_text},
    ]
