import json
from typing import Sequence
from forward_verifier.core.errors import MalformedPayload


class DirectJsonTier:
    """Tier 1: the whole text is a JSON object."""
    name = "direct"

    def attempt(self, text: str) -> dict:
        return _as_object(json.loads(text))


class BraceSpanTier:
    """
    Tier 2: decode the span from the first '{' to the last '}'.

    Handles models that wrap the object in prose or code fences. The match is
    greedy, so text holding several objects yields the outermost span.
    """
    name = "brace_span"

    def attempt(self, text: str) -> dict:
        return _as_object(json.loads(extract_brace_span(text)))


class CleanupTier:
    """Tier 3: brace span with escaped newlines collapsed and escaped quotes unescaped."""
    name = "cleanup"

    def attempt(self, text: str) -> dict:
        candidate = extract_brace_span(text)
        cleaned = candidate.replace("\\n", " ").replace('\\"', '"')
        return _as_object(json.loads(cleaned))


DEFAULT_TIERS = (DirectJsonTier(), BraceSpanTier(), CleanupTier())


def extract_brace_span(text: str) -> str:
    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace == -1 or last_brace == -1 or last_brace < first_brace:
        raise ValueError("No brace-delimited span in text")
    return text[first_brace:last_brace + 1]


def _as_object(value) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value


class ResponseParser:
    """
    Decode semi-structured model output into a mapping.

    Tiers are tried in order and the first success wins. When every tier
    fails, MalformedPayload is raised with the original text; defaulting is
    left to the caller.
    """

    def __init__(self, tiers: Sequence = DEFAULT_TIERS):
        self.tiers = tuple(tiers)

    def parse(self, text: str) -> dict:
        for tier in self.tiers:
            try:
                return tier.attempt(text)
            except (ValueError, RecursionError):
                continue
        raise MalformedPayload(text)
