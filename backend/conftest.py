"""Pytest configuration and fixtures."""

import io
import json

import pytest
from google.genai import types
from PIL import Image


class FakeModels:
    """Stands in for client.models; replays scripted responses or errors in order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.outcomes:
            raise AssertionError("Unexpected generate_content call")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClient:
    def __init__(self, *outcomes):
        self.models = FakeModels(outcomes)

    @property
    def calls(self):
        return self.models.calls


def make_response(text=None, chunks=None):
    """Build a real GenerateContentResponse with optional grounding chunks."""
    content = None
    if text is not None:
        content = types.Content(role="model", parts=[types.Part(text=text)])

    grounding_metadata = None
    if chunks is not None:
        grounding_metadata = types.GroundingMetadata(grounding_chunks=chunks)

    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=content, grounding_metadata=grounding_metadata)]
    )


def web_chunk(uri=None, title=None):
    return types.GroundingChunk(web=types.GroundingChunkWeb(uri=uri, title=title))


def verdict_response(chunks=None, **payload):
    return make_response(json.dumps(payload), chunks=chunks)


@pytest.fixture
def png_bytes():
    """A small real PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="white").save(buffer, format="PNG")
    return buffer.getvalue()
