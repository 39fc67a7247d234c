import asyncio
import json
from types import SimpleNamespace

import pytest

from symptom_checker.classifier import ClassificationError, GeminiClassifier, parse_response

from conftest import CLASSIFIED

REPLY = json.dumps(CLASSIFIED.model_dump())


class StubModel:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def stubbed(model):
    classifier = GeminiClassifier(api_key=None)
    classifier.model = model
    return classifier


def test_parse_plain_json():
    assert parse_response(REPLY) == CLASSIFIED


def test_parse_json_wrapped_in_prose():
    text = "Here is the analysis:\n```json\n" + REPLY + "\n```\nStay safe."
    assert parse_response(text) == CLASSIFIED


@pytest.mark.parametrize("text", [
    "",
    "I cannot help with that.",
    "{not json}",
    '{"conditions": []}',
    '{"conditions": [{"name": "x"}]}',
])
def test_parse_rejects_bad_replies(text):
    with pytest.raises(ClassificationError):
        parse_response(text)


def test_missing_key_raises():
    classifier = GeminiClassifier(api_key=None)
    with pytest.raises(ClassificationError, match="GOOGLE_API_KEY"):
        asyncio.run(classifier.classify("prompt"))


def test_classify_parses_model_reply():
    model = StubModel(text=REPLY)
    result = asyncio.run(stubbed(model).classify("the prompt"))
    assert result == CLASSIFIED
    assert model.prompts == ["the prompt"]


def test_sdk_error_becomes_classification_error():
    classifier = stubbed(StubModel(error=RuntimeError("429 ResourceExhausted")))
    with pytest.raises(ClassificationError, match="Gemini request failed"):
        asyncio.run(classifier.classify("prompt"))
