import asyncio

import pytest
from fastapi.testclient import TestClient

from symptom_checker.app import create_app
from symptom_checker.classifier import ClassificationError
from symptom_checker.config import Settings
from symptom_checker.schemas import CategoryResponse, ConditionEntry


CLASSIFIED = CategoryResponse(
    conditions=(
        ConditionEntry(
            name="Common Cold",
            probability="High (70-80%)",
            description="Viral infection of the nose and throat.",
            next_steps=("Rest", "Drink fluids"),
            urgency="low",
        ),
    ),
    red_flags=("Trouble breathing",),
    general_advice="Rest and hydrate.",
    when_to_seek_help="If symptoms last more than 10 days.",
)


class StaticClassifier:
    name = "static"

    def __init__(self, response=CLASSIFIED):
        self.response = response
        self.prompts = []

    async def classify(self, prompt):
        self.prompts.append(prompt)
        return self.response


class FailingClassifier:
    name = "failing"

    async def classify(self, prompt):
        raise ClassificationError("Missing GOOGLE_API_KEY environment variable.")


class SlowClassifier:
    name = "slow"

    async def classify(self, prompt):
        await asyncio.sleep(1)
        return CLASSIFIED


class BrokenClassifier:
    name = "broken"

    async def classify(self, prompt):
        raise RuntimeError("connection reset")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'history.db'}",
        classifier_backend="rules",
        log_level="DEBUG",
        environment="test",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
