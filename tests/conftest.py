"""Shared fixtures: a scripted stand-in for the Gemini client."""

import json

import pytest

from gist import llm_client
from gist.exceptions import ReasoningServiceError

STORY_JSON = json.dumps({
    "situation": "A small town relied on one factory.",
    "complication": "The factory announced it would close.",
    "question": "Can the town reinvent itself?",
    "resolution": "The town rebuilt around remote work and tourism.",
})

ARGUMENT_JSON = json.dumps({
    "thesis": "Cities should replace parking minimums with market pricing.",
    "evidence": ["Minimums raise housing costs", "Lots sit empty", "Pricing cut cruising"],
    "counterArgument": "Removing minimums may push parking onto residential streets.",
    "synthesis": "Phase out minimums alongside permit districts.",
})

LAYERS_JSON = json.dumps({
    "layers": [
        {"depth": 0, "title": "Core", "content": "One sentence."},
        {"depth": 1, "title": "Key Points", "content": "Two or three sentences."},
        {"depth": 2, "title": "In Detail", "content": "A short paragraph."},
        {"depth": 3, "title": "Full Summary", "content": "Several paragraphs."},
    ]
})

DEFAULT_RESPONSES = {
    "framework": "argument",
    "core": "Parking minimums quietly make housing more expensive.",
    "layers": LAYERS_JSON,
    "story": STORY_JSON,
    "argument": ARGUMENT_JSON,
    "counter": "Cheap parking keeps downtown retail alive.",
    "steelman": "Every required space adds tens of thousands of dollars per unit.",
}


def stage_of(prompt: str) -> str:
    """Identify which pipeline stage produced a prompt."""
    if "Respond with ONLY \"story\" or \"argument\"" in prompt:
        return "framework"
    if "layered summaries" in prompt:
        return "layers"
    if "dramatic structure" in prompt:
        return "story"
    if "logical argumentation" in prompt:
        return "argument"
    if "devil's advocate" in prompt:
        return "counter"
    if "STRONGER version" in prompt:
        return "steelman"
    return "core"


class FakeGemini:
    """Returns canned text per stage and records every call."""

    def __init__(self, responses: dict | None = None, fail_on: set[str] | None = None):
        self.responses = {**DEFAULT_RESPONSES, **(responses or {})}
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, str, object]] = []

    def generate(self, prompt, options):
        stage = stage_of(prompt)
        self.calls.append((stage, prompt, options))
        if stage in self.fail_on:
            raise ReasoningServiceError(f"Gemini API call failed: 503 during {stage}")
        return self.responses[stage]

    def stages(self) -> list[str]:
        return [stage for stage, _, _ in self.calls]

    def prompt_for(self, stage: str) -> str:
        return next(prompt for s, prompt, _ in self.calls if s == stage)

    def options_for(self, stage: str):
        return next(options for s, _, options in self.calls if s == stage)


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture(autouse=True)
def _reset_shared_client():
    llm_client.reset_client()
    yield
    llm_client.reset_client()
