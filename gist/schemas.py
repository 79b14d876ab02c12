"""Response schemas for the structured Gemini stages, and their parsers.

Gemini returns untyped text. Every structured stage decodes it as JSON and
validates it against one of the models below before anything downstream
touches it; decode or shape failures surface as MalformedResponseError.
"""

import json
import logging
import re
from typing import Annotated, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError, model_validator

from gist.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

LAYER_COUNT = 4

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

ModelT = TypeVar("ModelT", bound=BaseModel)


class SummaryLayer(BaseModel):
    """One depth level of the layered summary (0 = core, 3 = full)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    depth: int = Field(ge=0, le=LAYER_COUNT - 1)
    title: Text
    content: Text


class LayeredSummary(BaseModel):
    """Envelope of the layers response: exactly four layers, depths 0..3."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    layers: list[SummaryLayer]

    @model_validator(mode="after")
    def _check_depths(self) -> "LayeredSummary":
        depths = [layer.depth for layer in self.layers]
        if depths != list(range(LAYER_COUNT)):
            raise ValueError(
                f"expected {LAYER_COUNT} layers with depths 0-{LAYER_COUNT - 1} in order, got {depths}"
            )
        return self


class StoryStructure(BaseModel):
    """Dramatic arc of narrative content."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    situation: Text
    complication: Text
    question: Text
    resolution: Text


class ArgumentStructure(BaseModel):
    """Logical structure of persuasive content."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    thesis: Text
    evidence: list[Text]
    counter_argument: Text = Field(alias="counterArgument")
    synthesis: Text


def _strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned)
        cleaned = re.sub(r"\s*```$", "", cleaned)
    return cleaned.strip()


def parse_structured(response_text: str, model: type[ModelT]) -> ModelT:
    """Decode a JSON response and validate it against ``model``.

    Args:
        response_text: Raw text returned by Gemini.
        model: Pydantic model the payload must satisfy.

    Returns:
        The validated model instance.

    Raises:
        MalformedResponseError: If the text is not JSON or does not match the schema.
    """
    cleaned = _strip_code_fences(response_text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Gemini returned invalid JSON for %s: %s", model.__name__, cleaned[:500])
        raise MalformedResponseError(f"Invalid JSON in {model.__name__} response: {e}") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("Gemini response failed %s validation: %s", model.__name__, e)
        raise MalformedResponseError(
            f"{model.__name__} response did not match schema: {e}"
        ) from e


def parse_layers(response_text: str) -> tuple[SummaryLayer, ...]:
    """Parse the layered-summary response into exactly four ordered layers."""
    return tuple(parse_structured(response_text, LayeredSummary).layers)
