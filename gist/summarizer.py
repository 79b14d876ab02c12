"""Summarization pipeline: six Gemini calls orchestrated into one GistResult.

Stage A runs framework detection, the core sentence and the layered summary
together. Stage B analyzes structure with the framework Stage A picked.
Stage C writes the counter-argument and the steelman from the thesis Stage B
yields. Any failure aborts the run; a GistResult is only built once every
call has succeeded.
"""

import asyncio
import logging
import time

from gist import prompts
from gist.exceptions import GenerationError, ReasoningServiceError
from gist.llm_client import GenerationOptions, get_client
from gist.models import ExtractedContent, Framework, GistResult
from gist.schemas import ArgumentStructure, StoryStructure, SummaryLayer, parse_layers, parse_structured

logger = logging.getLogger(__name__)


async def _generate(client, stage: str, prompt: str, options: GenerationOptions) -> str:
    """Run one blocking Gemini call in a worker thread."""
    logger.info("Stage '%s' started", stage)
    try:
        text = await asyncio.to_thread(client.generate, prompt, options)
    except ReasoningServiceError as e:
        raise GenerationError(f"{stage} generation failed: {e}") from e
    logger.info("Stage '%s' finished (%d chars)", stage, len(text or ""))
    return text or ""


async def _generate_prose(client, stage: str, prompt: str, options: GenerationOptions) -> str:
    text = (await _generate(client, stage, prompt, options)).strip()
    if not text:
        raise GenerationError(f"{stage} generation returned an empty response")
    return text


def parse_framework(raw: str | None) -> Framework:
    """Map raw classifier output to a Framework.

    Only an exact "story" (ignoring case and surrounding whitespace) selects
    the story framework; anything else, including empty output, is argument.
    """
    if (raw or "").strip().lower() == Framework.STORY.value:
        return Framework.STORY
    return Framework.ARGUMENT


async def detect_framework(content: ExtractedContent, client) -> Framework:
    raw = await _generate(
        client, "framework", prompts.framework_prompt(content), prompts.FRAMEWORK_OPTIONS,
    )
    normalized = raw.strip().lower()
    framework = parse_framework(normalized)
    if normalized not in (Framework.STORY.value, Framework.ARGUMENT.value):
        logger.warning("Unrecognized framework output %r, defaulting to argument", raw[:50])
    return framework


async def generate_core(content: ExtractedContent, client) -> str:
    return await _generate_prose(
        client, "core", prompts.core_prompt(content), prompts.CORE_OPTIONS,
    )


async def generate_layers(content: ExtractedContent, client) -> tuple[SummaryLayer, ...]:
    raw = await _generate(
        client, "layers", prompts.layers_prompt(content), prompts.LAYERS_OPTIONS,
    )
    return parse_layers(raw)


async def analyze_structure(
    content: ExtractedContent, framework: Framework, client,
) -> StoryStructure | ArgumentStructure:
    """Extract the story arc or argument structure, depending on framework."""
    if framework is Framework.STORY:
        raw = await _generate(
            client, "story structure", prompts.story_prompt(content), prompts.STRUCTURE_OPTIONS,
        )
        return parse_structured(raw, StoryStructure)

    raw = await _generate(
        client, "argument structure", prompts.argument_prompt(content), prompts.STRUCTURE_OPTIONS,
    )
    return parse_structured(raw, ArgumentStructure)


def derive_thesis(structure: StoryStructure | ArgumentStructure) -> str:
    """The proposition fed to the critique stages.

    A story has no explicit claim, so its resolution stands in for one.
    """
    if isinstance(structure, StoryStructure):
        return structure.resolution
    return structure.thesis


async def generate_counter_argument(content: ExtractedContent, thesis: str, client) -> str:
    return await _generate_prose(
        client,
        "counter-argument",
        prompts.counter_argument_prompt(content, thesis),
        prompts.CRITIQUE_OPTIONS,
    )


async def generate_steelman(content: ExtractedContent, thesis: str, client) -> str:
    return await _generate_prose(
        client,
        "steelman",
        prompts.steelman_prompt(content, thesis),
        prompts.CRITIQUE_OPTIONS,
    )


async def summarize(content: ExtractedContent, client=None) -> GistResult:
    """Run the full pipeline for one piece of extracted content.

    Args:
        content: Normalized content from the extractor.
        client: Object with ``generate(prompt, options) -> str``. Defaults to
            the shared Gemini client.

    Returns:
        The assembled GistResult.

    Raises:
        GenerationError: If any stage fails or returns a malformed response.
        ConfigurationError: If the default client cannot be created.
    """
    if not content.text.strip():
        raise GenerationError("No text to summarize")
    if client is None:
        client = get_client()

    started = time.monotonic()
    logger.info(
        "Summarizing %s '%s' (%d words)", content.type.value, content.title[:80], content.word_count,
    )

    try:
        framework, core, layers = await asyncio.gather(
            detect_framework(content, client),
            generate_core(content, client),
            generate_layers(content, client),
        )
        logger.info("Framework selected: %s", framework.value)

        structure = await analyze_structure(content, framework, client)
        thesis = derive_thesis(structure)

        counter_argument, steelman = await asyncio.gather(
            generate_counter_argument(content, thesis, client),
            generate_steelman(content, thesis, client),
        )
    except GenerationError as e:
        logger.error("Summarization of '%s' failed: %s", content.title[:80], e)
        raise

    result = GistResult(
        source_type=content.type,
        source_url=content.source_url,
        title=content.title,
        framework=framework,
        core=core,
        layers=layers,
        structure=structure,
        counter_argument=counter_argument,
        steelman=steelman,
        word_count=content.word_count,
    )
    logger.info("Gist %s complete in %.1fs", result.id, time.monotonic() - started)
    return result
