"""Prompt templates and generation settings for each summarization stage."""

from gist.llm_client import FAST, PRO, GenerationOptions
from gist.models import ExtractedContent

# Prefix cuts applied to the source text before it is sent to Gemini
FRAMEWORK_PREVIEW_CHARS = 2_000
MAX_DETAIL_CHARS = 100_000
MAX_CRITIQUE_CHARS = 50_000

# Gemini 2.5 counts thinking tokens against maxOutputTokens, so each pro cap
# is the thinking budget plus room for the visible answer. Flash can skip
# thinking entirely; pro cannot go below 128.
PRO_THINKING_BUDGET = 1024

FRAMEWORK_OPTIONS = GenerationOptions(
    model=FAST, temperature=0.0, max_output_tokens=10, thinking_budget=0,
)
CORE_OPTIONS = GenerationOptions(
    model=PRO, temperature=0.3, max_output_tokens=PRO_THINKING_BUDGET + 200,
    thinking_budget=PRO_THINKING_BUDGET,
)
LAYERS_OPTIONS = GenerationOptions(
    model=PRO, temperature=0.3, max_output_tokens=PRO_THINKING_BUDGET + 2000,
    thinking_budget=PRO_THINKING_BUDGET, structured_output=True,
)
STRUCTURE_OPTIONS = GenerationOptions(
    model=PRO, temperature=0.3, max_output_tokens=PRO_THINKING_BUDGET + 1000,
    thinking_budget=PRO_THINKING_BUDGET, structured_output=True,
)
CRITIQUE_OPTIONS = GenerationOptions(
    model=PRO, temperature=0.5, max_output_tokens=PRO_THINKING_BUDGET + 500,
    thinking_budget=PRO_THINKING_BUDGET,
)

FRAMEWORK_PROMPT = """\
You are classifying text to choose the best analytical framework for it.

Decide whether this content is better analyzed as:
- "story": narrative content built around events, people and conflict \
(news stories, personal essays, case studies, event coverage)
- "argument": persuasive content making claims backed by evidence \
(opinion pieces, research papers, manifestos, analysis)

Respond with ONLY "story" or "argument".

Content title: {title}

First {preview_chars} characters:
{preview}"""

CORE_PROMPT = """\
You are a master summarizer. Capture the absolute essence of this content in ONE sentence.

The sentence must:
- State the central insight, not just the topic
- Be specific enough that a reader of this sentence alone understands the point
- Make the reader want to learn more
- Skip throat-clearing such as "This article discusses..." or "The author argues..."

Content title: {title}
Content type: {type}

Full text:
{text}

Respond with ONLY the one-sentence summary. No preamble."""

STORY_PROMPT = """\
You are analyzing content through the lens of dramatic structure.
Even factual content has narrative elements. Find them.

Return a JSON object with exactly these keys:
{{
  "situation": "The initial state of affairs, the 'before' picture (2-3 sentences)",
  "complication": "What disrupts the status quo, the tension introduced (2-3 sentences)",
  "question": "The central question the reader must resolve (1 sentence, phrased as a question)",
  "resolution": "How it resolves, what changes, the 'after' picture (2-3 sentences)"
}}

Content title: {title}

Full text:
{text}

Respond with ONLY valid JSON, no markdown formatting."""

ARGUMENT_PROMPT = """\
You are analyzing content through the lens of logical argumentation.
Extract the logical structure, even where it is implicit.

Return a JSON object with exactly these keys:
{{
  "thesis": "The central claim being made (1-2 sentences)",
  "evidence": ["Key supporting point 1", "Key supporting point 2", "Key supporting point 3"],
  "counterArgument": "The best argument against the thesis that the author addresses OR should have addressed (2-3 sentences)",
  "synthesis": "The nuanced final position once counter-arguments are weighed (2-3 sentences)"
}}

Content title: {title}

Full text:
{text}

Respond with ONLY valid JSON, no markdown formatting."""

LAYERS_PROMPT = """\
You are writing layered summaries at increasing levels of detail.

Write 4 layers:
- Layer 0: the core message in 1 sentence
- Layer 1: key context and the main point in 2-3 sentences
- Layer 2: supporting details and nuances in a short paragraph (4-5 sentences)
- Layer 3: a comprehensive summary with examples and evidence (2-3 paragraphs)

Each layer must stand alone: a reader of only that layer gets a coherent \
summary at that depth. Never write "as mentioned above" or refer to other layers.

Return a JSON object:
{{
  "layers": [
    {{"depth": 0, "title": "Core", "content": "..."}},
    {{"depth": 1, "title": "Key Points", "content": "..."}},
    {{"depth": 2, "title": "In Detail", "content": "..."}},
    {{"depth": 3, "title": "Full Summary", "content": "..."}}
  ]
}}

Content title: {title}

Full text:
{text}

Respond with ONLY valid JSON, no markdown formatting."""

COUNTER_ARGUMENT_PROMPT = """\
You are a skilled debater building the STRONGEST possible case against the author's position.

Rules:
- No strawmen. Steel-man the opposition.
- Pick the most compelling objections, not the easiest to dismiss
- Consider empirical, logical, practical and moral objections
- The author should have to take this counter-argument seriously

Content title: {title}
Author's apparent position/thesis: {thesis}

Full text:
{text}

Write 3-4 sentences presenting the strongest case against this position. \
Be direct and forceful: you are playing devil's advocate."""

STEELMAN_PROMPT = """\
You are making the author's argument STRONGER than they made it.

Rules:
- Identify weaknesses in how they presented their case
- Add stronger evidence or reasoning they could have used
- Anticipate and preemptively answer objections
- Make the argument more precise and compelling

Content title: {title}
Author's thesis: {thesis}

Full text:
{text}

Write 3-4 sentences presenting a STRONGER version of the author's argument. \
This should be the best possible case for their position."""


def framework_prompt(content: ExtractedContent) -> str:
    return FRAMEWORK_PROMPT.format(
        title=content.title,
        preview_chars=FRAMEWORK_PREVIEW_CHARS,
        preview=content.text[:FRAMEWORK_PREVIEW_CHARS],
    )


def core_prompt(content: ExtractedContent) -> str:
    return CORE_PROMPT.format(
        title=content.title,
        type=content.type.value,
        text=content.text[:MAX_DETAIL_CHARS],
    )


def story_prompt(content: ExtractedContent) -> str:
    return STORY_PROMPT.format(title=content.title, text=content.text[:MAX_DETAIL_CHARS])


def argument_prompt(content: ExtractedContent) -> str:
    return ARGUMENT_PROMPT.format(title=content.title, text=content.text[:MAX_DETAIL_CHARS])


def layers_prompt(content: ExtractedContent) -> str:
    return LAYERS_PROMPT.format(title=content.title, text=content.text[:MAX_DETAIL_CHARS])


def counter_argument_prompt(content: ExtractedContent, thesis: str) -> str:
    return COUNTER_ARGUMENT_PROMPT.format(
        title=content.title, thesis=thesis, text=content.text[:MAX_CRITIQUE_CHARS],
    )


def steelman_prompt(content: ExtractedContent, thesis: str) -> str:
    return STEELMAN_PROMPT.format(
        title=content.title, thesis=thesis, text=content.text[:MAX_CRITIQUE_CHARS],
    )
