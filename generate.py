"""Command-line entry point to produce a gist for a URL, text, or local file."""

import argparse
import asyncio
import json
import logging
import sys
import textwrap
from pathlib import Path

from config import LOG_FORMAT, settings
from gist import summarizer
from gist.exceptions import GistError
from gist.extractors import extract_content
from gist.models import GistResult
from gist.schemas import StoryStructure

logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

WRAP_WIDTH = 88


def _wrap(text: str, indent: str = "  ", bullet: str = "") -> str:
    return textwrap.fill(
        text, width=WRAP_WIDTH, initial_indent=indent + bullet, subsequent_indent=indent + " " * len(bullet),
    )


def render_text(gist: GistResult) -> str:
    """Render a gist as a plain-text report."""
    lines = [
        "=" * 60,
        gist.title,
        f"{gist.source_type.value} · {gist.word_count:,} words · {gist.framework.value} format",
    ]
    if gist.source_url:
        lines.append(gist.source_url)
    lines += ["=" * 60, "", "CORE", _wrap(gist.core), ""]

    for layer in gist.layers:
        lines += [f"[{layer.depth}] {layer.title.upper()}"]
        lines += [_wrap(paragraph) for paragraph in layer.content.split("\n") if paragraph.strip()]
        lines.append("")

    s = gist.structure
    if isinstance(s, StoryStructure):
        lines.append("STORY")
        for label, value in (
            ("Situation", s.situation),
            ("Complication", s.complication),
            ("Question", s.question),
            ("Resolution", s.resolution),
        ):
            lines += [f"  {label}:", _wrap(value, "    ")]
    else:
        lines += ["ARGUMENT", "  Thesis:", _wrap(s.thesis, "    "), "  Evidence:"]
        lines += [_wrap(item, "    ", bullet="- ") for item in s.evidence]
        lines += [
            "  Counter-argument:", _wrap(s.counter_argument, "    "),
            "  Synthesis:", _wrap(s.synthesis, "    "),
        ]
    lines += ["", "COUNTER-ARGUMENT", _wrap(gist.counter_argument), ""]
    lines += ["STEELMAN", _wrap(gist.steelman)]
    return "\n".join(lines)


async def generate_gist(url: str | None = None, text: str | None = None) -> GistResult:
    """Extract content and run the summarization pipeline."""
    content = await asyncio.to_thread(extract_content, url=url, text=text)
    logger.info("Extracted '%s' (%d words)", content.title, content.word_count)
    return await summarizer.summarize(content)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the gist CLI."""
    parser = argparse.ArgumentParser(description="Summarize an article, video, PDF, or text.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Article, YouTube, or PDF URL")
    source.add_argument("--text", help="Text to summarize")
    source.add_argument("--file", type=Path, help="Path to a UTF-8 text file to summarize")
    parser.add_argument("--json", action="store_true", help="Print the gist as JSON")
    args = parser.parse_args(argv)

    text = args.text
    if args.file:
        try:
            text = args.file.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Could not read %s: %s", args.file, e)
            sys.exit(1)

    try:
        gist = asyncio.run(generate_gist(url=args.url, text=text))
    except GistError as e:
        logger.error("Gist failed: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        sys.exit(0)

    if args.json:
        print(json.dumps(gist.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_text(gist))


if __name__ == "__main__":
    main()
