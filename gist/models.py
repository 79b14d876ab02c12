"""Data models for the Gist pipeline."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from gist.schemas import ArgumentStructure, StoryStructure, SummaryLayer


class ContentType(StrEnum):
    """Kinds of source content the extractor understands."""

    ARTICLE = "article"
    YOUTUBE = "youtube"
    PDF = "pdf"
    TEXT = "text"


class Framework(StrEnum):
    """Analytical framework used to structure a gist."""

    STORY = "story"
    ARGUMENT = "argument"


@dataclass(frozen=True)
class ExtractedContent:
    """Normalized content handed from the extractor to the summarizer."""

    type: ContentType
    title: str
    text: str
    source_url: str | None = None

    @property
    def word_count(self) -> int:
        return len(self.text.split())


@dataclass(frozen=True)
class GistResult:
    """A complete, immutable summary of one piece of content."""

    source_type: ContentType
    title: str
    framework: Framework
    core: str
    layers: tuple[SummaryLayer, ...]
    structure: StoryStructure | ArgumentStructure
    counter_argument: str
    steelman: str
    word_count: int
    source_url: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict:
        """Serialize to the camelCase JSON shape served by the API."""
        data = {
            "id": self.id,
            "sourceType": self.source_type.value,
            "title": self.title,
            "framework": self.framework.value,
            "core": self.core,
            "layers": [layer.model_dump() for layer in self.layers],
            "structure": self.structure.model_dump(by_alias=True),
            "counterArgument": self.counter_argument,
            "steelman": self.steelman,
            "wordCount": self.word_count,
            "createdAt": self.created_at.isoformat(),
        }
        if self.source_url:
            data["sourceUrl"] = self.source_url
        return data
