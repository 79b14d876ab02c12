"""Content extraction: turn a URL or pasted text into ExtractedContent."""

import io
import logging
import re
from urllib.parse import unquote, urlparse

import pdfplumber
import requests
from bs4 import BeautifulSoup
from youtube_transcript_api import YouTubeTranscriptApi

from config import settings
from gist.exceptions import ExtractionError, InputError
from gist.models import ContentType, ExtractedContent

logger = logging.getLogger(__name__)

PASTED_TEXT_TITLE = "Pasted Text"

# Elements that never carry article body text
STRIP_TAGS = [
    "script", "style", "nav", "footer", "header", "aside",
    "iframe", "noscript", "svg", "form", "button",
]

YOUTUBE_ID_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/embed/([^&\n?#]+)"),
]


def detect_content_type(url: str) -> ContentType:
    """Classify a URL as a YouTube video, a PDF, or a generic article."""
    lower_url = url.lower()
    if "youtube.com/watch" in lower_url or "youtu.be/" in lower_url:
        return ContentType.YOUTUBE
    if lower_url.endswith(".pdf"):
        return ContentType.PDF
    return ContentType.ARTICLE


def extract_youtube_id(url: str) -> str | None:
    """Return the video ID from a watch, short or embed URL."""
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def _fetch(url: str) -> requests.Response:
    resp = requests.get(
        url,
        headers={"User-Agent": settings.user_agent},
        timeout=settings.fetch_timeout,
    )
    if not resp.ok:
        raise ExtractionError(f"HTTP {resp.status_code}: {resp.reason}")
    return resp


def _page_title(soup: BeautifulSoup) -> str:
    """Best-effort page title: og:title first, then <title>."""
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if og_title and og_title.get("content", "").strip():
        return og_title["content"].strip()
    if soup.title and soup.title.get_text(strip=True):
        return soup.title.get_text(strip=True)
    return ""


def _readable_text(soup: BeautifulSoup) -> str:
    """Extract body text from the most specific content container available."""
    for tag_name in STRIP_TAGS:
        for tag in soup.find_all(tag_name):
            tag.decompose()

    container = soup.find("article") or soup.find("main") or soup.body or soup
    text = container.get_text(separator="\n")

    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


def extract_article(url: str) -> ExtractedContent:
    """Fetch a web page and pull out its readable text."""
    try:
        resp = _fetch(url)
        soup = BeautifulSoup(resp.text, "lxml")
        title = _page_title(soup) or "Untitled Article"
        text = _readable_text(soup)
    except (requests.exceptions.RequestException, ExtractionError) as e:
        raise ExtractionError(f"Failed to extract article: {e}") from e

    if not text:
        raise ExtractionError("Failed to extract article: could not parse article content")
    return ExtractedContent(type=ContentType.ARTICLE, title=title, text=text, source_url=url)


def _pdf_title(url: str) -> str:
    filename = unquote(urlparse(url).path.rstrip("/").split("/")[-1])
    filename = re.sub(r"\.pdf$", "", filename, flags=re.IGNORECASE)
    return filename or "PDF Document"


def extract_pdf(url: str) -> ExtractedContent:
    """Download a PDF and join the text of all its pages."""
    try:
        resp = _fetch(url)
        with pdfplumber.open(io.BytesIO(resp.content)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        # pdfplumber/pdfminer raise a variety of parser errors
        raise ExtractionError(f"Failed to extract PDF: {e}") from e

    text = "\n\n".join(page.strip() for page in pages if page.strip())
    if not text:
        raise ExtractionError("Failed to extract PDF: no text layer found")
    logger.info("Extracted %d pages from PDF %s", len(pages), url)
    return ExtractedContent(type=ContentType.PDF, title=_pdf_title(url), text=text, source_url=url)


def _youtube_title(url: str) -> str:
    """Look up a video title from its watch page; fall back to a generic one."""
    try:
        resp = _fetch(url)
    except (requests.exceptions.RequestException, ExtractionError) as e:
        logger.warning("Could not fetch YouTube page for title (%s)", e)
        return "YouTube Video"
    title = _page_title(BeautifulSoup(resp.text, "lxml"))
    return title.removesuffix(" - YouTube").strip() or "YouTube Video"


def extract_youtube(url: str) -> ExtractedContent:
    """Fetch a video's transcript and title."""
    video_id = extract_youtube_id(url)
    if not video_id:
        raise ExtractionError("Failed to extract YouTube transcript: invalid YouTube URL")

    try:
        fetched = YouTubeTranscriptApi().fetch(video_id)
    except Exception as e:
        # youtube-transcript-api signals every failure mode with its own exception types
        raise ExtractionError(f"Failed to extract YouTube transcript: {e}") from e

    text = " ".join(snippet.text for snippet in fetched.snippets).strip()
    if not text:
        raise ExtractionError("Failed to extract YouTube transcript: transcript is empty")
    return ExtractedContent(
        type=ContentType.YOUTUBE, title=_youtube_title(url), text=text, source_url=url,
    )


def extract_content(url: str | None = None, text: str | None = None) -> ExtractedContent:
    """Resolve a request's url or text into ExtractedContent.

    Raises:
        InputError: If neither or both of url/text are given, or text is blank.
        ExtractionError: If the URL cannot be fetched or parsed.
    """
    if url and text:
        raise InputError("Provide either url or text, not both")
    if text is not None and not url:
        if not text.strip():
            raise InputError("Text must not be empty")
        return ExtractedContent(type=ContentType.TEXT, title=PASTED_TEXT_TITLE, text=text)
    if not url:
        raise InputError("Either url or text must be provided")

    content_type = detect_content_type(url)
    logger.info("Extracting %s content from %s", content_type.value, url)

    if content_type is ContentType.YOUTUBE:
        return extract_youtube(url)
    if content_type is ContentType.PDF:
        return extract_pdf(url)
    return extract_article(url)
