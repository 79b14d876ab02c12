"""Thin wrapper around the Google Gemini API."""

import logging
import threading
import time
from dataclasses import dataclass

import requests

from config import settings
from gist.exceptions import ConfigurationError, ReasoningServiceError

logger = logging.getLogger(__name__)

API_URL = "https://generativelanguage.googleapis.com/v1beta/models"

# Model selectors understood by GeminiClient
FAST = "fast"
PRO = "pro"

RETRY_BACKOFF = [2, 5, 10]  # seconds to wait between retries


@dataclass(frozen=True)
class GenerationOptions:
    """Per-call generation settings."""

    model: str = PRO
    temperature: float = 0.3
    max_output_tokens: int = 1024
    structured_output: bool = False
    thinking_budget: int | None = None  # None leaves the model default


class GeminiClient:
    """Gemini generateContent client with retry on 429/5xx errors.

    One instance is shared by every stage of every pipeline run; the
    underlying requests.Session is reused across worker threads.
    """

    def __init__(
        self,
        api_key: str,
        fast_model: str = "gemini-2.5-flash",
        pro_model: str = "gemini-2.5-pro",
        timeout: int = 60,
        max_retries: int = 3,
    ):
        if not api_key:
            raise ConfigurationError("No GEMINI_API_KEY configured")
        self.api_key = api_key
        self.models = {FAST: fast_model, PRO: pro_model}
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = requests.Session()
        self.session.headers.update({
            "content-type": "application/json",
            "x-goog-api-key": api_key,
        })

    def _build_payload(self, prompt: str, options: GenerationOptions) -> dict:
        generation_config = {
            "maxOutputTokens": options.max_output_tokens,
            "temperature": options.temperature,
        }
        if options.structured_output:
            generation_config["responseMimeType"] = "application/json"
        if options.thinking_budget is not None:
            generation_config["thinkingConfig"] = {"thinkingBudget": options.thinking_budget}
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def generate(self, prompt: str, options: GenerationOptions) -> str:
        """Generate text for a prompt.

        Args:
            prompt: Full prompt text.
            options: Model selector, temperature, token cap and JSON mode.

        Returns:
            The generated text (may be empty if the model produced nothing).

        Raises:
            ReasoningServiceError: On HTTP errors, exhausted retries, or a
                response without any candidate content.
        """
        model = self.models.get(options.model, options.model)
        url = f"{API_URL}/{model}:generateContent"
        payload = self._build_payload(prompt, options)

        last_error = None
        for attempt in range(self.max_retries):
            try:
                resp = self.session.post(url, json=payload, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                last_error = str(e)
                if attempt < self.max_retries - 1:
                    wait = RETRY_BACKOFF[min(attempt, len(RETRY_BACKOFF) - 1)]
                    logger.warning(
                        "Gemini API error (attempt %d/%d): %s, retrying in %ds...",
                        attempt + 1, self.max_retries, e, wait,
                    )
                    time.sleep(wait)
                continue

            if resp.status_code == 429 or resp.status_code >= 500:
                last_error = f"{resp.status_code}: {resp.text[:200]}"
                if attempt < self.max_retries - 1:
                    wait = RETRY_BACKOFF[min(attempt, len(RETRY_BACKOFF) - 1)]
                    logger.warning(
                        "Gemini API %d (attempt %d/%d), retrying in %ds...",
                        resp.status_code, attempt + 1, self.max_retries, wait,
                    )
                    time.sleep(wait)
                continue

            try:
                resp.raise_for_status()
            except requests.exceptions.HTTPError as e:
                raise ReasoningServiceError(f"Gemini API call failed: {e}") from e

            return _extract_text(resp)

        raise ReasoningServiceError(
            f"Gemini API failed after {self.max_retries} attempts: {last_error}"
        )


def _extract_text(resp: requests.Response) -> str:
    """Pull the generated text out of a generateContent response."""
    try:
        data = resp.json()
        candidate = data["candidates"][0]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise ReasoningServiceError(f"Gemini returned no candidates: {resp.text[:200]}") from e
    if not isinstance(candidate, dict):
        raise ReasoningServiceError(f"Gemini returned a malformed candidate: {resp.text[:200]}")

    try:
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text") or "" for part in parts)
    except (AttributeError, TypeError) as e:
        raise ReasoningServiceError(f"Gemini returned a malformed candidate: {resp.text[:200]}") from e
    if not parts:
        reason = candidate.get("finishReason", "unknown")
        raise ReasoningServiceError(f"Gemini returned an empty candidate (finishReason={reason})")
    return text


_client: GeminiClient | None = None
_client_lock = threading.Lock()


def get_client() -> GeminiClient:
    """Return the process-wide Gemini client, creating it on first use.

    Raises:
        ConfigurationError: If GEMINI_API_KEY is not set.
    """
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                _client = GeminiClient(
                    api_key=settings.gemini_api_key,
                    fast_model=settings.gemini_fast_model,
                    pro_model=settings.gemini_pro_model,
                    timeout=settings.gemini_timeout,
                    max_retries=settings.gemini_max_retries,
                )
                logger.info("Gemini client initialized")
    return _client


def reset_client() -> None:
    """Drop the cached client so the next get_client() rebuilds it."""
    global _client
    with _client_lock:
        _client = None
