"""Custom exception hierarchy for Gist."""


class GistError(Exception):
    """Base exception for all Gist errors."""


class InputError(GistError):
    """Raised when a request gives neither or both of url/text."""


class ConfigurationError(GistError):
    """Raised when required configuration (the Gemini API key) is missing."""


class ExtractionError(GistError):
    """Raised when content cannot be fetched or parsed from a URL."""


class ReasoningServiceError(GistError):
    """Raised when a Gemini API call fails or returns no usable candidate."""


class GenerationError(GistError):
    """Raised when any stage of the summarization pipeline fails."""


class MalformedResponseError(GenerationError):
    """Raised when a structured response does not match its expected schema."""
