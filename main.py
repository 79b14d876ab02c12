"""FastAPI app that turns a URL or pasted text into a gist."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import LOG_FORMAT, settings
from gist import summarizer
from gist.exceptions import ConfigurationError, GistError, InputError
from gist.extractors import extract_content

logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


class GistRequest(BaseModel):
    """Request body: exactly one of url or text."""

    url: str | None = None
    text: str | None = None


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report configuration state on startup."""
    if settings.gemini_api_key:
        logger.info("Gist API ready (fast model %s, pro model %s)",
                    settings.gemini_fast_model, settings.gemini_pro_model)
    else:
        logger.warning("GEMINI_API_KEY is not set; /api/gist will return 500 until it is.")
    yield


app = FastAPI(title="Gist", description="Layered summaries with counter-arguments", lifespan=lifespan)


@app.get("/api/health")
async def api_health():
    return JSONResponse({"status": "ok", "configured": bool(settings.gemini_api_key)})


@app.post("/api/gist")
async def api_gist(body: GistRequest):
    """Extract the requested content and run the summarization pipeline."""
    if not body.url and not body.text:
        return _error("Either url or text must be provided", 400)
    if body.url and body.text:
        return _error("Provide either url or text, not both", 400)
    if not settings.gemini_api_key:
        return _error("Gemini API key not configured", 500)

    try:
        content = await asyncio.to_thread(extract_content, url=body.url, text=body.text)
        gist = await summarizer.summarize(content)
    except InputError as e:
        return _error(str(e), 400)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return _error(str(e), 500)
    except GistError as e:
        logger.error("Gist request failed: %s", e)
        return _error(str(e), 500)
    except Exception as e:
        logger.exception("Unexpected error handling gist request")
        return _error(str(e) or "Unknown error occurred", 500)

    return JSONResponse(gist.to_dict())
