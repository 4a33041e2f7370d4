import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import PREVIEW_MODES, get_settings
from .errors import InvalidInput
from .models import ErrorResponse, PreviewRequest
from .scraper import PreviewScraper

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Link Preview API", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,  # Frontend URLs
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services lazily
scraper = None


def get_scraper() -> PreviewScraper:
    global scraper
    if scraper is None:
        scraper = PreviewScraper(settings)
    return scraper


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


def _invalid_url() -> JSONResponse:
    return _error("Invalid URL", 400)


@app.get("/")
def read_root():
    return {"message": "Link Preview API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.post("/api/scrape")
async def scrape_preview(request: Request):
    """
    Render the posted URL and return its preview, or ``{"items": [...]}``
    in collection mode. Failures are logged here and never leak details.
    """
    try:
        body = await request.json()
        if not isinstance(body, dict):
            return _invalid_url()

        url = body.get("url")
        if not isinstance(url, str) or not url.strip():
            return _invalid_url()

        mode = body.get("mode")
        preview_request = PreviewRequest(url=url.strip(), mode=mode if mode in PREVIEW_MODES else None)

        result = await get_scraper().extract_preview(preview_request.url, mode=preview_request.mode)
        return JSONResponse(result.model_dump(exclude_none=True))

    except InvalidInput:
        return _invalid_url()
    except Exception as e:
        logger.error(f"SCRAPE ERROR: {e}")
        return _error("Failed to fetch preview", 500)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    uvicorn.run(app, host="0.0.0.0", port=8000)
