import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from seo_agent.config import get_settings
from seo_agent.logging_setup import configure_logging
from seo_agent.routers.analyze import limiter, router as analyze_router
from seo_agent.routers.crawl import router as crawl_router
from seo_agent.services.workflow import build_context

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Agent",
    description="Crawls a page, scores it against on-page SEO rules, finds competitors and writes an HTML report.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.state.context = build_context(settings)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(analyze_router)
app.include_router(crawl_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "SEO Agent is running", "llm_provider": settings.llm_provider}
