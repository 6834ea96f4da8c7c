"""
Brand Audit Service - Main Application

A FastAPI backend that scrapes a company's website and its competitors'
(HTML plus Playwright screenshots), asks Claude AI (Anthropic) to infer
each brand's positioning, voice and visual identity, and returns a
competitive differentiation report.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from config import settings, screenshots_enabled
from core.browser import BrowserPool
from core.capture import VisualCapturer
from core.fetcher import ContentFetcher, build_http_client
from analyzer.pipeline import BrandAuditor
from routes import router
from utils.clients.anthropic import LLMClient, build_anthropic_client

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the long-lived clients once and share them through the auditor."""
    http_client = build_http_client()
    browser_pool = BrowserPool()
    capturer = VisualCapturer(browser_pool) if screenshots_enabled() else None

    app.state.auditor = BrandAuditor(
        fetcher=ContentFetcher(http_client),
        capturer=capturer,
        llm=LLMClient(build_anthropic_client()),
    )
    logger.info(f"✅ Brand Audit ready (screenshots {'on' if capturer else 'off'})")

    try:
        yield
    finally:
        await http_client.aclose()
        await browser_pool.cleanup()
        logger.info("🧹 Clients closed")


# Initialize FastAPI app
app = FastAPI(title="Brand Audit Service", lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves the service as {"error": message}
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"⚠️  Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unexpected failure on {request.url.path}: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include all routes from routes.py
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, timeout_keep_alive=60)
