"""
FastAPI Web Application - Review Generation API
================================================

Serves POST /api/generate-reviews for the review page front end.
Every response from this app disables caching.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.agents.review_fetcher import ReviewFetcher
from src.errors import ConfigurationError, ValidationError
from src.models.reviews_data import ErrorResult
from src.review_service import build_fetcher, generate_reviews, to_error_result
import config.settings as settings

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _error_response(message: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


class GenerateReviewsRequest(BaseModel):
    """Body of POST /api/generate-reviews. Blank values are rejected by the handler."""
    shareUrl: Optional[str] = None
    businessName: Optional[str] = None


def _required_field(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"missing {name}")
    return value


def create_app(
    api_key: Optional[str] = None,
    fetcher_factory: Callable[[Optional[str]], ReviewFetcher] = build_fetcher
) -> FastAPI:
    """
    Build the FastAPI app.

    The fetcher (and its Gemini client) is built once at startup and closed
    at shutdown. Without a credential it stays None and the endpoint answers 500.

    Args:
        api_key: Credential injected into the fetcher; None reads settings at startup
        fetcher_factory: Builds a ReviewFetcher from a credential
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.fetcher = None
        try:
            app.state.fetcher = fetcher_factory(api_key)
        except ConfigurationError:
            logger.warning("GOOGLE_API_KEY not set. /api/generate-reviews will answer 500.")
        logger.info(f"Review API ready (model={settings.REVIEWS_MODEL})")

        yield

        if app.state.fetcher is not None:
            app.state.fetcher.close()
            app.state.fetcher = None

    app = FastAPI(
        title="Social Proof Studio",
        description="Google Maps review pages powered by Gemini",
        lifespan=lifespan
    )

    @app.middleware("http")
    async def disable_caching(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(NO_CACHE_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # Covers 405 for non-POST methods; Allow header comes from the router
        return _error_response(str(exc.detail), exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def body_error(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request body: {exc.errors()}")
        return _error_response("Request body must be a JSON object with shareUrl and businessName.", 400)

    @app.get("/health")
    def health(request: Request):
        fetcher = getattr(request.app.state, "fetcher", None)
        return {"status": "ok", "configured": fetcher is not None}

    @app.post("/api/generate-reviews")
    def generate_reviews_endpoint(request: Request, body: Optional[GenerateReviewsRequest] = None):
        # Sync handler: FastAPI runs it in the threadpool while Gemini works
        body = body or GenerateReviewsRequest()
        logger.info(
            f"Generate reviews invoked. shareUrl={body.shareUrl!r}, "
            f"businessName={body.businessName!r}"
        )

        try:
            share_url = _required_field(body.shareUrl, "shareUrl")
            business_name = _required_field(body.businessName, "businessName")
        except ValidationError as e:
            logger.warning(f"Missing parameters: {e.message}")
            return _error_response(e.user_message, e.status_code)

        fetcher = getattr(request.app.state, "fetcher", None)
        if fetcher is None:
            logger.error("CRITICAL: Gemini API key not found on server")
            result = to_error_result(ConfigurationError())
            return _error_response(result.error, result.status_code)

        result = generate_reviews(share_url, business_name, fetcher=fetcher)
        if isinstance(result, ErrorResult):
            return _error_response(result.error, result.status_code)

        return JSONResponse(status_code=200, content=result.to_dict())

    return app


app = create_app()
