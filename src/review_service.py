"""
Review service boundary.

The single entry point the presentation layer calls. Core errors stop here
and become an ErrorResult carrying one user-facing message.
"""

import logging
from typing import Optional

from src.agents.review_fetcher import ReviewFetcher
from src.errors import ReviewServiceError
from src.models.reviews_data import ErrorResult, FetchResult
import config.settings as settings

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while fetching the reviews."


def build_fetcher(api_key: Optional[str] = None) -> ReviewFetcher:
    """
    Create a ReviewFetcher from settings.

    Args:
        api_key: Credential to inject; defaults to settings.GOOGLE_API_KEY

    Raises:
        ConfigurationError: If no credential is configured
    """
    return ReviewFetcher(
        api_key=settings.GOOGLE_API_KEY if api_key is None else api_key,
        model_name=settings.REVIEWS_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        target_locale=settings.TARGET_LOCALE,
        min_reviews=settings.MIN_REVIEWS,
        timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
        use_web_search=settings.ENABLE_WEB_SEARCH
    )


def to_error_result(error: ReviewServiceError) -> ErrorResult:
    """Convert a core error into its user-facing result."""
    return ErrorResult(
        error=error.user_message,
        kind=type(error).__name__,
        status_code=error.status_code
    )


def generate_reviews(
    share_url: str,
    business_name: Optional[str] = None,
    fetcher: Optional[ReviewFetcher] = None,
    api_key: Optional[str] = None
) -> FetchResult:
    """
    Fetch reviews for a business and never raise.

    Args:
        share_url: Google Maps share link
        business_name: Optional business name hint
        fetcher: Pre-built fetcher; built from settings when omitted
        api_key: Credential used when building the fetcher

    Returns:
        ReviewsData on success, ErrorResult otherwise
    """
    owned = fetcher is None
    try:
        if owned:
            fetcher = build_fetcher(api_key)
        return fetcher.fetch(share_url, business_name)

    except ReviewServiceError as e:
        logger.warning(f"Review fetch failed with {type(e).__name__}: {e.message}")
        return to_error_result(e)

    except Exception as e:
        logger.error(f"Unexpected error while fetching reviews: {e}", exc_info=True)
        return ErrorResult(error=UNKNOWN_ERROR_MESSAGE, kind=type(e).__name__, status_code=500)

    finally:
        # Fetchers built here are closed here; injected ones belong to the caller
        if owned and fetcher is not None:
            fetcher.close()
