"""
Response Validator.

Turns the raw text returned by the AI service into ReviewsData, or raises
one typed error. The service does not always follow the "JSON only"
instruction, so fence stripping lives here and nowhere else.
"""

import json
import logging
import math
import re
from typing import Any, Optional, Tuple

from src.errors import IncompleteResponseError, MalformedResponseError, NotFoundError
from src.models.review import ReviewRecord
from src.models.reviews_data import ReviewsData
from src.models.summary import StructuredSummary, SummaryRecord, TextSummary

logger = logging.getLogger(__name__)


# Whole reply wrapped in ```json ... ``` or bare ``` ... ```; body runs to the last fence
_FENCE_PATTERN = re.compile(r"```[ \t]*(?:[A-Za-z0-9_+-]+)?[ \t]*\r?\n?(.*)```", re.DOTALL)

# First "{" to last "}" for replies with prose around the JSON
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """
    Strip surrounding whitespace and, if the whole text is fenced, the fence.

    Returns the fenced body when the text is a fenced block, else the stripped text.
    """
    stripped = text.strip()
    match = _FENCE_PATTERN.fullmatch(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def _load_json(text: str) -> Any:
    """
    Parse the reply as JSON.

    Strategy:
    1. Direct json.loads (fast path, untouched text)
    2. Fenced block body
    3. First JSON object found in the text

    Raises:
        MalformedResponseError: If no strategy yields valid JSON
    """
    stripped = text.strip()
    try:
        return json.loads(stripped)
    except json.JSONDecodeError as e:
        error = e

    candidates = [strip_code_fence(stripped)]
    match = _OBJECT_PATTERN.search(stripped)
    if match:
        candidates.append(match.group(0))

    for candidate in candidates:
        if candidate == stripped:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            error = e

    logger.error(f"Failed to parse AI service JSON: {error}")
    raise MalformedResponseError(f"Response is not valid JSON: {error}") from error


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _error_message(error: Any) -> Optional[str]:
    """Extract a non-empty message from the reply's error field, if any."""
    if not error:
        return None
    if isinstance(error, str):
        return error.strip() or None
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    # Error signalled without a usable message
    return NotFoundError.default_message


def _parse_summary(value: Any) -> SummaryRecord:
    if isinstance(value, str):
        if not value.strip():
            raise IncompleteResponseError("Response 'summary' is empty")
        return TextSummary(text=value)

    if isinstance(value, dict):
        try:
            return StructuredSummary.from_dict(value)
        except (KeyError, TypeError) as e:
            raise IncompleteResponseError(f"Response 'summary' is incomplete: {e}") from e

    raise IncompleteResponseError("Response is missing 'summary'")


def _parse_review(item: Any) -> Optional[ReviewRecord]:
    """Return a ReviewRecord, or None if the item has the wrong shape."""
    if not isinstance(item, dict):
        return None

    author = item.get("author")
    rating = item.get("rating")
    text = item.get("text")

    if not isinstance(author, str) or not isinstance(text, str) or not _is_number(rating):
        return None

    try:
        return ReviewRecord(author=author, rating=rating, text=text)
    except ValueError:
        return None


def _parse_reviews(value: Any) -> Tuple[ReviewRecord, ...]:
    if value is None:
        return ()

    if not isinstance(value, list):
        logger.warning(f"Response 'reviews' is {type(value).__name__}, not a list; ignoring")
        return ()

    reviews = []
    for index, item in enumerate(value):
        review = _parse_review(item)
        if review is None:
            logger.debug(f"Dropping malformed review at index {index}")
            continue
        reviews.append(review)

    if len(reviews) < len(value):
        logger.info(f"Dropped {len(value) - len(reviews)} of {len(value)} reviews with invalid shape")

    return tuple(reviews)


def validate_response(response_text: Optional[str]) -> ReviewsData:
    """
    Validate raw AI service text and build ReviewsData.

    Args:
        response_text: Raw text of the model reply

    Returns:
        ReviewsData with reviews in the order the service returned them

    Raises:
        MalformedResponseError: Text is empty, not JSON, or not a JSON object
        NotFoundError: The reply carries a non-empty "error" field
        IncompleteResponseError: A required field is missing or unusable
    """
    if not response_text or not response_text.strip():
        raise MalformedResponseError("AI service returned an empty response")

    data = _load_json(response_text)

    if not isinstance(data, dict):
        raise MalformedResponseError(f"Response JSON is a {type(data).__name__}, not an object")

    message = _error_message(data.get("error"))
    if message:
        logger.warning(f"AI service reported an error: {message}")
        raise NotFoundError(message)

    business_name = data.get("businessName")
    if not isinstance(business_name, str) or not business_name.strip():
        raise IncompleteResponseError("Response is missing 'businessName'")

    summary = _parse_summary(data.get("summary"))

    average_rating = data.get("averageRating")
    if not _is_number(average_rating):
        raise IncompleteResponseError("Response is missing 'averageRating'")
    if not (0 <= average_rating <= 5):
        raise IncompleteResponseError(f"Invalid averageRating: {average_rating}. Must be 0-5")

    total_reviews = data.get("totalReviews")
    if not _is_number(total_reviews) or total_reviews != int(total_reviews) or total_reviews < 0:
        raise IncompleteResponseError("Response is missing a valid 'totalReviews'")

    reviews = _parse_reviews(data.get("reviews"))

    return ReviewsData(
        business_name=business_name,
        average_rating=average_rating,
        total_reviews=int(total_reviews),
        summary=summary,
        reviews=reviews
    )
