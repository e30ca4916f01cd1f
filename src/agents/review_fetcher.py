"""
Review Fetch Agent.

Builds the prompt for a business (Google Maps link + optional name hint),
issues a single grounded Gemini call and hands the reply text to the
Response Validator.
"""

import logging
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from src.agents.response_validator import validate_response
from src.errors import ConfigurationError, MalformedResponseError, TransportError, ValidationError
from src.models.reviews_data import ReviewsData
from src.utils.links import looks_like_maps_link

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a research assistant that finds Google reviews for a business and summarizes them.

Your task:
1. Use the Google Maps URL as the primary identifier and the googleMaps tool to find the exact business
2. Extract the official name, average star rating, total number of reviews and the most relevant reviews
3. Analyze all reviews for common themes and write a structured summary
4. Translate the summary and the text of each review to the requested locale

Rules:
- The Google Maps URL is the source of truth; a business name hint is context only
- Always use the official business name from Google Maps
- Keep reviews in order of relevance
- Never invent reviews
- Respond with a single valid JSON object only: no markdown (like ```json), no explanations
- If you cannot find the business, respond with a JSON object containing only an "error" key"""


def _construct_user_prompt(
    share_url: str,
    business_name: Optional[str],
    target_locale: str,
    min_reviews: int
) -> str:
    """Construct user prompt from business details."""
    name_hint = business_name.strip() if business_name and business_name.strip() else "(not provided)"
    return f"""**BUSINESS DETAILS:**
*   `business_name_hint`: "{name_hint}"
*   `google_maps_url`: "{share_url}"

**INSTRUCTIONS:**
1.  Find the business at `google_maps_url`.
2.  Extract at least {min_reviews} of its most relevant reviews.
3.  Summarize all reviews with four key points ('price', 'service', 'the_good' max 10 words, 'the_bad' max 10 words) and one engaging 'overall_summary' paragraph of max 25 words.
4.  Translate the five summary points and every review text to {target_locale}.

**OUTPUT FORMAT:**
{{
  "summary": {{
    "price": "string",
    "service": "string",
    "the_good": "string",
    "the_bad": "string",
    "overall_summary": "string"
  }},
  "averageRating": number,
  "totalReviews": integer,
  "businessName": "string",
  "reviews": [
    {{
      "author": "string",
      "rating": integer (1-5),
      "text": "string"
    }}
  ]
}}

If the business cannot be found, return only: {{"error": "Could not find the business at the provided URL."}}"""


class ReviewFetcher:
    """
    Fetches and summarizes reviews for one business per call.

    Uses Gemini with Google Maps (and optionally Google Search) grounding.
    Exactly one request per fetch(); failures are not retried.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        temperature: float = 0.0,
        target_locale: str = "es-MX",
        min_reviews: int = 5,
        timeout_seconds: int = 60,
        use_web_search: bool = True
    ):
        """
        Initialize review fetcher.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: LLM temperature (0.0 for deterministic)
            target_locale: Locale the summary and reviews are translated to
            min_reviews: Minimum number of reviews to ask for
            timeout_seconds: API request timeout
            use_web_search: Also enable the Google Search tool

        Raises:
            ConfigurationError: If api_key is empty
        """
        if not api_key:
            raise ConfigurationError("Gemini API key is not configured")

        self.model_name = model_name
        self.temperature = temperature
        self.target_locale = target_locale
        self.min_reviews = min_reviews
        self.timeout_seconds = timeout_seconds
        self.use_web_search = use_web_search

        # Configure Gemini
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000)
        )

        logger.info(f"Initialized ReviewFetcher with model={model_name}, locale={target_locale}")

    def close(self):
        """Release the Gemini client's HTTP connections."""
        self.client.close()

    def _build_config(self) -> types.GenerateContentConfig:
        # JSON mode (response_mime_type) is not allowed with Maps grounding
        tools = [types.Tool(google_maps=types.GoogleMaps())]
        if self.use_web_search:
            tools.append(types.Tool(google_search=types.GoogleSearch()))

        return types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            temperature=self.temperature,
            tools=tools
        )

    def fetch(self, share_url: str, business_name: Optional[str] = None) -> ReviewsData:
        """
        Fetch reviews and summary for the business behind a share link.

        Args:
            share_url: Google Maps share link
            business_name: Optional business name hint

        Returns:
            Validated ReviewsData

        Raises:
            ValidationError: If share_url is missing
            TransportError: If the Gemini call fails
            NotFoundError: If Gemini could not find the business
            MalformedResponseError: If the reply is not usable JSON
        """
        if not share_url or not share_url.strip():
            raise ValidationError("missing shareUrl")

        share_url = share_url.strip()
        if not looks_like_maps_link(share_url):
            logger.warning(f"Link does not look like a Google Maps link: {share_url}")

        user_prompt = _construct_user_prompt(
            share_url, business_name, self.target_locale, self.min_reviews
        )
        logger.debug(f"Prompt built ({len(user_prompt)} chars) for {share_url}")

        try:
            logger.info(f"Sending request to Gemini for {share_url}")
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=user_prompt,
                config=self._build_config()
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error ({e.code}): {e}")
            raise TransportError(f"Gemini API error: {e}") from e
        except Exception as e:
            logger.error(f"Gemini request failed: {e}", exc_info=True)
            raise TransportError(f"Gemini request failed: {e}") from e

        response_text = response.text
        if not response_text:
            raise MalformedResponseError("Gemini returned no text")

        logger.debug(f"Raw Gemini reply: {response_text[:500]}")

        data = validate_response(response_text)
        logger.info(f"Fetched {len(data.reviews)} reviews for '{data.business_name}'")
        return data
