"""
Unit tests for the Review Fetch Agent.

Note: These tests use mocked Gemini responses to avoid API costs.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from google.genai import errors as genai_errors

from src.agents.review_fetcher import ReviewFetcher, SYSTEM_PROMPT, _construct_user_prompt
from src.errors import (
    ConfigurationError,
    MalformedResponseError,
    NotFoundError,
    TransportError,
    ValidationError,
)


SUCCESS_REPLY = json.dumps({
    "summary": {
        "price": "Moderado",
        "service": "Excelente",
        "the_good": "Café de especialidad",
        "the_bad": "Pocas mesas",
        "overall_summary": "Un rincón acogedor con excelente café."
    },
    "averageRating": 4.5,
    "totalReviews": 12,
    "businessName": "Café Luna",
    "reviews": [{"author": "A", "rating": 5, "text": "Me encantó"}]
})


@pytest.fixture
def mock_genai():
    """Patch the Gemini SDK module used by the fetcher."""
    with patch('src.agents.review_fetcher.genai') as mock_genai:
        yield mock_genai


def _fetcher_returning(mock_genai, text):
    mock_genai.Client.return_value.models.generate_content.return_value = MagicMock(text=text)
    return ReviewFetcher(api_key="test-key")


def test_missing_api_key_raises_configuration_error(mock_genai):
    """Test the client is never built without a credential."""
    with pytest.raises(ConfigurationError):
        ReviewFetcher(api_key="")

    mock_genai.Client.assert_not_called()


def test_api_key_is_injected(mock_genai):
    """Test the credential passed in is the one the client gets."""
    ReviewFetcher(api_key="fake-key-123")

    _, kwargs = mock_genai.Client.call_args
    assert kwargs["api_key"] == "fake-key-123"


def test_close_releases_client(mock_genai):
    """Test close() closes the underlying Gemini client."""
    fetcher = ReviewFetcher(api_key="fake-key-123")
    fetcher.close()

    mock_genai.Client.return_value.close.assert_called_once()


def test_round_trip_keeps_business_name(mock_genai):
    """Test the business name comes back exactly as Gemini sent it."""
    fetcher = _fetcher_returning(mock_genai, SUCCESS_REPLY)

    data = fetcher.fetch("https://maps.app.goo.gl/X", "Café Luna")

    assert data.business_name == "Café Luna"
    assert len(data.reviews) == 1
    assert data.summary.the_good == "Café de especialidad"


def test_single_call_with_maps_tool(mock_genai):
    """Test exactly one grounded request is sent with the link in the prompt."""
    fetcher = _fetcher_returning(mock_genai, SUCCESS_REPLY)

    fetcher.fetch("https://maps.app.goo.gl/X", "Café Luna")

    generate = mock_genai.Client.return_value.models.generate_content
    assert generate.call_count == 1

    _, kwargs = generate.call_args
    assert kwargs["model"] == "gemini-2.5-flash"
    assert "https://maps.app.goo.gl/X" in kwargs["contents"]
    assert "Café Luna" in kwargs["contents"]

    config = kwargs["config"]
    assert config.system_instruction == SYSTEM_PROMPT
    assert config.response_mime_type is None
    assert any(tool.google_maps is not None for tool in config.tools)
    assert any(tool.google_search is not None for tool in config.tools)


def test_web_search_can_be_disabled(mock_genai):
    """Test only the Maps tool is sent when web search is off."""
    mock_genai.Client.return_value.models.generate_content.return_value = MagicMock(text=SUCCESS_REPLY)
    fetcher = ReviewFetcher(api_key="test-key", use_web_search=False)

    fetcher.fetch("https://maps.app.goo.gl/X")

    _, kwargs = mock_genai.Client.return_value.models.generate_content.call_args
    assert len(kwargs["config"].tools) == 1
    assert kwargs["config"].tools[0].google_maps is not None


@pytest.mark.parametrize("share_url", ["", "   ", None])
def test_missing_share_url(mock_genai, share_url):
    """Test an empty link is rejected before any request."""
    fetcher = _fetcher_returning(mock_genai, SUCCESS_REPLY)

    with pytest.raises(ValidationError, match="missing shareUrl"):
        fetcher.fetch(share_url, "X")

    mock_genai.Client.return_value.models.generate_content.assert_not_called()


def test_non_maps_link_is_advisory(mock_genai):
    """Test a link without a Maps marker is still sent."""
    fetcher = _fetcher_returning(mock_genai, SUCCESS_REPLY)

    data = fetcher.fetch("https://example.com/cafe-luna", "Café Luna")

    assert data.business_name == "Café Luna"


def test_not_found_reply(mock_genai):
    """Test an error reply surfaces as NotFoundError, not TransportError."""
    fetcher = _fetcher_returning(mock_genai, '```json\n{"error": "not found"}\n```')

    with pytest.raises(NotFoundError, match="not found"):
        fetcher.fetch("https://maps.app.goo.gl/X")


def test_api_error_becomes_transport_error(mock_genai):
    """Test Gemini API failures are TransportError."""
    mock_genai.Client.return_value.models.generate_content.side_effect = genai_errors.APIError(
        503, {"error": {"code": 503, "message": "unavailable", "status": "UNAVAILABLE"}}
    )
    fetcher = ReviewFetcher(api_key="test-key")

    with pytest.raises(TransportError):
        fetcher.fetch("https://maps.app.goo.gl/X")


def test_network_error_becomes_transport_error(mock_genai):
    """Test connection failures are TransportError and not retried."""
    generate = mock_genai.Client.return_value.models.generate_content
    generate.side_effect = ConnectionError("connection reset")
    fetcher = ReviewFetcher(api_key="test-key")

    with pytest.raises(TransportError):
        fetcher.fetch("https://maps.app.goo.gl/X")

    assert generate.call_count == 1


def test_empty_reply_is_malformed(mock_genai):
    """Test a reply without text is MalformedResponseError."""
    fetcher = _fetcher_returning(mock_genai, None)

    with pytest.raises(MalformedResponseError):
        fetcher.fetch("https://maps.app.goo.gl/X")


def test_invalid_json_is_not_retried(mock_genai):
    """Test a malformed reply fails after a single attempt."""
    fetcher = _fetcher_returning(mock_genai, "invalid json{{{")

    with pytest.raises(MalformedResponseError):
        fetcher.fetch("https://maps.app.goo.gl/X")

    assert mock_genai.Client.return_value.models.generate_content.call_count == 1


def test_user_prompt_contents():
    """Test the prompt carries locale, review count and the not-found instruction."""
    prompt = _construct_user_prompt("https://maps.app.goo.gl/X", None, "es-MX", 5)

    assert "https://maps.app.goo.gl/X" in prompt
    assert "(not provided)" in prompt
    assert "at least 5" in prompt
    assert "es-MX" in prompt
    assert '"error"' in prompt
    assert "overall_summary" in prompt


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
