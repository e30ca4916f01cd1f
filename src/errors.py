"""
Error taxonomy for the review fetching contract.

Every failure the core can produce is one of these types. The boundary in
src.review_service converts them to a single user-facing message.
"""

from typing import Optional


class ReviewServiceError(Exception):
    """Base exception for review fetching errors."""

    status_code = 500
    default_message = "An unexpected error occurred while fetching reviews."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Message safe to show to the end user."""
        return self.default_message


class ValidationError(ReviewServiceError):
    """Missing or malformed caller input. User-correctable."""

    status_code = 400
    default_message = "The request is missing required information."

    @property
    def user_message(self) -> str:
        return self.message


class ConfigurationError(ReviewServiceError):
    """Server credential is not configured. Operator-fixable."""

    status_code = 500
    default_message = "Server configuration error: the API key is not configured."


class NotFoundError(ReviewServiceError):
    """The model could not resolve the business from the link."""

    status_code = 404
    default_message = "The business could not be found."
    hint = "Check that the link points to a specific place on Google Maps and that the name is correct."

    @property
    def user_message(self) -> str:
        return f"{self.message} {self.hint}"


class MalformedResponseError(ReviewServiceError):
    """The model replied with something that is not a usable JSON object."""

    status_code = 502
    default_message = "The AI service returned an unexpected response. Please try again."


class IncompleteResponseError(MalformedResponseError):
    """The reply parsed as JSON but lacks required fields."""

    default_message = "The AI service response did not contain all the required data. Please try again."


class TransportError(ReviewServiceError):
    """Network or service failure while calling the model."""

    status_code = 502
    default_message = "Could not reach the AI service. Please try again."
