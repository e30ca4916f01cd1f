"""
Review data model.

Represents a single review returned by the AI service for a business.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ReviewRecord:
    """
    One review as returned by the AI service.
    Only the fields the review page shows.
    """
    author: str  # Reviewer display name
    rating: Union[int, float]  # 1-5 star rating
    text: str  # Review text, translated to the target locale

    def __post_init__(self):
        # Validate rating
        if not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "author": self.author,
            "rating": self.rating,
            "text": self.text
        }
