"""
Result data models.

ReviewsData is the success payload handed to the presentation layer.
ErrorResult is the failure payload. A caller gets exactly one of the two.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

from src.models.review import ReviewRecord
from src.models.summary import SummaryRecord


@dataclass(frozen=True)
class ReviewsData:
    """
    Reviews and summary for one business.
    Reviews keep the relevance order the AI service returned.
    """
    business_name: str
    average_rating: float  # 0-5
    total_reviews: int  # >= 0
    summary: SummaryRecord
    reviews: Tuple[ReviewRecord, ...] = ()

    def to_dict(self) -> dict:
        """Convert to the camelCase wire shape."""
        return {
            "businessName": self.business_name,
            "averageRating": self.average_rating,
            "totalReviews": self.total_reviews,
            "summary": self.summary.to_wire(),
            "reviews": [r.to_dict() for r in self.reviews]
        }


@dataclass(frozen=True)
class ErrorResult:
    """
    User-facing failure.
    Only the message goes on the wire; kind and status stay server-side.
    """
    error: str
    kind: str = field(default="ReviewServiceError", compare=False)
    status_code: int = field(default=500, compare=False)

    def to_dict(self) -> dict:
        return {"error": self.error}


FetchResult = Union[ReviewsData, ErrorResult]
