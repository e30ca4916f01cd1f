"""
Plain-text review page.

Terminal rendition of the shareable review page: header with rating,
summary block, then one card per review.
"""

from typing import List

from src.models.review import ReviewRecord
from src.models.reviews_data import ReviewsData
from src.models.summary import StructuredSummary

WIDTH = 60

STRUCTURED_LABELS = (
    ("price", "Price"),
    ("service", "Service"),
    ("the_good", "The good"),
    ("the_bad", "The bad"),
)


def render_stars(rating: float) -> str:
    """Five stars, rounded to the nearest half star."""
    halves = int(round(max(0.0, min(5.0, rating)) * 2))
    full, half = divmod(halves, 2)
    return "★" * full + ("½" if half else "") + "☆" * (5 - full - half)


def _render_review(review: ReviewRecord) -> List[str]:
    return [
        f"{review.author}  {render_stars(review.rating)}",
        f"  \"{review.text}\"",
        "",
    ]


def render_page(data: ReviewsData) -> str:
    """Render ReviewsData as a text page."""
    lines = [
        "=" * WIDTH,
        data.business_name.center(WIDTH),
        f"{data.average_rating:.1f} {render_stars(data.average_rating)} "
        f"from {data.total_reviews} reviews".center(WIDTH),
        "=" * WIDTH,
        "",
    ]

    summary = data.summary
    if isinstance(summary, StructuredSummary):
        lines.append(f"\"{summary.overall_summary}\"")
        lines.append("")
        for field_name, label in STRUCTURED_LABELS:
            lines.append(f"  {label + ':':<10} {getattr(summary, field_name)}")
    else:
        lines.append(f"\"{summary.text}\"")
    lines.append("")

    lines.append("-" * WIDTH)
    lines.append("What our customers say")
    lines.append("-" * WIDTH)
    if not data.reviews:
        lines.append("No reviews available.")
    for review in data.reviews:
        lines.extend(_render_review(review))

    return "\n".join(lines).rstrip() + "\n"
