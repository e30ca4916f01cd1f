"""
Summary data model.

Two summary schemas exist on the wire:
- "text": a single descriptive string (older prompt)
- "structured": price / service / the_good / the_bad / overall_summary

The structured form is the one the prompt asks for. The JSON type of the
"summary" value is the discriminant: a string is "text", an object is
"structured".
"""

from dataclasses import dataclass, fields
from typing import Union


@dataclass(frozen=True)
class TextSummary:
    """Flat-string summary."""
    text: str

    kind = "text"

    def to_wire(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredSummary:
    """
    Structured summary of all reviews.
    All five fields are required; a partial object is not a summary.
    """
    price: str  # e.g. "Moderado"
    service: str  # e.g. "Excelente"
    the_good: str  # Short positive highlight
    the_bad: str  # Short area for improvement
    overall_summary: str  # One paragraph, max 25 words

    kind = "structured"

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: dict) -> "StructuredSummary":
        """
        Create StructuredSummary from the JSON object.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field is not a string
        """
        values = {}
        for name in cls.field_names():
            value = data[name]
            if not isinstance(value, str):
                raise TypeError(f"Summary field '{name}' must be a string")
            values[name] = value
        return cls(**values)

    def to_wire(self) -> dict:
        return {name: getattr(self, name) for name in self.field_names()}


SummaryRecord = Union[TextSummary, StructuredSummary]
