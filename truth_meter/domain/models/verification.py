"""Domain models for verification results and related entities."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel


class TruthRating(str, Enum):
    """Categorical truth ratings, from most to least credible."""

    TRUE = "True"
    MOSTLY_TRUE = "Mostly True"
    PARTIALLY_TRUE = "Partially True"
    MOSTLY_FALSE = "Mostly False"
    FALSE = "False"


def get_truth_rating(score: int) -> TruthRating:
    """Band a 0-10 truth score into its rating label."""
    if score >= 9:
        return TruthRating.TRUE
    elif score >= 7:
        return TruthRating.MOSTLY_TRUE
    elif score >= 5:
        return TruthRating.PARTIALLY_TRUE
    elif score >= 3:
        return TruthRating.MOSTLY_FALSE
    else:
        return TruthRating.FALSE


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class SourceInfo(BaseModel):
    """A reference document cited for a verification."""

    name: str = Field(..., description="Title of the reference document")
    year: Optional[str] = Field(None, description="Year the reference was published or reviewed")
    excerpt: str = Field(..., description="Relevant sentences taken from the reference")
    url: Optional[str] = Field(None, description="Canonical URL of the reference")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class VerificationResponse(BaseModel):
    """Outcome of verifying a single statement.

    The rating is always derived from ``truth_score`` and cannot be set on
    its own. Fields serialize as camelCase (``truthScore``, ``verifiedAt``).
    """

    statement: str = Field(..., description="Normalized statement text")
    truth_score: int = Field(..., ge=0, le=10, description="Truth score on a 0-10 scale")
    explanation: str = Field(..., description="One or two sentence summary")
    detailed_analysis: Optional[str] = Field(None, description="Multi-line analysis report")
    sources: List[SourceInfo] = Field(default_factory=list, description="Cited references")
    verified_at: str = Field(default_factory=utc_now_iso, description="ISO-8601 verification time")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "statement": "The Eiffel Tower is located in Paris.",
                "truthScore": 8,
                "truthRating": "Mostly True",
                "explanation": "Information found in reliable sources supports this news claim.",
                "sources": [
                    {
                        "name": "Eiffel Tower",
                        "year": "2024",
                        "excerpt": "The Eiffel Tower is a wrought-iron lattice tower in Paris, France.",
                        "url": "https://en.wikipedia.org/wiki/Eiffel_Tower",
                    }
                ],
                "verifiedAt": "2024-05-01T12:00:00+00:00",
            }
        }

    @computed_field(alias="truthRating")
    @property
    def truth_rating(self) -> TruthRating:
        """Rating label banded from the truth score."""
        return get_truth_rating(self.truth_score)
