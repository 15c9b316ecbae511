"""Domain models for persisted verification history."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from .verification import SourceInfo, VerificationResponse


class StoredSource(BaseModel):
    """A cited reference attached to a stored statement."""

    id: int
    statement_id: int
    name: str
    year: Optional[str] = None
    excerpt: str
    url: Optional[str] = None

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def to_source_info(self) -> SourceInfo:
        return SourceInfo(name=self.name, year=self.year, excerpt=self.excerpt, url=self.url)


class StoredStatement(BaseModel):
    """A verified statement as kept in the history store."""

    id: int = Field(..., description="Identifier assigned by the store")
    text: str = Field(..., description="Normalized statement text")
    context: Optional[str] = Field(None, description="Free-text context supplied by the user")
    explanation: str
    detailed_analysis: Optional[str] = None
    truth_score: int = Field(..., ge=0, le=10)
    verified_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sources: List[StoredSource] = Field(default_factory=list)

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def to_verification_response(self) -> VerificationResponse:
        """Rebuild the verification response this record was created from."""
        return VerificationResponse(
            statement=self.text,
            truth_score=self.truth_score,
            explanation=self.explanation,
            detailed_analysis=self.detailed_analysis,
            sources=[source.to_source_info() for source in self.sources],
            verified_at=self.verified_at.isoformat(),
        )
