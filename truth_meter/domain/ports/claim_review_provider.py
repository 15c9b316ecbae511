"""Claim review provider interface for fact-check aggregation sources."""

from typing import List, Optional, Protocol

from pydantic import BaseModel, Field


class ReviewRating(BaseModel):
    """Numeric rating attached to a claim review."""

    rating_value: Optional[float] = None
    best_rating: Optional[float] = None
    worst_rating: Optional[float] = None


class ClaimReview(BaseModel):
    """A fact-checking organization's review of a claim."""

    publisher_name: str = ""
    publisher_site: Optional[str] = None
    url: str = ""
    title: Optional[str] = None
    review_date: Optional[str] = None
    textual_rating: Optional[str] = None
    review_rating: Optional[ReviewRating] = None


class ReviewedClaim(BaseModel):
    """A claim found in the aggregator together with its reviews."""

    text: str
    claimant: Optional[str] = None
    claim_date: Optional[str] = None
    reviews: List[ClaimReview] = Field(default_factory=list)


class ClaimReviewProvider(Protocol):
    """Protocol for fact-check aggregation APIs."""

    async def initialize(self) -> None:
        """Initialize the provider and its HTTP resources."""
        ...

    async def search_claims(self, query: str) -> List[ReviewedClaim]:
        """Find reviewed claims matching the query."""
        ...

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        ...
