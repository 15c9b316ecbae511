"""Google Fact Check Tools implementation of the claim review provider interface."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from cachetools import TTLCache
from pydantic import BaseModel, Field

from ...domain.ports.claim_review_provider import (
    ClaimReview,
    ClaimReviewProvider,
    ReviewedClaim,
    ReviewRating,
)

logger = logging.getLogger(__name__)


class FactCheckConfig(BaseModel):
    """Configuration for the Google Fact Check Tools adapter."""

    api_url: str = Field(
        default="https://factchecktools.googleapis.com/v1alpha1/claims:search",
        description="Claim search endpoint",
    )
    api_key: Optional[str] = Field(default=None, description="Google Cloud API key")
    language_code: str = Field(default="en-US", description="Review language")
    page_size: int = Field(default=10, description="Claims requested per search")
    timeout: float = Field(default=15.0, description="Request timeout in seconds")
    cache_ttl: int = Field(default=3600, description="Cache TTL in seconds")
    cache_maxsize: int = Field(default=1000, description="Maximum cache size")


class GoogleFactCheckAdapter(ClaimReviewProvider):
    """Looks up published fact checks through the Google Fact Check Tools API."""

    def __init__(
        self,
        config: Optional[FactCheckConfig] = None,
        provider_name: str = "Google Fact Check",
    ):
        self._config = config or FactCheckConfig()
        self._name = provider_name
        self._client: Optional[httpx.AsyncClient] = None
        self._initialized = False
        self._cache = TTLCache(
            maxsize=self._config.cache_maxsize,
            ttl=self._config.cache_ttl,
        )

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        try:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._config.timeout,
                    headers={"Accept": "application/json"},
                )
            if not self._config.api_key:
                logger.warning("⚠️ No Google Fact Check API key configured - requests may be rejected")
            self._initialized = True
        except Exception as e:
            self._initialized = False
            self._client = None
            raise ConnectionError(f"Failed to initialize fact check provider: {e}")

    async def search_claims(self, query: str) -> List[ReviewedClaim]:
        """Search reviewed claims matching the query.

        Args:
            query: Statement to look up

        Returns:
            Reviewed claims in API order

        Raises:
            RuntimeError: If the provider is not initialized
            httpx.HTTPStatusError: If the API rejects the request
        """
        if not self._client:
            raise RuntimeError("Provider not initialized")

        cache_key = f"claims:{query}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        params = {
            "query": query,
            "languageCode": self._config.language_code,
            "pageSize": str(self._config.page_size),
        }
        if self._config.api_key:
            params["key"] = self._config.api_key

        response = await self._client.get(self._config.api_url, params=params)
        response.raise_for_status()
        claims = [self._parse_claim(item) for item in response.json().get("claims", [])]

        self._cache[cache_key] = claims
        return claims

    @staticmethod
    def _parse_claim(data: Dict[str, Any]) -> ReviewedClaim:
        reviews = []
        for review in data.get("claimReview", []):
            publisher = review.get("publisher", {})
            rating = review.get("reviewRating")
            reviews.append(
                ClaimReview(
                    publisher_name=publisher.get("name", ""),
                    publisher_site=publisher.get("site"),
                    url=review.get("url", ""),
                    title=review.get("title"),
                    review_date=review.get("reviewDate"),
                    textual_rating=review.get("textualRating"),
                    review_rating=ReviewRating(
                        rating_value=rating.get("ratingValue"),
                        best_rating=rating.get("bestRating"),
                        worst_rating=rating.get("worstRating"),
                    ) if rating else None,
                )
            )

        claimant = data.get("claimant")
        if isinstance(claimant, dict):
            claimant = claimant.get("name")

        return ReviewedClaim(
            text=data.get("text", ""),
            claimant=claimant,
            claim_date=data.get("claimDate"),
            reviews=reviews,
        )

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        if self._client:
            await self._client.aclose()
        self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return self._name

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._client is not None
