"""Wikipedia adapter implementation of the reference provider interface."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from cachetools import TTLCache
from pydantic import BaseModel, Field

from ...domain.ports.reference_provider import (
    ReferenceExtract,
    ReferenceProvider,
    ReferenceSearchResult,
)

logger = logging.getLogger(__name__)


class WikipediaConfig(BaseModel):
    """Configuration for Wikipedia adapter."""

    api_url: str = Field(
        default="https://en.wikipedia.org/w/api.php",
        description="MediaWiki action API endpoint",
    )
    article_base_url: str = Field(
        default="https://en.wikipedia.org/wiki/",
        description="Prefix for canonical article URLs",
    )
    user_agent: str = Field(default="TruthMeter/1.0", description="User agent for Wikipedia API")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    cache_ttl: int = Field(default=3600, description="Cache TTL in seconds")
    cache_maxsize: int = Field(default=1000, description="Maximum cache size")


class WikipediaAdapter(ReferenceProvider):
    """Wikipedia implementation of the reference provider interface.

    Searches with ``list=search`` and fetches plain-text introductions with
    ``prop=extracts`` from the MediaWiki action API. Results are cached
    with a TTL.
    """

    def __init__(
        self,
        config: Optional[WikipediaConfig] = None,
        provider_name: str = "Wikipedia",
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            provider_name: Name of the provider
        """
        self._config = config or WikipediaConfig()
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
                    headers={"User-Agent": self._config.user_agent},
                )
            self._initialized = True
        except Exception as e:
            self._initialized = False
            self._client = None
            raise ConnectionError(f"Failed to initialize reference provider: {e}")

    async def _query(self, params: Dict[str, str]) -> Dict[str, Any]:
        if not self._client:
            raise RuntimeError("Provider not initialized")

        response = await self._client.get(
            self._config.api_url,
            params={"action": "query", "format": "json", **params},
        )
        response.raise_for_status()
        return response.json()

    async def search(self, query: str, limit: int = 10) -> List[ReferenceSearchResult]:
        """Search Wikipedia articles.

        Args:
            query: Search query
            limit: Maximum number of results

        Returns:
            Matching articles in search-rank order
        """
        query = query.strip()
        if not query:
            return []

        cache_key = f"search:{query}:{limit}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        data = await self._query({"list": "search", "srsearch": query, "srlimit": str(limit)})
        results = [
            ReferenceSearchResult(
                id=item["pageid"],
                title=item["title"],
                snippet=item.get("snippet", ""),
            )
            for item in data.get("query", {}).get("search", [])
        ]

        self._cache[cache_key] = results
        return results

    async def get_extract(self, document_id: int) -> ReferenceExtract:
        """Get the plain-text introduction of an article.

        Args:
            document_id: Wikipedia page id

        Returns:
            Article extract; empty when the page has none
        """
        cache_key = f"extract:{document_id}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        data = await self._query({
            "pageids": str(document_id),
            "prop": "extracts",
            "exintro": "1",
            "explaintext": "1",
        })
        page = data.get("query", {}).get("pages", {}).get(str(document_id), {})
        extract = ReferenceExtract(
            id=page.get("pageid", document_id),
            title=page.get("title", ""),
            extract=page.get("extract") or "",
        )

        self._cache[cache_key] = extract
        return extract

    def page_url(self, title: str) -> Optional[str]:
        """Canonical article URL for a title."""
        if not title:
            return None
        return self._config.article_base_url + quote(title.replace(" ", "_"), safe="")

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
