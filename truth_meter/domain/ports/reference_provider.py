"""Reference provider interface for search-and-extract sources."""

from typing import List, Optional, Protocol

from pydantic import BaseModel, Field


class ReferenceSearchResult(BaseModel):
    """A single hit returned by a reference search."""

    id: int = Field(..., description="Document identifier (page id)")
    title: str = Field(..., description="Document title")
    snippet: str = Field(default="", description="Search snippet")


class ReferenceExtract(BaseModel):
    """Plain-text introductory extract of a reference document."""

    id: int = Field(..., description="Document identifier (page id)")
    title: str = Field(..., description="Document title")
    extract: str = Field(default="", description="Plain-text extract, may be empty")


class ReferenceProvider(Protocol):
    """Protocol for encyclopedic sources that can be searched and excerpted."""

    async def initialize(self) -> None:
        """Initialize the provider and its HTTP resources."""
        ...

    async def search(self, query: str, limit: int = 10) -> List[ReferenceSearchResult]:
        """Search documents matching the query.

        An empty or very short query returns zero or more results and never
        raises for that reason alone.
        """
        ...

    async def get_extract(self, document_id: int) -> ReferenceExtract:
        """Fetch the plain-text introductory extract of a document."""
        ...

    def page_url(self, title: str) -> Optional[str]:
        """Build the canonical URL for a document title."""
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
