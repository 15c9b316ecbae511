"""Concurrent retrieval of reference documents for a query set."""

import asyncio
import logging
from typing import Awaitable, Dict, List, Optional, TypeVar

from ..models.analysis import Document
from ..ports.reference_provider import ReferenceExtract, ReferenceProvider, ReferenceSearchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRIMARY_SEARCH_LIMIT = 30
VARIANT_SEARCH_LIMIT = 15
MAX_EXTRACTS = 20
MIN_EXTRACT_LENGTH = 50


class ReferenceRetrievalError(Exception):
    """The primary reference search failed, so no documents are available."""


class ReferenceRetriever:
    """Fans queries and extract fetches out to a reference provider.

    The primary search must succeed; variant searches and extract fetches
    are individually best-effort. Every provider call is bounded by a
    timeout and a shared concurrency limit.
    """

    def __init__(
        self,
        provider: ReferenceProvider,
        timeout: float = 10.0,
        max_concurrency: int = 8,
        primary_limit: int = PRIMARY_SEARCH_LIMIT,
        variant_limit: int = VARIANT_SEARCH_LIMIT,
        max_extracts: int = MAX_EXTRACTS,
    ):
        self._provider = provider
        self._timeout = timeout
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._primary_limit = primary_limit
        self._variant_limit = variant_limit
        self._max_extracts = max_extracts

    async def _call(self, awaitable: Awaitable[T]) -> T:
        async with self._semaphore:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)

    async def search_all(self, primary: str, variants: List[str]) -> List[ReferenceSearchResult]:
        """Run the primary and variant searches and merge unique hits.

        Raises:
            ReferenceRetrievalError: If the primary search fails
        """
        try:
            primary_results = await self._call(self._provider.search(primary, self._primary_limit))
        except Exception as e:
            raise ReferenceRetrievalError(f"Primary search failed for {primary!r}: {e}") from e

        variant_results = await asyncio.gather(
            *(self._call(self._provider.search(query, self._variant_limit)) for query in variants),
            return_exceptions=True,
        )

        merged: Dict[int, ReferenceSearchResult] = {}
        for result in primary_results:
            merged.setdefault(result.id, result)
        for query, results in zip(variants, variant_results):
            if isinstance(results, BaseException):
                logger.warning(f"⚠️ Variant search failed for {query!r}: {results!r}")
                continue
            for result in results:
                merged.setdefault(result.id, result)

        return list(merged.values())

    async def fetch_documents(self, results: List[ReferenceSearchResult]) -> List[Document]:
        """Fetch extracts for the top results, dropping failures and thin extracts."""
        candidates = results[: self._max_extracts]
        extracts = await asyncio.gather(
            *(self._call(self._provider.get_extract(result.id)) for result in candidates),
            return_exceptions=True,
        )

        documents = []
        for result, extract in zip(candidates, extracts):
            if isinstance(extract, BaseException):
                logger.warning(f"⚠️ Extract fetch failed for {result.title!r}: {extract!r}")
                continue
            if not self._is_informative(extract):
                continue
            documents.append(Document(id=extract.id, title=extract.title or result.title, extract=extract.extract))
        return documents

    async def retrieve(self, primary: str, variants: Optional[List[str]] = None) -> List[Document]:
        """Retrieve reference documents for a primary query and its variants.

        Args:
            primary: Primary search query
            variants: Alternative queries, searched concurrently

        Returns:
            Documents in retrieval order

        Raises:
            ReferenceRetrievalError: If the primary search fails
        """
        results = await self.search_all(primary, variants or [])
        logger.info(f"📚 Found {len(results)} candidate references for {primary!r}")
        if not results:
            return []
        return await self.fetch_documents(results)

    @staticmethod
    def _is_informative(extract: ReferenceExtract) -> bool:
        return len(extract.extract) > MIN_EXTRACT_LENGTH
