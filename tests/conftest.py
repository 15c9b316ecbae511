"""Test configuration and common fixtures."""

import asyncio
import json
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from truth_meter.domain.ports.reference_provider import ReferenceExtract, ReferenceSearchResult
from truth_meter.infrastructure.reference.wikipedia_adapter import WikipediaAdapter, WikipediaConfig


def create_response(status_code: int, json_data: dict = None, text: str = None) -> httpx.Response:
    """Create a Response object with a proper request."""
    request = httpx.Request("GET", "https://test-reference-server/api")
    content = (
        json.dumps(json_data).encode() if json_data is not None
        else text.encode() if text is not None
        else b""
    )
    headers = (
        {"content-type": "application/json"} if json_data is not None
        else {"content-type": "text/plain"}
    )
    return httpx.Response(
        status_code=status_code,
        headers=headers,
        content=content,
        request=request,
    )


class FakeReferenceProvider:
    """In-memory reference provider.

    Every query returns ``default_results`` unless it is listed in
    ``results_by_query``. Queries in ``failing_queries`` raise and queries in
    ``slow_queries`` sleep for ``delay`` seconds first.
    """

    def __init__(
        self,
        pages: Optional[Dict[int, Tuple[str, str]]] = None,
        results_by_query: Optional[Dict[str, List[int]]] = None,
        default_results: Optional[List[int]] = None,
        failing_queries: Iterable[str] = (),
        slow_queries: Iterable[str] = (),
        failing_extracts: Iterable[int] = (),
        delay: float = 1.0,
    ):
        self.pages = pages or {}
        self.results_by_query = results_by_query or {}
        self.default_results = list(self.pages) if default_results is None else default_results
        self.failing_queries = set(failing_queries)
        self.slow_queries = set(slow_queries)
        self.failing_extracts = set(failing_extracts)
        self.delay = delay
        self.search_calls: List[Tuple[str, int]] = []
        self.extract_calls: List[int] = []

    async def initialize(self) -> None:
        pass

    async def search(self, query: str, limit: int = 10) -> List[ReferenceSearchResult]:
        self.search_calls.append((query, limit))
        if query in self.slow_queries:
            await asyncio.sleep(self.delay)
        if query in self.failing_queries:
            raise ConnectionError(f"search failed: {query}")
        page_ids = self.results_by_query.get(query, self.default_results)
        return [
            ReferenceSearchResult(id=page_id, title=self.pages[page_id][0])
            for page_id in page_ids[:limit]
        ]

    async def get_extract(self, document_id: int) -> ReferenceExtract:
        self.extract_calls.append(document_id)
        if document_id in self.failing_extracts:
            raise ConnectionError(f"extract failed: {document_id}")
        title, extract = self.pages[document_id]
        return ReferenceExtract(id=document_id, title=title, extract=extract)

    def page_url(self, title: str) -> Optional[str]:
        return f"https://reference.test/wiki/{title.replace(' ', '_')}"

    async def shutdown(self) -> None:
        pass

    @property
    def provider_name(self) -> str:
        return "Fake"

    @property
    def is_available(self) -> bool:
        return True


@pytest.fixture
def eiffel_pages() -> Dict[int, Tuple[str, str]]:
    """Reference pages about the Eiffel Tower."""
    return {
        1: (
            "Eiffel Tower",
            "The Eiffel Tower is located in Paris, France. "
            "It was designed by the engineering company of Gustave Eiffel.",
        ),
    }


@pytest.fixture
def fake_provider(eiffel_pages) -> FakeReferenceProvider:
    """Provide a fake reference provider serving the Eiffel Tower pages."""
    return FakeReferenceProvider(pages=eiffel_pages)


@pytest.fixture
def mock_transport_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build AsyncClients whose requests are answered by a handler function."""

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return build


def wikipedia_handler(
    search_results: List[Dict],
    pages: Dict[str, Dict],
    requests: Optional[List[httpx.Request]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """MediaWiki action API stand-in serving fixed search results and pages."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        params = request.url.params
        if params.get("list") == "search":
            return create_response(200, {"query": {"search": search_results}})
        if params.get("prop") == "extracts":
            page_id = params["pageids"]
            return create_response(200, {"query": {"pages": {page_id: pages.get(page_id, {})}}})
        return create_response(400, {"error": {"code": "badparams"}})

    return handler


@pytest_asyncio.fixture
async def wikipedia_adapter(mock_transport_factory) -> WikipediaAdapter:
    """Provide a Wikipedia adapter answering from fixed Eiffel Tower data."""
    handler = wikipedia_handler(
        search_results=[{"pageid": 1, "title": "Eiffel Tower", "snippet": "tower in Paris"}],
        pages={
            "1": {
                "pageid": 1,
                "title": "Eiffel Tower",
                "extract": "The Eiffel Tower is located in Paris, France. "
                           "It was designed by the engineering company of Gustave Eiffel.",
            }
        },
    )
    adapter = WikipediaAdapter(WikipediaConfig(timeout=1.0, cache_ttl=60, cache_maxsize=100))
    adapter._client = mock_transport_factory(handler)
    await adapter.initialize()
    yield adapter
    await adapter.shutdown()


@pytest.fixture
def reference_provider_factory() -> Callable[..., FakeReferenceProvider]:
    """Build fake reference providers with custom pages and failure modes."""
    return FakeReferenceProvider


@pytest.fixture
def mediawiki_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Build MediaWiki API stand-ins for MockTransport."""
    return wikipedia_handler
