"""Service for verifying statements against reference documents."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..models.analysis import Document
from ..models.verification import SourceInfo, VerificationResponse
from ..ports.reference_provider import ReferenceProvider
from .query_extractor import build_queries
from .reference_retriever import ReferenceRetrievalError, ReferenceRetriever
from .relevance_scorer import find_relevant_excerpt, score
from .score_aggregator import aggregate
from .text_normalizer import normalize

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 5
NO_REFERENCE_EXPLANATION = (
    "We couldn't find reliable information to verify this news claim. "
    "Consider adding more specific details or checking specialized news sources."
)
INTERNAL_ERROR_EXPLANATION = (
    "We encountered an issue while verifying this news claim. This might be due to network "
    "issues or the complexity of the statement. Try rephrasing or providing more context."
)


class VerificationService:
    """Runs the verification pipeline for a single statement.

    normalize -> build queries -> retrieve references -> score -> aggregate
    """

    def __init__(
        self,
        provider: ReferenceProvider,
        retriever: Optional[ReferenceRetriever] = None,
    ):
        """Initialize the service.

        Args:
            provider: Reference provider used for search and page URLs
            retriever: Retriever over the provider; a default one is built if omitted
        """
        self._provider = provider
        self._retriever = retriever or ReferenceRetriever(provider)
        logger.info("🔧 VerificationService initialized")

    async def verify(self, text: str, context: Optional[str] = None) -> VerificationResponse:
        """Verify a statement.

        ``context`` is accepted for the history record but does not influence
        scoring.

        Args:
            text: Statement to verify
            context: Optional free-text context

        Returns:
            Verification response; failures degrade to a neutral score of 5
        """
        statement = text
        try:
            statement = normalize(text)
            logger.info(f"🔍 Verifying statement: {statement[:100]}")
            if context:
                logger.debug("Context supplied but not used for scoring")

            queries = build_queries(statement)
            logger.info(f"🔎 Search term: {queries.primary!r} ({len(queries.variants)} variants)")

            try:
                documents = await self._retriever.retrieve(queries.primary, queries.variants)
            except ReferenceRetrievalError as e:
                logger.warning(f"⚠️ Reference retrieval failed: {e}")
                documents = []

            if not documents:
                logger.info("📭 No usable references found")
                return self.neutral_response(statement, NO_REFERENCE_EXPLANATION)

            sources = self._build_sources(documents, statement, queries.primary)
            signals = score(statement, documents, queries.primary.split())
            result = aggregate(statement, signals)

            logger.info(f"✅ Verification complete: {result.score}/10 - {result.explanation}")
            return VerificationResponse(
                statement=statement,
                truth_score=result.score,
                explanation=result.explanation,
                detailed_analysis=result.detailed_analysis,
                sources=sources,
            )
        except Exception as e:
            logger.error(f"❌ Verification failed: {type(e).__name__}: {e}", exc_info=True)
            return self.neutral_response(statement, INTERNAL_ERROR_EXPLANATION)

    def _build_sources(self, documents: List[Document], statement: str, search_term: str) -> List[SourceInfo]:
        # Articles are live documents, so they are dated to the current year.
        year = str(datetime.now(timezone.utc).year)
        return [
            SourceInfo(
                name=document.title,
                year=year,
                excerpt=find_relevant_excerpt(document.extract, statement, search_term),
                url=self._provider.page_url(document.title),
            )
            for document in documents
        ]

    @staticmethod
    def neutral_response(statement: str, explanation: str) -> VerificationResponse:
        """Response for statements that could not be assessed."""
        return VerificationResponse(
            statement=statement,
            truth_score=NEUTRAL_SCORE,
            explanation=explanation,
            sources=[],
        )
