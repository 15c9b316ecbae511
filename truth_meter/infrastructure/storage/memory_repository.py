"""In-memory implementation of the statement repository."""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ...domain.models.statement import StoredSource, StoredStatement
from ...domain.models.verification import VerificationResponse
from ...domain.ports.statement_repository import StatementRepository


class InMemoryStatementRepository(StatementRepository):
    """Keeps verification history in process memory.

    Identifiers are sequential per repository instance, starting at
    ``start_id``.
    """

    def __init__(self, start_id: int = 1):
        self._statements: Dict[int, StoredStatement] = {}
        self._next_statement_id = start_id
        self._next_source_id = start_id
        self._lock = asyncio.Lock()

    async def save_verification(
        self,
        response: VerificationResponse,
        context: Optional[str] = None,
    ) -> int:
        """Store a verification and its sources, returning the new statement id."""
        async with self._lock:
            statement_id = self._next_statement_id
            self._next_statement_id += 1

            sources = []
            for source in response.sources:
                sources.append(
                    StoredSource(
                        id=self._next_source_id,
                        statement_id=statement_id,
                        name=source.name,
                        year=source.year,
                        excerpt=source.excerpt,
                        url=source.url,
                    )
                )
                self._next_source_id += 1

            self._statements[statement_id] = StoredStatement(
                id=statement_id,
                text=response.statement,
                context=context,
                explanation=response.explanation,
                detailed_analysis=response.detailed_analysis,
                truth_score=response.truth_score,
                verified_at=datetime.now(timezone.utc),
                sources=sources,
            )
            return statement_id

    async def get(self, statement_id: int) -> Optional[StoredStatement]:
        return self._statements.get(statement_id)

    async def list_all(self) -> List[StoredStatement]:
        return self._newest_first(self._statements.values())

    async def search(self, query: str) -> List[StoredStatement]:
        needle = query.lower()
        return self._newest_first(
            statement
            for statement in self._statements.values()
            if needle in statement.text.lower()
            or (statement.context and needle in statement.context.lower())
            or needle in statement.explanation.lower()
        )

    @staticmethod
    def _newest_first(statements) -> List[StoredStatement]:
        return sorted(statements, key=lambda s: (s.verified_at, s.id), reverse=True)
