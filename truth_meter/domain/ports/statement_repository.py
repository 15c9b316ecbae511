"""Repository interface for the verification history."""

from typing import List, Optional, Protocol

from ..models.statement import StoredStatement
from ..models.verification import VerificationResponse


class StatementRepository(Protocol):
    """Append-only store of past verifications."""

    async def save_verification(
        self,
        response: VerificationResponse,
        context: Optional[str] = None,
    ) -> int:
        """Persist a verification with its sources and return its identifier."""
        ...

    async def get(self, statement_id: int) -> Optional[StoredStatement]:
        """Get a stored statement by identifier."""
        ...

    async def list_all(self) -> List[StoredStatement]:
        """List all stored statements, newest first."""
        ...

    async def search(self, query: str) -> List[StoredStatement]:
        """Substring search over text, context and explanation, newest first."""
        ...

