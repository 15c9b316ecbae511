"""Verifier interface consumed by the HTTP layer and the console."""

from typing import Optional, Protocol

from ..models.verification import VerificationResponse


class StatementVerifier(Protocol):
    """Anything that turns a statement into a verification response."""

    async def verify(self, text: str, context: Optional[str] = None) -> VerificationResponse:
        """Verify a statement.

        Implementations never raise: failures degrade to a neutral response.
        """
        ...
