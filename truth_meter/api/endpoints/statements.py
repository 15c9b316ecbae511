"""Statement verification and history endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from ...domain.models.statement import StoredStatement
from ...domain.models.verification import VerificationResponse
from ...domain.ports.statement_repository import StatementRepository
from ...domain.ports.statement_verifier import StatementVerifier
from ...infrastructure.dependencies import get_statement_repository, get_statement_verifier

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["statements"])


class StatementVerificationRequest(BaseModel):
    """Request model for statement verification."""

    text: str = Field(..., min_length=5, description="Statement or headline to verify")
    context: Optional[str] = Field(None, description="Additional context")


class VerifiedStatementResponse(VerificationResponse):
    """Verification response together with its history identifier."""

    id: int = Field(..., description="Identifier of the stored verification")


def to_verified_statement(statement: StoredStatement) -> VerifiedStatementResponse:
    response = statement.to_verification_response()
    return VerifiedStatementResponse(id=statement.id, **response.model_dump(exclude={"truth_rating"}))


@router.post("/verify", response_model=VerifiedStatementResponse)
async def verify_statement(
    request: StatementVerificationRequest,
    verifier: StatementVerifier = Depends(get_statement_verifier),
    repository: StatementRepository = Depends(get_statement_repository),
) -> VerifiedStatementResponse:
    """Verify a statement and record it in the history.

    Args:
        request: Statement verification request

    Returns:
        Verification result with its stored identifier
    """
    logger.info(f"Starting verification for statement: {request.text[:100]}...")
    result = await verifier.verify(request.text, request.context)

    try:
        statement_id = await repository.save_verification(result, context=request.context)
    except Exception as e:
        logger.error(f"Error storing verification: {type(e).__name__}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"{type(e).__name__}: {str(e)}")

    return VerifiedStatementResponse(id=statement_id, **result.model_dump(exclude={"truth_rating"}))


@router.get("/statements", response_model=List[VerifiedStatementResponse])
async def list_statements(
    q: Optional[str] = Query(None, description="Substring to search for"),
    repository: StatementRepository = Depends(get_statement_repository),
) -> List[VerifiedStatementResponse]:
    """List past verifications, newest first, optionally filtered by a search string."""
    if q and q.strip():
        statements = await repository.search(q)
    else:
        statements = await repository.list_all()
    return [to_verified_statement(statement) for statement in statements]


@router.get("/statements/{statement_id}", response_model=VerifiedStatementResponse)
async def get_statement(
    statement_id: int,
    repository: StatementRepository = Depends(get_statement_repository),
) -> VerifiedStatementResponse:
    """Get a past verification by identifier.

    Raises:
        HTTPException: If the statement does not exist
    """
    statement = await repository.get(statement_id)
    if statement is None:
        raise HTTPException(status_code=404, detail="Statement not found")
    return to_verified_statement(statement)
