"""Tests for the service container."""

import pytest

from truth_meter.config import Settings, VerifierBackend
from truth_meter.domain.services.claim_review_service import ClaimReviewService
from truth_meter.domain.services.verification_service import VerificationService
from truth_meter.infrastructure.dependencies import ServiceContainer
from truth_meter.infrastructure.storage.memory_repository import InMemoryStatementRepository


def test_repository_is_shared():
    container = ServiceContainer(Settings())

    repository = container.get_statement_repository()

    assert isinstance(repository, InMemoryStatementRepository)
    assert container.get_statement_repository() is repository


def test_unknown_service():
    with pytest.raises(KeyError):
        ServiceContainer(Settings()).get("translator")


@pytest.mark.asyncio
async def test_wikipedia_backend():
    """Test that the default backend verifies against Wikipedia."""
    container = ServiceContainer(Settings(reference_timeout=2.0))

    verifier = await container.get_statement_verifier()

    assert isinstance(verifier, VerificationService)
    assert await container.get_statement_verifier() is verifier
    assert container.provider_status == {"wikipedia": True, "factcheck": False}

    await container.shutdown()
    assert container.provider_status == {"wikipedia": False, "factcheck": False}


@pytest.mark.asyncio
async def test_factcheck_backend():
    container = ServiceContainer(Settings(backend=VerifierBackend.FACTCHECK, google_factcheck_api_key="secret"))

    verifier = await container.get_statement_verifier()

    assert isinstance(verifier, ClaimReviewService)
    assert container.provider_status == {"wikipedia": False, "factcheck": True}

    await container.shutdown()
