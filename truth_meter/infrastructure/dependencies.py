"""Dependency injection configuration for hexagonal architecture."""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from ..config import Settings, VerifierBackend, get_settings
from ..domain.ports.statement_repository import StatementRepository
from ..domain.ports.statement_verifier import StatementVerifier
from ..domain.services.claim_review_service import ClaimReviewService
from ..domain.services.reference_retriever import ReferenceRetriever
from ..domain.services.verification_service import VerificationService
from .reference.factcheck_adapter import FactCheckConfig
from .reference.factory import ReferenceProviderFactory
from .reference.wikipedia_adapter import WikipediaConfig
from .storage.memory_repository import InMemoryStatementRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize service container."""
        self._settings = settings or get_settings()
        self._factory = ReferenceProviderFactory()
        self._services: Dict[str, Any] = {}
        self._verifier_lock = asyncio.Lock()
        self._setup_services()

    def _setup_services(self):
        """Setup services that need no async initialization."""
        logger.info("🔧 Setting up service container...")
        self._services = {
            "statement_repository": InMemoryStatementRepository(),
            # Created lazily once its provider is initialized
            "statement_verifier": None,
        }
        logger.info("✅ Service container setup completed")

    async def _create_verifier(self) -> StatementVerifier:
        settings = self._settings

        if settings.backend is VerifierBackend.FACTCHECK:
            logger.info("📚 Setting up Google Fact Check provider...")
            provider = await self._factory.create_provider(
                "factcheck",
                config=FactCheckConfig(
                    api_key=settings.google_factcheck_api_key,
                    timeout=settings.reference_timeout,
                    cache_ttl=settings.reference_cache_ttl,
                    cache_maxsize=settings.reference_cache_maxsize,
                ),
            )
            return ClaimReviewService(provider)

        logger.info("📚 Setting up Wikipedia provider...")
        provider = await self._factory.create_provider(
            "wikipedia",
            config=WikipediaConfig(
                api_url=settings.wikipedia_api_url,
                user_agent=settings.wikipedia_user_agent,
                timeout=settings.reference_timeout,
                cache_ttl=settings.reference_cache_ttl,
                cache_maxsize=settings.reference_cache_maxsize,
            ),
        )
        retriever = ReferenceRetriever(
            provider,
            timeout=settings.reference_timeout,
            max_concurrency=settings.reference_max_concurrency,
        )
        return VerificationService(provider, retriever)

    async def _ensure_statement_verifier(self) -> StatementVerifier:
        """Ensure the verifier is created with an initialized provider."""
        async with self._verifier_lock:
            if self._services["statement_verifier"] is None:
                logger.info(f"🔧 Creating statement verifier for backend {self._settings.backend.value}...")
                self._services["statement_verifier"] = await self._create_verifier()
                logger.info("✅ Statement verifier ready")
        return self._services["statement_verifier"]

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_statement_repository(self) -> StatementRepository:
        """Get the verification history store."""
        return self.get("statement_repository")

    async def get_statement_verifier(self) -> StatementVerifier:
        """Get the statement verifier, initializing its provider on first use."""
        return await self._ensure_statement_verifier()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def provider_status(self) -> Dict[str, bool]:
        """Registered providers and whether each is active."""
        return self._factory.available_providers

    async def shutdown(self) -> None:
        """Shutdown all active providers."""
        await self._factory.shutdown_all()
        self._services["statement_verifier"] = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance."""
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_statement_repository() -> StatementRepository:
    """FastAPI dependency for the statement repository."""
    return get_service_container().get_statement_repository()


async def get_statement_verifier() -> StatementVerifier:
    """FastAPI dependency for the statement verifier."""
    return await get_service_container().get_statement_verifier()
