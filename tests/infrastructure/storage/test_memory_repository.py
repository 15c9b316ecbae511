"""Tests for the in-memory statement repository."""

import pytest

from truth_meter.domain.models.verification import SourceInfo, VerificationResponse
from truth_meter.infrastructure.storage.memory_repository import InMemoryStatementRepository


def make_response(statement: str, score: int = 8, explanation: str = "Supported.", sources=None) -> VerificationResponse:
    return VerificationResponse(
        statement=statement,
        truth_score=score,
        explanation=explanation,
        sources=sources or [],
    )


@pytest.mark.asyncio
async def test_save_assigns_sequential_ids():
    repository = InMemoryStatementRepository()

    first = await repository.save_verification(make_response("The Eiffel Tower is located in Paris."))
    second = await repository.save_verification(make_response("The sky is green.", score=2))

    assert (first, second) == (1, 2)


@pytest.mark.asyncio
async def test_get_returns_stored_statement():
    """Test that statements and their sources are stored together."""
    repository = InMemoryStatementRepository()
    response = make_response(
        "The Eiffel Tower is located in Paris.",
        sources=[
            SourceInfo(name="Eiffel Tower", year="2024", excerpt="In Paris.", url="https://example.org/eiffel"),
            SourceInfo(name="Paris", excerpt="Capital of France."),
        ],
    )

    statement_id = await repository.save_verification(response, context="Travel brochure")
    stored = await repository.get(statement_id)

    assert stored.text == response.statement
    assert stored.context == "Travel brochure"
    assert stored.truth_score == 8
    assert [source.statement_id for source in stored.sources] == [statement_id, statement_id]
    assert [source.id for source in stored.sources] == [1, 2]
    assert stored.to_verification_response().sources == response.sources


@pytest.mark.asyncio
async def test_get_missing_statement():
    assert await InMemoryStatementRepository().get(404) is None


@pytest.mark.asyncio
async def test_list_all_is_newest_first():
    repository = InMemoryStatementRepository()
    for text in ("First statement.", "Second statement.", "Third statement."):
        await repository.save_verification(make_response(text))

    statements = await repository.list_all()

    assert [statement.text for statement in statements] == [
        "Third statement.",
        "Second statement.",
        "First statement.",
    ]


@pytest.mark.asyncio
async def test_search_matches_text_context_and_explanation():
    """Test case-insensitive substring search."""
    repository = InMemoryStatementRepository()
    await repository.save_verification(make_response("Paris hosts the Olympics."))
    await repository.save_verification(make_response("The match was postponed.", explanation="Rain in PARIS."))
    await repository.save_verification(make_response("Bread prices rose."), context="Report from Paris")
    await repository.save_verification(make_response("Oslo is cold in winter."))

    matches = await repository.search("paris")

    assert [statement.id for statement in matches] == [3, 2, 1]
    assert await repository.search("tokyo") == []


@pytest.mark.asyncio
async def test_start_id():
    repository = InMemoryStatementRepository(start_id=100)
    assert await repository.save_verification(make_response("Numbered from one hundred.")) == 100
