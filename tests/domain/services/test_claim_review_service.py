"""Tests for verification backed by published fact checks."""

from typing import List

import pytest

from truth_meter.domain.models.verification import TruthRating
from truth_meter.domain.ports.claim_review_provider import ClaimReview, ReviewedClaim, ReviewRating
from truth_meter.domain.services.claim_review_service import (
    ERROR_EXPLANATION,
    NO_REVIEWS_EXPLANATION,
    ClaimReviewService,
    rating_to_score,
    review_score,
)


class FakeClaimReviewProvider:
    """Claim review provider returning fixed claims."""

    def __init__(self, claims: List[ReviewedClaim] = None, error: Exception = None):
        self.claims = claims or []
        self.error = error
        self.queries: List[str] = []

    async def initialize(self) -> None:
        pass

    async def search_claims(self, query: str) -> List[ReviewedClaim]:
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.claims

    async def shutdown(self) -> None:
        pass

    @property
    def provider_name(self) -> str:
        return "Fake Fact Check"

    @property
    def is_available(self) -> bool:
        return True


@pytest.mark.parametrize(
    "textual_rating,expected",
    [
        ("True", 10),
        ("Mostly True", 8),
        ("Correct", 8),
        ("Mixture", 5),
        ("Mostly False", 3),
        ("False", 1),
        ("Pants on Fire", 1),
        ("Misleading", 4),
        ("Unproven", 5),
    ],
)
def test_rating_to_score(textual_rating, expected):
    assert rating_to_score(textual_rating) == expected


def test_numeric_review_score():
    """Test normalization of numeric ratings onto the 0-10 scale."""
    review = ClaimReview(review_rating=ReviewRating(rating_value=4, best_rating=5, worst_rating=1))
    assert review_score(review) == 7.5

    flat = ClaimReview(review_rating=ReviewRating(rating_value=3, best_rating=3, worst_rating=3))
    assert review_score(flat) == 5

    assert review_score(ClaimReview()) == 5


@pytest.mark.asyncio
async def test_reviews_are_averaged():
    """Test scoring, sources and report for a reviewed claim."""
    claim = ReviewedClaim(
        text="The moon landing was staged.",
        claimant="Viral post",
        claim_date="2023-03-30T00:00:00Z",
        reviews=[
            ClaimReview(
                publisher_name="PolitiFact",
                url="https://politifact.example/moon",
                title="No, the moon landing was not staged",
                review_date="2023-04-01T00:00:00Z",
                textual_rating="False",
            ),
            ClaimReview(
                publisher_name="",
                url="https://checker.example/moon",
                textual_rating="Mostly False",
            ),
        ],
    )
    provider = FakeClaimReviewProvider([claim])
    service = ClaimReviewService(provider)

    result = await service.verify("the moon landing was staged")

    assert provider.queries == ["The moon landing was staged."]
    assert result.truth_score == 2
    assert result.truth_rating is TruthRating.FALSE
    assert result.explanation == "Based on 2 fact checks, this statement has been rated False."

    first, second = result.sources
    assert first.name == "PolitiFact"
    assert first.year == "2023"
    assert first.excerpt == "No, the moon landing was not staged"
    assert first.url == "https://politifact.example/moon"
    assert second.name == "Fact Checker 2"
    assert second.excerpt == "Fact check available at this source."

    assert 'PolitiFact rated this claim as "False" on 2023-04-01.' in result.detailed_analysis
    assert "The claim was originally made by Viral post." in result.detailed_analysis
    assert "The claim was made on 2023-03-30." in result.detailed_analysis


@pytest.mark.asyncio
async def test_average_rounds_half_up():
    claim = ReviewedClaim(
        text="Half and half.",
        reviews=[
            ClaimReview(publisher_name="A", textual_rating="Mostly True"),
            ClaimReview(publisher_name="B", textual_rating="False"),
        ],
    )
    result = await ClaimReviewService(FakeClaimReviewProvider([claim])).verify("Half and half.")

    assert result.truth_score == 5


@pytest.mark.asyncio
async def test_no_claims_gives_neutral_result():
    result = await ClaimReviewService(FakeClaimReviewProvider([])).verify("Nobody has checked this.")

    assert result.truth_score == 5
    assert result.explanation == NO_REVIEWS_EXPLANATION
    assert result.sources == []


@pytest.mark.asyncio
async def test_provider_error_gives_neutral_result():
    provider = FakeClaimReviewProvider(error=ConnectionError("offline"))
    result = await ClaimReviewService(provider).verify("The API is down.")

    assert result.truth_score == 5
    assert result.explanation == ERROR_EXPLANATION
    assert result.sources == []
