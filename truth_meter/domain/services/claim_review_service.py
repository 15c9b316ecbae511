"""Verification backed by published fact-check reviews."""

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from ..models.verification import SourceInfo, VerificationResponse, get_truth_rating
from ..ports.claim_review_provider import ClaimReview, ClaimReviewProvider, ReviewedClaim
from .text_normalizer import normalize

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 5
NO_REVIEWS_EXPLANATION = (
    "No fact checks found for this statement. "
    "We cannot verify its accuracy without more information."
)
ERROR_EXPLANATION = "We encountered an error while fact-checking this statement. Please try again later."


def rating_to_score(textual_rating: str) -> int:
    """Map a publisher's textual rating onto the 0-10 scale."""
    rating = textual_rating.lower()

    if "true" in rating and "mostly" not in rating and "partly" not in rating:
        return 10
    elif "mostly true" in rating or "accurate" in rating or "correct" in rating:
        return 8
    elif "partly true" in rating or "mixture" in rating or "mixed" in rating:
        return 5
    elif "mostly false" in rating:
        return 3
    elif any(word in rating for word in ("false", "fake", "hoax", "pants on fire")):
        return 1
    elif "misleading" in rating:
        return 4
    else:
        # unproven, unverified and anything unrecognised
        return 5


def review_score(review: ClaimReview) -> float:
    """Score a single review from its textual or numeric rating."""
    if review.textual_rating:
        return rating_to_score(review.textual_rating)

    rating = review.review_rating
    if rating is not None and rating.rating_value is not None:
        best = rating.best_rating or 5
        worst = rating.worst_rating or 1
        spread = best - worst
        if spread == 0:
            return 5
        return (rating.rating_value - worst) / spread * 10

    return 5


def _review_year(review: ClaimReview) -> str:
    if review.review_date:
        try:
            return str(datetime.fromisoformat(review.review_date.replace("Z", "+00:00")).year)
        except ValueError:
            logger.debug(f"Unparseable review date: {review.review_date!r}")
    return str(datetime.now(timezone.utc).year)


def _review_date_label(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


class ClaimReviewService:
    """Scores statements by averaging the ratings of published fact checks."""

    def __init__(self, provider: ClaimReviewProvider):
        self._provider = provider
        logger.info("🔧 ClaimReviewService initialized")

    async def verify(self, text: str, context: Optional[str] = None) -> VerificationResponse:
        """Verify a statement against the first matching reviewed claim.

        Args:
            text: Statement to verify
            context: Optional free-text context, not used for scoring

        Returns:
            Verification response; failures degrade to a neutral score of 5
        """
        statement = text
        try:
            statement = normalize(text)
            claims = await self._provider.search_claims(statement)
            if not claims or not claims[0].reviews:
                return self._neutral(statement, NO_REVIEWS_EXPLANATION)

            claim = claims[0]
            scores = [review_score(review) for review in claim.reviews]
            average = int(Decimal(str(sum(scores) / len(scores))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
            average = max(0, min(10, average))

            logger.info(f"✅ Found {len(claim.reviews)} fact checks, average score {average}/10")
            return VerificationResponse(
                statement=statement,
                truth_score=average,
                explanation=(
                    f"Based on {len(claim.reviews)} fact checks, this statement has been rated "
                    f"{get_truth_rating(average).value}."
                ),
                detailed_analysis=self._detailed_analysis(claim),
                sources=self._build_sources(claim.reviews),
            )
        except Exception as e:
            logger.error(f"❌ Fact check lookup failed: {type(e).__name__}: {e}", exc_info=True)
            return self._neutral(statement, ERROR_EXPLANATION)

    @staticmethod
    def _build_sources(reviews: List[ClaimReview]) -> List[SourceInfo]:
        return [
            SourceInfo(
                name=review.publisher_name or f"Fact Checker {index}",
                year=_review_year(review),
                excerpt=review.title or "Fact check available at this source.",
                url=review.url,
            )
            for index, review in enumerate(reviews, 1)
        ]

    @staticmethod
    def _detailed_analysis(claim: ReviewedClaim) -> str:
        details = []
        for review in claim.reviews:
            line = f'{review.publisher_name} rated this claim as "{review.textual_rating or "Unrated"}"'
            if review.review_date:
                line += f" on {_review_date_label(review.review_date)}"
            details.append(line + ".")

        sections = [
            "Multiple fact-checking organizations have reviewed this claim:",
            "\n\n".join(details),
        ]
        if claim.claimant:
            sections.append(f"The claim was originally made by {claim.claimant}.")
        if claim.claim_date:
            sections.append(f"The claim was made on {_review_date_label(claim.claim_date)}.")
        sections.append("See the sources below for more detailed information about this fact check.")
        return "\n\n".join(sections)

    @staticmethod
    def _neutral(statement: str, explanation: str) -> VerificationResponse:
        return VerificationResponse(
            statement=statement,
            truth_score=NEUTRAL_SCORE,
            explanation=explanation,
            sources=[],
        )
