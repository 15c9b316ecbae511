"""Tests for truth score aggregation."""

import pytest

from truth_meter.domain.models.analysis import Fact, ScoringSignals
from truth_meter.domain.services.score_aggregator import (
    HEDGING_NOTE,
    SENSATIONALISM_CAVEAT,
    aggregate,
    build_detailed_analysis,
    is_hedged,
    is_sensational,
)


def test_language_detection():
    """Test sensational and hedged language detection."""
    assert is_sensational("Breaking: markets crash.")
    assert is_sensational("A devastating storm hit the coast.")
    assert not is_sensational("The council met on Tuesday.")
    assert is_hedged("The minister allegedly resigned.")
    assert is_hedged("According to officials, the road is closed.")
    assert not is_hedged("The road is closed.")


def test_contradiction_without_support():
    result = aggregate("Rain fell in Oslo.", ScoringSignals(contains_contradiction=True))
    assert result.score == 2
    assert "contradicts" in result.explanation


def test_support_without_contradiction():
    result = aggregate("Rain fell in Oslo.", ScoringSignals(contains_support=True))
    assert result.score == 8
    assert result.explanation == "Information found in reliable sources supports this news claim."


def test_sensational_support_loses_a_point():
    result = aggregate("Breaking: the bridge opened.", ScoringSignals(contains_support=True))
    assert result.score == 7
    assert result.explanation.endswith(SENSATIONALISM_CAVEAT)


def test_conflicting_evidence():
    result = aggregate(
        "Rain fell in Oslo.",
        ScoringSignals(contains_support=True, contains_contradiction=True),
    )
    assert result.score == 5
    assert "conflicting information" in result.explanation


def test_contextual_match_with_recency():
    result = aggregate("Rain fell in Oslo.", ScoringSignals(contextual_match=True, recency_match=True))
    assert result.score == 7


def test_hedged_contextual_match_gains_a_point():
    """Test hedged claims scoring below seven."""
    result = aggregate(
        "Officials reportedly announced a new policy.",
        ScoringSignals(contextual_match=True),
    )
    assert result.score == 7
    assert result.explanation.endswith(HEDGING_NOTE)


def test_hedged_supported_claim_is_not_raised():
    result = aggregate("Officials reportedly confirmed the deal.", ScoringSignals(contains_support=True))
    assert result.score == 8
    assert HEDGING_NOTE not in result.explanation


def test_hedged_contradicted_claim():
    result = aggregate("The minister allegedly resigned.", ScoringSignals(contains_contradiction=True))
    assert result.score == 3


@pytest.mark.parametrize(
    "percentage,expected",
    [(80.0, 6), (51.0, 6), (50.0, 5), (31.0, 5), (30.0, 4), (0.0, 4)],
)
def test_term_match_fallbacks(percentage, expected):
    """Test scores when only term matches are available."""
    result = aggregate("Rain fell in Oslo.", ScoringSignals(term_match_percentage=percentage))
    assert result.score == expected


def test_detailed_analysis_report():
    """Test the rendered verification report."""
    facts = [
        Fact(text=f"sentence number {index} about oslo", is_contradiction=index == 0, source="Oslo")
        for index in range(12)
    ]
    signals = ScoringSignals(
        facts=facts,
        contains_support=True,
        contains_contradiction=True,
        term_match_percentage=75.0,
        named_entities=["Oslo"],
        numbers=["12"],
        document_count=3,
    )

    report = build_detailed_analysis(signals, sensational=False, hedged=True)
    lines = report.split("\n")

    assert lines[0] == "News Verification Analysis:"
    assert "Term match percentage: 75.0%" in lines
    assert "Number of sources examined: 3" in lines
    assert "✓ Found supporting information" in lines
    assert "✓ Found potentially contradicting information" in lines
    assert "✗ No direct contextual match" in lines
    assert "ℹ️ Claim contains cautious/hedged language" in lines
    assert "Key entities examined: Oslo" in lines
    assert "Numerical claims: 12" in lines
    assert "Relevant facts found (10):" in lines
    assert "1. ⚠️ Sentence number 0 about oslo (Source: Oslo)" in lines
    assert not any(line.startswith("11.") for line in lines)


def test_detailed_analysis_without_evidence():
    report = build_detailed_analysis(ScoringSignals(), sensational=True, hedged=False)

    assert "✗ No strong supporting information found" in report
    assert "✗ No direct contradictions found" in report
    assert "⚠️ Claim may contain sensationalistic language" in report
    assert "Key entities examined: None identified" in report
    assert "No numerical claims identified" in report
    assert "Relevant facts found (0):" in report
