"""Turns evidence signals into a truth score, explanation and report."""

import re

from ..models.analysis import AggregateResult, ScoringSignals

MAX_REPORTED_FACTS = 10

BOLD_CLAIM_PATTERN = re.compile(
    r"\b(?:breaking|exclusive|shocking|unprecedented|all|every|always|never|most|best|worst|first|only)\b",
    re.IGNORECASE,
)
EMOTIONAL_PATTERN = re.compile(
    r"\b(?:devastating|remarkable|amazing|incredible|terrible|horrific|catastrophic|miracle|"
    r"disaster|tragic|outrage)\b",
    re.IGNORECASE,
)
HEDGING_PATTERN = re.compile(
    r"\b(?:may|might|could|reportedly|allegedly|according to|claims|suggests|possibly|potentially)\b",
    re.IGNORECASE,
)

SENSATIONALISM_CAVEAT = " However, the claim contains potentially sensationalistic language."
HEDGING_NOTE = (
    " The claim contains qualifying language (like 'reportedly' or 'allegedly') "
    "which acknowledges uncertainty."
)


def is_sensational(statement: str) -> bool:
    return bool(BOLD_CLAIM_PATTERN.search(statement) or EMOTIONAL_PATTERN.search(statement))


def is_hedged(statement: str) -> bool:
    return bool(HEDGING_PATTERN.search(statement))


def clamp_score(score: int) -> int:
    return max(0, min(10, score))


def aggregate(statement: str, signals: ScoringSignals) -> AggregateResult:
    """Score a statement from its evidence signals.

    Rules are evaluated in order and the first match wins: contradiction
    without support, support without contradiction, conflicting evidence,
    contextual match with recency, contextual match alone, then term match
    above 50% and 30%. Hedged claims scoring below 7 gain a point.

    Args:
        statement: Normalized statement
        signals: Output of the relevance scorer

    Returns:
        Score in [0, 10] with its explanation and detailed analysis
    """
    support = signals.contains_support
    contradiction = signals.contains_contradiction
    sensational = is_sensational(statement)
    hedged = is_hedged(statement)

    if contradiction and not support:
        score = 2
        explanation = "Information found in reliable sources contradicts this news claim."
    elif support and not contradiction:
        score = 8
        explanation = "Information found in reliable sources supports this news claim."
        if sensational:
            score -= 1
            explanation += SENSATIONALISM_CAVEAT
    elif support and contradiction:
        score = 5
        explanation = (
            "We found conflicting information - some sources support this news claim "
            "while others contradict it."
        )
    elif signals.contextual_match and signals.recency_match:
        score = 7
        explanation = (
            "This news claim appears to be contextually accurate based on reliable sources, "
            "including recent information."
        )
    elif signals.contextual_match:
        score = 6
        explanation = "This news claim appears to be contextually accurate based on reliable sources."
    elif signals.term_match_percentage > 50:
        score = 6
        explanation = (
            "Some elements of this news claim appear to be accurate, but more information "
            "is needed for full verification."
        )
    elif signals.term_match_percentage > 30:
        score = 5
        explanation = "We found some related information, but cannot fully verify this news claim."
    else:
        score = 4
        explanation = (
            "We found limited information related to this news claim. "
            "Its accuracy cannot be determined."
        )

    if hedged and score < 7:
        score += 1
        explanation += HEDGING_NOTE

    return AggregateResult(
        score=clamp_score(score),
        explanation=explanation,
        detailed_analysis=build_detailed_analysis(signals, sensational, hedged),
    )


def build_detailed_analysis(signals: ScoringSignals, sensational: bool, hedged: bool) -> str:
    """Render the human-readable verification report."""
    facts = signals.facts[:MAX_REPORTED_FACTS]

    lines = [
        "News Verification Analysis:",
        "",
        f"Term match percentage: {signals.term_match_percentage:.1f}%",
        f"Number of sources examined: {signals.document_count}",
        "✓ Found supporting information" if signals.contains_support
        else "✗ No strong supporting information found",
        "✓ Found potentially contradicting information" if signals.contains_contradiction
        else "✗ No direct contradictions found",
        "✓ Found contextual match in reliable sources" if signals.contextual_match
        else "✗ No direct contextual match",
    ]
    if signals.recency_match:
        lines.append("✓ Found recent information that matches claim timing")
    if sensational:
        lines.append("⚠️ Claim may contain sensationalistic language")
    if hedged:
        lines.append("ℹ️ Claim contains cautious/hedged language")

    lines += [
        "",
        f"Key entities examined: {', '.join(signals.named_entities) or 'None identified'}",
        f"Numerical claims: {', '.join(signals.numbers)}" if signals.numbers
        else "No numerical claims identified",
        "",
        f"Relevant facts found ({len(facts)}):",
    ]
    for index, fact in enumerate(facts, 1):
        marker = "⚠️ " if fact.is_contradiction else ""
        text = fact.text[:1].upper() + fact.text[1:]
        lines.append(f"{index}. {marker}{text} (Source: {fact.source})")

    lines += [
        "",
        "This analysis is based on current Wikipedia content, which is generally reliable but "
        "can change over time. For definitive fact-checking of news, consider consulting "
        "multiple specialized fact-checking organizations.",
    ]
    return "\n".join(lines)
