"""Search query generation for news statements.

The primary query favours proper nouns, places, organizations and
news-salient keywords; variant queries widen coverage with negated,
debunk-framed and entity-focused phrasings so contradicting references
are retrieved as well as supporting ones.
"""

import logging
import re
from typing import Dict, List, Optional

from ..models.analysis import QuerySet

logger = logging.getLogger(__name__)

MAX_QUERY_TERMS = 8
MAX_VARIANT_QUERIES = 8

ENTITY_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+(?:[A-Z][a-z]+|\b(?:of|the|and|in|on|at)\b))*\b")
NAMED_ENTITY_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")

LOCATION_PATTERN = re.compile(
    r"\b(?:America|Russia|China|Europe|Israel|Palestine|Gaza|Ukraine|Africa|Asia|Australia|"
    r"Canada|Mexico|Brazil|India|Japan|Korea|France|Germany|Italy|Spain|UK|United Kingdom|"
    r"United States|USA|US|EU|Middle East|North|South|East|West)\b",
    re.IGNORECASE,
)

ORGANIZATION_PATTERN = re.compile(
    r"\b(?:UN|NATO|WHO|FBI|CIA|NSA|Google|Microsoft|Apple|Amazon|Tesla|Facebook|Twitter|Hamas|"
    r"Congress|Senate|House|Pentagon|White House|Government|Police|Military|Army|Navy|"
    r"Air Force|Republicans|Democrats|GOP)\b",
    re.IGNORECASE,
)

DATE_PATTERNS = [
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
    re.compile(r"\b(?:19[0-9]{2}|20[0-9]{2})\b"),
    re.compile(
        r"\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
        r"Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
        r"\s+\d{1,2}(?:st|nd|rd|th)?,?\s+\d{4}\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:yesterday|today|last week|last month|last year|this week|this month|this year)\b",
        re.IGNORECASE,
    ),
]

NUMBER_PATTERN = re.compile(
    r"\b\d+(?:\.\d+)?(?:\s+(?:percent|million|billion|trillion|people|deaths|cases))?\b",
    re.IGNORECASE,
)
YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")

STOPWORDS = frozenset({
    "the", "and", "that", "this", "with", "from", "will", "have", "has", "had",
    "would", "could", "should", "says", "said", "claims", "reported", "for", "are", "is",
    "was", "were", "been", "being", "they", "them", "their", "there", "here", "when",
    "where", "why", "how", "all", "any", "both", "each", "few", "more", "most", "some",
    "such", "than", "too", "very", "can", "cant", "cannot", "not", "only", "own",
})

NEWS_KEYWORDS = frozenset({
    "war", "peace", "attack", "killed", "died", "crisis", "election", "vote", "pandemic",
    "vaccine", "conflict", "protest", "economy", "inflation", "climate", "disaster",
    "shooting", "legislation", "bill", "law", "court", "ruling", "decision", "agreement",
    "deal", "treaty", "scandal", "investigation", "announced", "launched", "accused",
    "charged", "arrested", "convicted", "sentenced", "released", "banned", "approved",
    "rejected", "resigned", "fired", "appointed", "elected", "defeated", "won", "lost",
})

# Words that pair with a location to form a focused news query.
LOCATION_NEWS_WORDS = ["war", "conflict", "crisis", "attack", "elections", "government"]

FACT_CHECK_PREFIXES = ["fact check", "debunked", "misinformation", "disinformation"]
NEGATION_PREFIXES = ["not", "debunked", "false claim", "incorrect"]

_VARIANT_STOPWORDS = frozenset({"and", "that", "this", "with", "from", "will", "have", "has", "had"})
_NON_WORD = re.compile(r"[^\w\s-]")


def extract_entities(text: str) -> List[str]:
    """Capitalized multi-word spans, optionally joined by connector words."""
    return ENTITY_PATTERN.findall(text)


def extract_named_entities(text: str) -> List[str]:
    """Runs of capitalized words without connectors."""
    return NAMED_ENTITY_PATTERN.findall(text)


def extract_locations(text: str) -> List[str]:
    return LOCATION_PATTERN.findall(text)


def extract_organizations(text: str) -> List[str]:
    return ORGANIZATION_PATTERN.findall(text)


def extract_dates(text: str) -> List[str]:
    """First match of each supported date format, in format order."""
    dates = []
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            dates.append(match.group(0))
    return dates


def extract_numbers(text: str) -> List[str]:
    """Standalone numbers, with a trailing unit word when present."""
    return NUMBER_PATTERN.findall(text)


def rank_keywords(text: str) -> List[str]:
    """Tokenize and order keywords, news-salient words first.

    Tokens of two characters or fewer and stopwords are dropped; the sort is
    stable so plain tokens keep their original order.
    """
    words = [
        word
        for word in _NON_WORD.sub("", text.lower()).split()
        if len(word) > 2 and word not in STOPWORDS
    ]
    return sorted(words, key=lambda word: word not in NEWS_KEYWORDS)


def _dedupe(terms: List[str], min_length: int = 2) -> List[str]:
    unique: Dict[str, None] = {}
    for term in terms:
        normalized = term.lower().strip() if term else ""
        if len(normalized) >= min_length:
            unique[normalized] = None
    return list(unique)


def build_search_term(statement: str) -> str:
    """Compose the ranked primary search query for a statement.

    Args:
        statement: Normalized statement

    Returns:
        Up to eight space-separated terms; empty when nothing usable remains
    """
    entities = extract_entities(statement)
    locations = extract_locations(statement)
    organizations = extract_organizations(statement)
    keywords = rank_keywords(statement)
    dates = extract_dates(statement)
    numbers = extract_numbers(statement)

    candidates = [
        *entities[:3],
        *locations[:2],
        *organizations[:2],
        *keywords[:6],
        *dates[:1],
        *numbers[:2],
    ]
    terms = _dedupe(candidates)

    if len(terms) > MAX_QUERY_TERMS:
        entity_set = {entity.lower() for entity in entities}
        location_set = {location.lower() for location in locations}
        organization_set = {organization.lower() for organization in organizations}
        number_set = {number.lower() for number in numbers}
        date_set = {date.lower() for date in dates}

        def weight(term: str) -> int:
            score = 1
            if term in entity_set:
                score += 3
            if term in location_set:
                score += 3
            if term in organization_set:
                score += 3
            if term in NEWS_KEYWORDS:
                score += 2
            if term in number_set:
                score += 2
            if term in date_set:
                score += 2
            return score

        terms = sorted(terms, key=weight, reverse=True)

    return " ".join(terms[:MAX_QUERY_TERMS])


def generate_variant_queries(search_term: str, statement: Optional[str] = None) -> List[str]:
    """Alternative framings of the primary query.

    Negated and debunk-framed queries pull in contradicting references;
    entity, location and year pairings widen topical coverage.

    Args:
        search_term: Primary query
        statement: Statement the query came from; its capitalization is used
            to find entities, since the query itself is lowercase

    Returns:
        At most eight unique lowercase queries, none equal to the primary
    """
    if not search_term.strip():
        return []

    queries = [f"{prefix} {search_term}" for prefix in NEGATION_PREFIXES]

    entities = extract_named_entities(statement or search_term)
    keywords = [
        word
        for word in search_term.lower().split(" ")
        if len(word) > 3 and word not in _VARIANT_STOPWORDS
    ]

    if len(keywords) > 2:
        queries.append(" ".join(keywords[:5]))

    top_entities = entities[:4]
    for entity in top_entities:
        queries.append(entity)
        if keywords:
            queries.append(f"{entity} {keywords[0]}")
    for i, first in enumerate(top_entities):
        for second in top_entities[i + 1:]:
            queries.append(f"{first} {second}")

    locations = extract_locations(search_term)
    lowered = search_term.lower()
    for location in locations:
        if location not in queries:
            queries.append(location)
        for word in LOCATION_NEWS_WORDS:
            if word in lowered:
                queries.append(f"{location} {word}")

    for year in YEAR_PATTERN.findall(search_term):
        if entities:
            queries.append(f"{entities[0]} {year}")
        if locations:
            queries.append(f"{locations[0]} {year}")

    words = search_term.split(" ")
    if len(words) > 3:
        lead = " ".join(words[:4])
        queries.extend(f"{prefix} {lead}" for prefix in FACT_CHECK_PREFIXES)

    unique: Dict[str, None] = {}
    for query in queries:
        normalized = query.strip().lower()
        if len(normalized) > 3 and normalized != lowered:
            unique[normalized] = None
    return list(unique)[:MAX_VARIANT_QUERIES]


def build_queries(statement: str) -> QuerySet:
    """Derive the primary query and its variants from a statement."""
    primary = build_search_term(statement)
    variants = generate_variant_queries(primary, statement)
    logger.debug(f"Built {len(variants)} variant queries for search term: {primary!r}")
    return QuerySet(primary=primary, variants=variants)
