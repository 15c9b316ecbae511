"""Sentence-level relevance and contradiction scoring against reference extracts."""

import math
import re
from typing import Iterable, List, Optional

from ..models.analysis import Document, Fact, ScoringSignals
from .query_extractor import build_search_term, extract_named_entities

MIN_SENTENCE_LENGTH = 10
SUPPORT_TERM_MATCH_THRESHOLD = 70
CONTEXTUAL_MATCH_RATIO = 0.75

STATEMENT_NUMBER_PATTERN = re.compile(
    r"\b\d+(?:\.\d+)?(?:\s+(?:percent|million|billion|trillion))?\b",
    re.IGNORECASE,
)
STATEMENT_NEGATION = re.compile(r"\b(?:not|never|false)\b|n't", re.IGNORECASE)
SENTENCE_NEGATION = re.compile(r"\b(?:not|never|false|incorrect|inaccurate)\b|n't", re.IGNORECASE)

STATEMENT_RECENCY = re.compile(
    r"\b(?:just|recent|recently|latest|new|today|yesterday|this week|this month|this year|breaking)\b",
    re.IGNORECASE,
)
SENTENCE_RECENCY = re.compile(
    r"\b(?:recent|recently|latest|new|current|today|yesterday|this week|this month|this year)\b",
    re.IGNORECASE,
)

# (statement phrase, contradicting phrase). A reference that contains the
# statement with the phrase swapped is taken as a direct denial.
CONTRADICTION_REWRITES = [
    (" claims ", " denies "),
    (" says ", " denies "),
    (" reports ", " denies "),
    (" states ", " denies "),
    (" announced ", " denied "),
    (" shows ", " doesn't show "),
    (" is ", " is not "),
    (" are ", " are not "),
    (" was ", " was not "),
    (" were ", " were not "),
    (" will ", " will not "),
    (" has ", " has not "),
    (" have ", " have not "),
    (" can ", " cannot "),
]

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
_EXCERPT_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_TRAILING_PUNCTUATION = re.compile(r"[.!?]+$")
_WORD = re.compile(r"\w+")


def is_negated(text: str, pattern: re.Pattern = SENTENCE_NEGATION) -> bool:
    return bool(pattern.search(text))


def core_statement(statement: str) -> str:
    """Lowercased statement without its terminal punctuation."""
    return _TRAILING_PUNCTUATION.sub("", statement.strip().lower()).strip()


def split_sentences(text: str) -> List[str]:
    """Split text on terminal punctuation, dropping fragments under ten characters."""
    sentences = (sentence.strip() for sentence in _SENTENCE_BOUNDARY.split(text))
    return [sentence for sentence in sentences if len(sentence) >= MIN_SENTENCE_LENGTH]


def term_match_percentage(terms: List[str], documents: Iterable[Document]) -> float:
    """Share of query terms found in at least one extract, as a percentage."""
    if not terms:
        return 0.0
    extracts = [document.extract.lower() for document in documents]
    matched = sum(1 for term in terms if any(term.lower() in extract for extract in extracts))
    return matched / len(terms) * 100


def _contradicts_by_rewrite(core: str, extract: str) -> bool:
    for phrase, replacement in CONTRADICTION_REWRITES:
        if phrase in core and core.replace(phrase, replacement, 1) in extract:
            return True
    return False


def score(
    statement: str,
    documents: List[Document],
    query_terms: Optional[List[str]] = None,
) -> ScoringSignals:
    """Compare a statement against reference documents.

    Every relevant sentence (sharing a query term, named entity or number with
    the statement) becomes a fact. A sentence whose negation differs from the
    statement's is a potential contradiction; one that contains the statement,
    or all of its content words, is support.

    Args:
        statement: Normalized statement
        documents: Reference documents with extracts
        query_terms: Query terms to match; derived from the statement if omitted

    Returns:
        Evidence signals and the facts they were drawn from
    """
    if query_terms is None:
        query_terms = [term for term in build_search_term(statement).split(" ") if term]

    core = core_statement(statement)
    content_words = [word for word in _WORD.findall(core) if len(word) > 3]
    statement_negated = is_negated(core, STATEMENT_NEGATION)
    wants_recency = bool(STATEMENT_RECENCY.search(statement))

    named_entities = extract_named_entities(statement)
    entities = [entity.lower() for entity in named_entities]
    numbers = STATEMENT_NUMBER_PATTERN.findall(statement)
    numbers_lower = [number.lower() for number in numbers]
    terms_lower = [term.lower() for term in query_terms]

    signals = ScoringSignals(
        term_match_percentage=term_match_percentage(query_terms, documents),
        named_entities=named_entities,
        numbers=numbers,
        document_count=len(documents),
    )

    for document in documents:
        extract = document.extract.lower()
        entity_matches = [entity for entity in entities if entity in extract]
        number_matches = [number for number in numbers_lower if number in extract]

        for sentence in split_sentences(extract):
            relevant = (
                any(term in sentence for term in terms_lower)
                or any(entity in sentence for entity in entities)
                or any(number in sentence for number in numbers_lower)
            )
            if not relevant:
                continue

            contradiction = is_negated(sentence) != statement_negated
            signals.facts.append(
                Fact(text=sentence, is_contradiction=contradiction, source=document.title)
            )

            if contradiction:
                signals.contains_contradiction = True
            elif core and (core in sentence or all(word in sentence for word in content_words)):
                signals.contains_support = True

            if wants_recency and SENTENCE_RECENCY.search(sentence):
                signals.recency_match = True

        if core and _contradicts_by_rewrite(core, extract):
            signals.contains_contradiction = True

        verbatim = bool(core) and core in extract
        if verbatim or (
            signals.term_match_percentage > SUPPORT_TERM_MATCH_THRESHOLD
            and entity_matches
            and number_matches
        ):
            signals.contains_support = True

        has_claims = bool(entities or numbers_lower)
        if verbatim or (
            has_claims
            and len(entity_matches) >= math.ceil(len(entities) * CONTEXTUAL_MATCH_RATIO)
            and len(number_matches) >= math.ceil(len(numbers_lower) * CONTEXTUAL_MATCH_RATIO)
        ):
            signals.contextual_match = True

    return signals


def find_relevant_excerpt(extract: str, statement: str, search_term: str) -> str:
    """Pick the sentences of an extract that best match the statement.

    Short extracts are returned whole. Otherwise sentences score one point per
    shared keyword and two per named entity; the best three are joined.
    """
    if len(extract) < 200:
        return extract

    keywords = dict.fromkeys(
        word
        for text in (statement, search_term)
        for word in re.split(r"\W+", text.lower())
        if len(word) > 3
    )
    entities = [entity.lower() for entity in extract_named_entities(statement)]

    scored = []
    for sentence in _EXCERPT_BOUNDARY.split(extract):
        lowered = sentence.lower()
        points = sum(1 for keyword in keywords if keyword in lowered)
        points += sum(2 for entity in entities if entity in lowered)
        scored.append((points, sentence))

    scored.sort(key=lambda item: item[0], reverse=True)
    relevant = [sentence for points, sentence in scored[:3] if points > 0]
    if not relevant:
        return extract[:200] + "..."

    excerpt = " ".join(relevant)
    if len(excerpt) > 300:
        return excerpt[:300] + "..."
    if len(excerpt) < len(extract):
        excerpt += "..."
    return excerpt
