"""Intermediate records passed between the verification pipeline stages."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Document:
    """A reference document with its introductory extract."""

    id: int
    title: str
    extract: str


@dataclass(frozen=True)
class Fact:
    """A relevant sentence found in a reference document."""

    text: str
    is_contradiction: bool
    source: str


@dataclass
class QuerySet:
    """Primary search query plus alternative framings of it."""

    primary: str
    variants: List[str] = field(default_factory=list)


@dataclass
class ScoringSignals:
    """Evidence signals gathered by comparing a statement with documents."""

    facts: List[Fact] = field(default_factory=list)
    contains_support: bool = False
    contains_contradiction: bool = False
    contextual_match: bool = False
    recency_match: bool = False
    term_match_percentage: float = 0.0
    named_entities: List[str] = field(default_factory=list)
    numbers: List[str] = field(default_factory=list)
    document_count: int = 0

    def __post_init__(self):
        if not 0 <= self.term_match_percentage <= 100:
            raise ValueError("Term match percentage must be between 0 and 100")


@dataclass(frozen=True)
class AggregateResult:
    """Final score with its explanation and report."""

    score: int
    explanation: str
    detailed_analysis: str
