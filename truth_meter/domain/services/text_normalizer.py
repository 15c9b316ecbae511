"""Statement preprocessing: typo repair and formatting normalization."""

import re
from typing import List, Tuple

# Applied in order, all case-insensitive.
TYPO_SUBSTITUTIONS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"\b(\w+)wih\b", re.IGNORECASE), r"\1with"),
    (re.compile(r"\b(\w+)teh\b", re.IGNORECASE), r"\1the"),
    (re.compile(r"\bthier\b", re.IGNORECASE), "their"),
    (re.compile(r"\brecieved\b", re.IGNORECASE), "received"),
    (re.compile(r"\bgovt\b", re.IGNORECASE), "government"),
    (re.compile(r"\bpres\b", re.IGNORECASE), "president"),
    (re.compile(r"\b(\w+)didnt\b", re.IGNORECASE), r"\1 didn't"),
    (re.compile(r"\b(\w+)wont\b", re.IGNORECASE), r"\1 won't"),
    # Restricted to pronouns so "significant" or "applicant" are left alone.
    (re.compile(r"\b(i|you|we|they|he|she|it|who|that)cant\b", re.IGNORECASE), r"\1 can't"),
    (re.compile(r"\bdidnt\b", re.IGNORECASE), "didn't"),
    (re.compile(r"\bwont\b", re.IGNORECASE), "won't"),
    (re.compile(r"\bcant\b", re.IGNORECASE), "can't"),
    (re.compile(r"\bhasnt\b", re.IGNORECASE), "hasn't"),
]

_WHITESPACE = re.compile(r"\s+")
_ALL_CAPS_WORD = re.compile(r"\b[A-Z]{2,}\b")
_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")


def fix_typos(text: str) -> str:
    """Repair known misspellings, abbreviations and missing apostrophes."""
    for pattern, replacement in TYPO_SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text


def normalize(raw: str) -> str:
    """Normalize a raw statement for downstream processing.

    Fixes typos, collapses whitespace, capitalizes the first letter,
    lower-cases shouted words ("NATO" -> "Nato") and terminates the
    sentence with a period when it has no terminal punctuation.

    Args:
        raw: Statement as typed by the user

    Returns:
        Normalized statement, or an empty string for blank input
    """
    processed = fix_typos(raw or "")
    processed = _WHITESPACE.sub(" ", processed).strip()
    if not processed:
        return ""

    processed = processed[0].upper() + processed[1:]
    processed = _ALL_CAPS_WORD.sub(lambda m: m.group(0)[0] + m.group(0)[1:].lower(), processed)

    if not _TERMINAL_PUNCTUATION.search(processed):
        processed += "."
    return processed
