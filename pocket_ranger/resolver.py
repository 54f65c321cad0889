"""Adventure resolver: maps free text to exactly one corpus record.

Strategies run in a fixed order and the first one that produces a record
wins:

    1. hint          caller-supplied key that exists in the corpus
    2. priority      PRIORITY_RULES literal triggers
    3. sample-query  >= OVERLAP_THRESHOLD words shared with a sample query
    4. field         city / activity / name substring match, corpus order
    5. default       the corpus default record

Inputs routinely satisfy several strategies at once, so the order is part of
the contract. Once the input passes validation the chain always ends in a
record; there is no "not found".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from pocket_ranger.corpus import Corpus, key_from_filename
from pocket_ranger.models import AdventureRecord

logger = logging.getLogger(__name__)

Strategy = Literal["hint", "priority", "sample-query", "field", "default"]

# Heuristic, kept tunable. Words are compared by substring in either
# direction, so "lake" and "lakes" count as shared.
OVERLAP_THRESHOLD = 2


class InvalidInput(ValueError):
    """Raised for non-string, empty or whitespace-only input."""


@dataclass(frozen=True)
class PriorityRule:
    """Literal override: any trigger substring in the input selects ``key``."""

    triggers: tuple[str, ...]
    key: str

    def matches(self, text: str) -> bool:
        return any(trigger in text for trigger in self.triggers)


# Keyword scoring alone sends "utah" requests elsewhere when a longer
# keyword from another record also appears in the text.
PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule(triggers=("utah", "moab"), key="moab-utah"),
)


@dataclass(frozen=True)
class Resolution:
    record: AdventureRecord
    strategy: Strategy


def validate_input(raw_input: object) -> str:
    """Return ``raw_input`` unchanged if it is a non-blank string."""
    if not isinstance(raw_input, str):
        raise InvalidInput(f"Expected a string, got {type(raw_input).__name__}")
    if not raw_input.strip():
        raise InvalidInput("Input is empty")
    return raw_input


# ---------------------------------------------------------------------------
# Individual strategies. Each takes the lower-cased input.
# ---------------------------------------------------------------------------

def count_overlap(query: str, text: str) -> int:
    """Count words of ``query`` that share a substring relation with a word of ``text``."""
    text_words = text.lower().split()
    return sum(
        1
        for word in query.lower().split()
        if any(tw in word or word in tw for tw in text_words)
    )


def match_priority(
    text: str, corpus: Corpus, rules: tuple[PriorityRule, ...] = PRIORITY_RULES
) -> AdventureRecord | None:
    for rule in rules:
        if rule.matches(text):
            record = corpus.get(rule.key)
            if record is not None:
                return record
            logger.warning("Priority rule %r targets missing adventure %r", rule.triggers, rule.key)
    return None


def match_sample_query(
    text: str, corpus: Corpus, threshold: int = OVERLAP_THRESHOLD
) -> AdventureRecord | None:
    """First sample query (index order) sharing at least ``threshold`` words."""
    for sample in corpus.sample_queries:
        if count_overlap(sample.query, text) >= threshold:
            return corpus.get(sample.adventure_key)
    return None


def _field_match(record: AdventureRecord, text: str) -> bool:
    city = record.city_name
    if city and city in text:
        return True
    if record.activity in text:
        return True
    name = record.name.lower()
    name_words = name.split()
    first_word = name_words[0] if name_words else ""
    return name in text or text in first_word


def match_fields(text: str, corpus: Corpus) -> AdventureRecord | None:
    """First record in corpus order whose city, activity or name appears in ``text``."""
    for record in corpus:
        if _field_match(record, text):
            return record
    return None


# ---------------------------------------------------------------------------
# Strategy chain
# ---------------------------------------------------------------------------

def resolve_with_strategy(
    corpus: Corpus,
    raw_input: object,
    hinted_key: object = None,
    rules: tuple[PriorityRule, ...] = PRIORITY_RULES,
) -> Resolution:
    """Run the strategy chain and report which strategy produced the record."""
    text = validate_input(raw_input).lower()

    if hinted_key is not None:
        record = corpus.get(key_from_filename(hinted_key)) if isinstance(hinted_key, str) else None
        if record is not None:
            return _chosen(record, "hint", raw_input)
        logger.info("Ignoring unknown hint %r", hinted_key)

    record = match_priority(text, corpus, rules)
    if record is not None:
        return _chosen(record, "priority", raw_input)

    record = match_sample_query(text, corpus)
    if record is not None:
        return _chosen(record, "sample-query", raw_input)

    record = match_fields(text, corpus)
    if record is not None:
        return _chosen(record, "field", raw_input)

    return _chosen(corpus.default, "default", raw_input)


def resolve(
    corpus: Corpus,
    raw_input: object,
    hinted_key: object = None,
    rules: tuple[PriorityRule, ...] = PRIORITY_RULES,
) -> AdventureRecord:
    """Select exactly one adventure for ``raw_input``.

    Raises InvalidInput before any matching if the input is not a non-blank
    string. Never returns None.
    """
    return resolve_with_strategy(corpus, raw_input, hinted_key, rules).record


def _chosen(record: AdventureRecord, strategy: Strategy, raw_input: object) -> Resolution:
    logger.debug("resolved %r -> %s via %s", raw_input, record.key, strategy)
    return Resolution(record=record, strategy=strategy)
