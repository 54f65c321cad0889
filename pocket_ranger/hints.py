"""Keyword hint provider.

Turns a free-text request into a recommended adventure key plus structured
attributes (activity, location, features, timeframe). The key is advisory:
callers pass it to the resolver as ``hinted_key``, which only checks that it
exists in the corpus.

Selection order:
  1. priority rules on the user message (same table as the resolver)
  2. the LLM reply, if an LLM is configured and answers
  3. keyword fallback: location literals, then keyword-length scoring
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pocket_ranger.corpus import Corpus
from pocket_ranger.llm import LLM, LLMError
from pocket_ranger.models import ExtractedInfo, Hint
from pocket_ranger.prompts import PromptError, render_hint_system_prompt
from pocket_ranger.resolver import PRIORITY_RULES, PriorityRule, validate_input

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I'd love to help you plan your adventure! Let me search our adventure "
    "database for the perfect match for your request!"
)

# Checked in order on the user message before keyword scoring.
LOCATION_FALLBACKS: tuple[PriorityRule, ...] = (
    PriorityRule(triggers=("utah", "moab"), key="moab-utah"),
    PriorityRule(triggers=("colorado", "avon"), key="avon-colorado"),
    PriorityRule(triggers=("montana", "glacier"), key="glacier-montana"),
)

# Checked in order on the LLM reply when it names no file.
REPLY_LOCATIONS: tuple[PriorityRule, ...] = (
    PriorityRule(triggers=("moab", "utah"), key="moab-utah"),
    PriorityRule(triggers=("avon", "colorado"), key="avon-colorado"),
)

ACTIVITIES = ("hiking", "fishing", "camping", "climbing", "biking", "kayaking")

LOCATIONS = (
    "avon", "colorado", "moab", "utah", "glacier", "montana",
    "tahoe", "california", "sedona", "arizona", "asheville",
    "north carolina", "olympic", "washington", "acadia", "maine",
    "big sur", "smoky mountains", "tennessee",
    "madison", "milwaukee", "door county", "baraboo", "wisconsin",
)

# feature name → words that signal it
FEATURES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("waterfall", ("waterfall",)),
    ("brewery", ("brewery", "beer")),
    ("dining", ("restaurant", "food", "dining")),
    ("lake", ("lake",)),
    ("mountain", ("mountain",)),
    ("desert", ("desert",)),
    ("red rock", ("red rock",)),
)


def extract_adventure_info(message: str) -> ExtractedInfo:
    """Pull activity, location, features and timeframe out of ``message``."""
    text = message.lower()
    activity = next((a for a in ACTIVITIES if a in text), None)
    location = next((loc for loc in LOCATIONS if loc in text), None)
    features = tuple(
        name for name, words in FEATURES if any(w in text for w in words)
    )
    if "saturday" in text or "weekend" in text:
        timeframe = "weekend"
    elif "week" in text or "days" in text:
        timeframe = "multi-day"
    else:
        timeframe = "day trip"
    return ExtractedInfo(
        activity=activity, location=location, features=features, timeframe=timeframe,
    )


def _first_rule_hit(
    text: str, corpus: Corpus, rules: Sequence[PriorityRule]
) -> str | None:
    for rule in rules:
        if rule.key in corpus and rule.matches(text):
            return rule.key
    return None


def keyword_fallback(message: str, corpus: Corpus) -> str:
    """Pick a key from the message alone. Always returns a corpus key.

    Location literals win outright. Otherwise each record scores the summed
    length of its keywords found in the message; the highest score wins, ties
    keep the earlier record, and no hit at all returns the default.
    """
    text = message.lower()
    hit = _first_rule_hit(text, corpus, LOCATION_FALLBACKS)
    if hit is not None:
        return hit

    best_key, best_score = corpus.default.key, 0
    for record in corpus:
        score = sum(len(k) for k in record.keywords if k.lower() in text)
        if score > best_score:
            best_key, best_score = record.key, score
    logger.debug("keyword fallback %r -> %s (score %d)", message, best_key, best_score)
    return best_key


def extract_recommended_file(reply: str, message: str, corpus: Corpus) -> str:
    """Read the recommended key out of an LLM reply, falling back to keywords."""
    hit = _first_rule_hit(message.lower(), corpus, PRIORITY_RULES)
    if hit is not None:
        return hit

    reply_lower = reply.lower()
    for record in corpus:
        if f"{record.key}.json" in reply_lower:
            return record.key
    for record in corpus:
        if record.key in reply_lower:
            return record.key

    hit = _first_rule_hit(reply_lower, corpus, REPLY_LOCATIONS)
    if hit is not None:
        return hit
    return keyword_fallback(message, corpus)


class HintProvider:
    """Suggests a corpus key for free text, optionally asking an LLM.

    Args:
        corpus: The loaded corpus; suggestions are always keys from it.
        llm:    Chat callable, or None to use keyword matching only.
        rules:  Priority rules checked on the message before anything else.
    """

    def __init__(
        self,
        corpus: Corpus,
        llm: LLM | None = None,
        rules: tuple[PriorityRule, ...] = PRIORITY_RULES,
    ) -> None:
        self._corpus = corpus
        self._llm = llm
        self._rules = rules

    def system_prompt(self) -> str:
        return render_hint_system_prompt(self._corpus, self._rules)

    async def suggest(
        self, message: object, history: Sequence[dict[str, str]] = ()
    ) -> Hint:
        """Return a Hint for ``message``. Raises InvalidInput for blank input."""
        message = validate_input(message)
        info = extract_adventure_info(message)
        forced = _first_rule_hit(message.lower(), self._corpus, self._rules)
        if forced is not None:
            logger.info("Priority rule matched %r -> %s", message, forced)

        if self._llm is not None:
            try:
                chat = [
                    {"role": "system", "content": self.system_prompt()},
                    *history,
                    {"role": "user", "content": message},
                ]
                reply = await self._llm(chat)
            except (LLMError, PromptError) as e:
                logger.warning("Hint LLM failed, using keyword matching: %s", e)
            else:
                key = forced or extract_recommended_file(reply, message, self._corpus)
                return Hint(
                    response=reply,
                    recommended_file=f"{key}.json",
                    extracted_info=info,
                    source="priority" if forced else "llm",
                )

        key = forced or keyword_fallback(message, self._corpus)
        return Hint(
            response=FALLBACK_RESPONSE,
            recommended_file=f"{key}.json",
            extracted_info=info,
            source="priority" if forced else "keywords",
        )
