"""Tests for the keyword hint provider."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pocket_ranger.hints import (
    FALLBACK_RESPONSE,
    HintProvider,
    extract_adventure_info,
    extract_recommended_file,
    keyword_fallback,
)
from pocket_ranger.llm import HttpLLM, LLMError
from pocket_ranger.prompts import PromptError
from pocket_ranger.resolver import InvalidInput, resolve


# ── extract_adventure_info ───────────────────────────────────


def test_extract_activity_first_match():
    assert extract_adventure_info("kayaking then hiking").activity == "hiking"


def test_extract_no_activity():
    assert extract_adventure_info("somewhere nice").activity is None


def test_extract_location():
    assert extract_adventure_info("Trip to Big Sur").location == "big sur"


def test_extract_features_in_fixed_order():
    info = extract_adventure_info("red rock desert with beer and a waterfall")
    assert info.features == ("waterfall", "brewery", "desert", "red rock")


def test_extract_dining_feature_synonyms():
    for text in ["good restaurant", "local food", "fine dining"]:
        assert "dining" in extract_adventure_info(text).features


@pytest.mark.parametrize("text,timeframe", [
    ("this saturday", "weekend"),
    ("a weekend away", "weekend"),
    ("two weeks off", "multi-day"),
    ("4 days in utah", "multi-day"),
    ("this afternoon", "day trip"),
])
def test_extract_timeframe(text, timeframe):
    assert extract_adventure_info(text).timeframe == timeframe


# ── keyword_fallback ─────────────────────────────────────────


@pytest.mark.parametrize("text,key", [
    ("Hiking in Utah", "moab-utah"),
    ("Colorado in July", "avon-colorado"),
    ("glacier views", "glacier-montana"),
])
def test_fallback_location_literals(shipped_corpus, text, key):
    assert keyword_fallback(text, shipped_corpus) == key


def test_fallback_utah_beats_colorado(shipped_corpus):
    assert keyword_fallback("colorado or utah", shipped_corpus) == "moab-utah"


def test_fallback_keyword_scoring(shipped_corpus):
    # "door county" (11) + "fish boil" (9) beat "brewery" (7)
    assert keyword_fallback("door county fish boil then a brewery", shipped_corpus) == "door-county-fishing"


def test_fallback_no_keywords_gives_default(shipped_corpus):
    assert keyword_fallback("zzqqxx", shipped_corpus) == "avon-colorado"


def test_fallback_skips_rules_for_missing_keys(tiny_corpus):
    assert keyword_fallback("utah", tiny_corpus) == "fallback-picnic"


# ── extract_recommended_file ─────────────────────────────────


def test_reply_filename(shipped_corpus):
    reply = "I recommend glacier-montana.json for alpine lakes."
    assert extract_recommended_file(reply, "alpine lakes", shipped_corpus) == "glacier-montana"


def test_reply_user_utah_wins(shipped_corpus):
    reply = "Try glacier-montana.json."
    assert extract_recommended_file(reply, "hiking in utah", shipped_corpus) == "moab-utah"


def test_reply_location_words(shipped_corpus):
    reply = "Colorado's high country is perfect for you."
    assert extract_recommended_file(reply, "mountain views", shipped_corpus) == "avon-colorado"


def test_reply_unhelpful_uses_keywords(shipped_corpus):
    reply = "Sounds fun!"
    assert extract_recommended_file(reply, "supper club with cheese curds", shipped_corpus) == "madison-dining"


# ── HintProvider ─────────────────────────────────────────────


async def test_suggest_without_llm(shipped_corpus):
    hint = await HintProvider(shipped_corpus).suggest("door county fish boil")
    assert hint.recommended_file == "door-county-fishing.json"
    assert hint.source == "keywords"
    assert hint.response == FALLBACK_RESPONSE
    assert hint.should_search is True


async def test_suggest_priority_without_llm(shipped_corpus):
    hint = await HintProvider(shipped_corpus).suggest("Hiking in utah, 4 days, casual dining")
    assert hint.recommended_file == "moab-utah.json"
    assert hint.source == "priority"
    assert hint.extracted_info.activity == "hiking"
    assert hint.extracted_info.location == "utah"
    assert hint.extracted_info.timeframe == "multi-day"
    assert "dining" in hint.extracted_info.features


async def test_suggest_with_llm(shipped_corpus):
    llm = AsyncMock(return_value="glacier-montana.json is ideal: alpine lakes and Logan Pass.")
    hint = await HintProvider(shipped_corpus, llm).suggest("alpine lakes")
    assert hint.recommended_file == "glacier-montana.json"
    assert hint.source == "llm"
    assert hint.response.startswith("glacier-montana.json")


async def test_suggest_sends_system_prompt_history_and_message(shipped_corpus):
    llm = AsyncMock(return_value="avon-colorado.json")
    history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
    await HintProvider(shipped_corpus, llm).suggest("mountains please", history)
    messages = llm.call_args[0][0]
    assert messages[0]["role"] == "system"
    assert "moab-utah.json" in messages[0]["content"]
    assert messages[1:3] == history
    assert messages[-1] == {"role": "user", "content": "mountains please"}


async def test_suggest_priority_overrides_llm(shipped_corpus):
    llm = AsyncMock(return_value="Go to glacier-montana.json")
    hint = await HintProvider(shipped_corpus, llm).suggest("moab in may")
    assert hint.recommended_file == "moab-utah.json"
    assert hint.source == "priority"
    assert hint.response == "Go to glacier-montana.json"


async def test_suggest_llm_failure_falls_back(shipped_corpus):
    llm = AsyncMock(side_effect=LLMError("down"))
    hint = await HintProvider(shipped_corpus, llm).suggest("glacier national park")
    assert hint.recommended_file == "glacier-montana.json"
    assert hint.source == "keywords"
    assert hint.response == FALLBACK_RESPONSE


async def test_suggest_transport_failure_falls_back(shipped_corpus):
    llm = HttpLLM(provider_url="http://localhost:8080/v1")
    mock_post = AsyncMock(side_effect=httpx.ReadError("connection reset"))
    with patch("httpx.AsyncClient.post", mock_post):
        hint = await HintProvider(shipped_corpus, llm).suggest("hiking near Madison")
    assert hint.source == "keywords"
    assert hint.response == FALLBACK_RESPONSE


async def test_suggest_prompt_failure_falls_back(shipped_corpus):
    llm = AsyncMock(return_value="glacier-montana.json")
    provider = HintProvider(shipped_corpus, llm)
    with patch(
        "pocket_ranger.hints.render_hint_system_prompt",
        side_effect=PromptError("Template error: boom"),
    ):
        hint = await provider.suggest("glacier national park")
    llm.assert_not_called()
    assert hint.recommended_file == "glacier-montana.json"
    assert hint.source == "keywords"


@pytest.mark.parametrize("bad", ["", "   ", None, 42])
async def test_suggest_invalid_message(shipped_corpus, bad):
    with pytest.raises(InvalidInput):
        await HintProvider(shipped_corpus).suggest(bad)


async def test_hint_feeds_resolver(shipped_corpus):
    """The suggested file is accepted by the resolver as a hint."""
    hint = await HintProvider(shipped_corpus).suggest("glacier hike")
    assert resolve(shipped_corpus, "glacier hike", hint.recommended_file).key == "glacier-montana"


def test_system_prompt_lists_every_adventure(shipped_corpus):
    prompt = HintProvider(shipped_corpus).system_prompt()
    for record in shipped_corpus:
        assert f"{record.key}.json" in prompt
    assert "Devil's Lake Bluff Trails" in prompt
    assert 'MUST recommend "moab-utah.json"' in prompt
