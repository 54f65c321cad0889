"""Corpus browsing and diagnostics endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request

from pocket_ranger.resolver import PRIORITY_RULES, resolve_with_strategy

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/adventures")
async def list_adventures(request: Request):
    """List adventure summaries in corpus order."""
    return [r.summary() for r in request.app.state.corpus]


@router.get("/adventures/{key}")
async def get_adventure(key: str, request: Request):
    """Get a single adventure by key."""
    record = request.app.state.corpus.get(key)
    if record is None:
        raise HTTPException(404, "Adventure not found")
    return record.to_json_dict()


@router.get("/debug/adventures")
async def debug_adventures(request: Request):
    """Corpus summary plus a self-check: does every sample query resolve to its own key?"""
    corpus = request.app.state.corpus
    checks = []
    for sample in corpus.sample_queries:
        resolution = resolve_with_strategy(corpus, sample.query)
        checks.append({
            "query": sample.query,
            "expected": sample.adventure_key,
            "actual": resolution.record.key,
            "strategy": resolution.strategy,
            "matches": resolution.record.key == sample.adventure_key,
        })
    return {
        "adventures": [r.summary() for r in corpus],
        "default": corpus.default.key,
        "priorityRules": [
            {"triggers": list(rule.triggers), "key": rule.key} for rule in PRIORITY_RULES
        ],
        "sampleQueries": checks,
    }


@router.post("/debug/flow")
async def debug_flow(request: Request):
    """Run one phrase through chat-hint and then plan, reporting both steps."""
    corpus = request.app.state.corpus
    try:
        payload = await request.json()
        test_case = payload.get("testCase") if isinstance(payload, dict) else None
        hint = await request.app.state.hints.suggest(test_case)
        resolution = resolve_with_strategy(corpus, test_case, hint.recommended_file)
    except ValueError as e:  # InvalidInput or a malformed body
        logger.info("Rejected flow request: %s", e)
        raise HTTPException(400, "Invalid input provided") from e
    return {
        "testCase": test_case,
        "hint": hint.to_json_dict(),
        "plan": {
            **resolution.record.summary(),
            "strategy": resolution.strategy,
            "followedHint": resolution.strategy == "hint",
        },
    }
