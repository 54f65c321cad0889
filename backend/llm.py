"""Hint LLM construction from planner config."""

from typing import Any

from pocket_ranger.llm import HttpLLM


def hint_llm_from_config(config: dict[str, Any]) -> HttpLLM | None:
    """Build the hint provider's LLM client, or None when no provider_url is set."""
    settings = config.get("hint_llm", {})
    provider_url = settings.get("provider_url", "")
    if not provider_url:
        return None
    return HttpLLM(
        provider_url=provider_url,
        api_key=settings.get("api_key", ""),
        model=settings.get("model", ""),
        timeout=float(settings.get("timeout", 30)),
    )
