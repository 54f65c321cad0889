"""Planner configuration (default adventure, corpus order, hint LLM connection)."""

import json
import os
from pathlib import Path
from typing import Any

from pocket_ranger.corpus import CorpusLoadFailure

from .core import data_dir

_CONFIG_DEFAULTS: dict[str, Any] = {
    "default_adventure": "avon-colorado",
    "adventure_order": [],
    "hint_llm": {
        "provider_url": "",
        "api_key": "",
        "model": "llama-3.1-70b-versatile",
        "timeout": 30,
    },
}


def _config_path() -> Path:
    return data_dir() / "config.json"


def _read_stored(path: Path) -> dict[str, Any]:
    """Parse config.json, raising CorpusLoadFailure if it is unreadable or mis-shaped."""
    try:
        stored = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusLoadFailure(f"{path} is not valid JSON: {e}") from e
    if not isinstance(stored, dict):
        raise CorpusLoadFailure(f"{path} must contain a JSON object")
    if not isinstance(stored.get("default_adventure", ""), str):
        raise CorpusLoadFailure(f"{path}: default_adventure must be a string")
    order = stored.get("adventure_order", [])
    if not isinstance(order, list) or not all(isinstance(k, str) for k in order):
        raise CorpusLoadFailure(f"{path}: adventure_order must be a list of strings")
    if not isinstance(stored.get("hint_llm", {}), dict):
        raise CorpusLoadFailure(f"{path}: hint_llm must be an object")
    return stored


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values.

    An empty hint_llm.api_key is filled from the GROQ_API_KEY env var.
    """
    config: dict[str, Any] = {
        "default_adventure": _CONFIG_DEFAULTS["default_adventure"],
        "adventure_order": list(_CONFIG_DEFAULTS["adventure_order"]),
        "hint_llm": dict(_CONFIG_DEFAULTS["hint_llm"]),
    }
    path = _config_path()
    if path.is_file():
        stored = _read_stored(path)
        if "default_adventure" in stored:
            config["default_adventure"] = stored["default_adventure"]
        if "adventure_order" in stored:
            config["adventure_order"] = list(stored["adventure_order"])
        if "hint_llm" in stored:
            config["hint_llm"].update(stored["hint_llm"])
    if not config["hint_llm"]["api_key"]:
        config["hint_llm"]["api_key"] = os.getenv("GROQ_API_KEY", "")
    return config


def public_config(config: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``config`` safe to return over HTTP (API key masked)."""
    masked = json.loads(json.dumps(config))
    if masked["hint_llm"].get("api_key"):
        masked["hint_llm"]["api_key"] = "***"
    return masked
