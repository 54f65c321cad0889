import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pocket_ranger.corpus import Corpus, load_corpus

SHIPPED_DATA_DIR = Path(__file__).parent / "data"


def write_adventure(base: Path, key: str, /, **fields) -> None:
    """Write data/adventures/<key>.json with sensible defaults for missing fields."""
    record = {
        "name": fields.pop("name", key.replace("-", " ").title()),
        "activity": fields.pop("activity", "exploration"),
        "city": fields.pop("city", "Nowhere, XX"),
        "description": fields.pop("description", "Test adventure."),
        "schedule": fields.pop("schedule", [
            {"time": "9:00 AM", "activity": "Start", "location": "Trailhead"},
        ]),
        **fields,
    }
    adv_dir = base / "adventures"
    adv_dir.mkdir(parents=True, exist_ok=True)
    (adv_dir / f"{key}.json").write_text(json.dumps(record, indent=2))


def write_sample_queries(base: Path, pairs: list[tuple[str, str]]) -> None:
    queries = [{"query": q, "adventure_file": f"{key}.json"} for q, key in pairs]
    (base / "sample-queries.json").write_text(json.dumps({"queries": queries}, indent=2))


@pytest.fixture
def shipped_corpus() -> Corpus:
    """The corpus under ./data, in its configured order."""
    config = json.loads((SHIPPED_DATA_DIR / "config.json").read_text())
    return load_corpus(
        SHIPPED_DATA_DIR,
        default_key=config["default_adventure"],
        order=config["adventure_order"],
    )


@pytest.fixture
def tiny_data_dir(tmp_path) -> Path:
    """A three-adventure corpus whose records each match a different strategy.

    order: lakeside-fishing, city-walk, fallback-picnic (default)
    """
    write_adventure(tmp_path, "lakeside-fishing", name="Lakeside Fishing",
                    activity="fishing", city="Springfield, IL")
    write_adventure(tmp_path, "city-walk", name="City Walk",
                    activity="exploration", city="Shelbyville, IL")
    write_adventure(tmp_path, "fallback-picnic", name="Fallback Picnic",
                    activity="social", city="Ogdenville, IL")
    write_sample_queries(tmp_path, [
        ("quiet morning walk downtown", "city-walk"),
    ])
    return tmp_path


@pytest.fixture
def tiny_corpus(tiny_data_dir) -> Corpus:
    return load_corpus(
        tiny_data_dir,
        default_key="fallback-picnic",
        order=["lakeside-fishing", "city-walk", "fallback-picnic"],
    )


@pytest.fixture
def client(monkeypatch) -> TestClient:
    """API client over the shipped corpus with the hint LLM disabled."""
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    from backend.app import create_app

    return TestClient(create_app(SHIPPED_DATA_DIR))
