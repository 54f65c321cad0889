"""Adventure corpus and sample-query index, loaded from flat JSON files.

There is no database: each adventure is one JSON file and the query index is
a single JSON document. Everything is read once by ``load_corpus`` and held
in an immutable ``Corpus``.

Directory layout:

    {base}/
      adventures/
        {key}.json            ← one AdventureRecord (without "key")
      sample-queries.json     ← {"queries": [{"query": ..., "adventure_file": "{key}.json"}]}

Corpus order is explicit: keys listed in ``order`` come first, remaining
file stems follow in sorted order. Directory-listing order is never used.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from pocket_ranger.models import AdventureRecord, SampleQuery

logger = logging.getLogger(__name__)

SAMPLE_QUERIES_FILE = "sample-queries.json"
ADVENTURES_DIR = "adventures"


class CorpusLoadFailure(RuntimeError):
    """Raised when the corpus cannot be read or does not validate."""


def key_from_filename(name: str) -> str:
    """Strip a ".json" suffix: "moab-utah.json" → "moab-utah". Bare keys pass through."""
    return name[: -len(".json")] if name.endswith(".json") else name


class Corpus:
    """Read-only view over the loaded adventures and query index."""

    def __init__(
        self,
        records: Sequence[AdventureRecord],
        sample_queries: Sequence[SampleQuery],
        default_key: str,
    ) -> None:
        self._records = tuple(records)
        self._by_key: Mapping[str, AdventureRecord] = MappingProxyType(
            {r.key: r for r in self._records}
        )
        if len(self._by_key) != len(self._records):
            raise CorpusLoadFailure("Duplicate adventure keys in corpus")
        self._sample_queries = tuple(sample_queries)
        for sq in self._sample_queries:
            if sq.adventure_key not in self._by_key:
                raise CorpusLoadFailure(
                    f"Sample query {sq.query!r} points at unknown adventure {sq.adventure_key!r}"
                )
        if default_key not in self._by_key:
            raise CorpusLoadFailure(f"Default adventure {default_key!r} is not in the corpus")
        self._default_key = default_key

    @property
    def records(self) -> tuple[AdventureRecord, ...]:
        return self._records

    @property
    def sample_queries(self) -> tuple[SampleQuery, ...]:
        return self._sample_queries

    @property
    def default(self) -> AdventureRecord:
        return self._by_key[self._default_key]

    def get(self, key: str) -> AdventureRecord | None:
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return [r.key for r in self._records]

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[AdventureRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CorpusLoadFailure(f"Cannot read {path}") from e
    except json.JSONDecodeError as e:
        raise CorpusLoadFailure(f"{path} is not valid JSON: {e}") from e


def _load_record(path: Path) -> AdventureRecord:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise CorpusLoadFailure(f"{path} must contain a JSON object")
    data = {**data, "key": path.stem}
    try:
        return AdventureRecord.model_validate(data)
    except ValidationError as e:
        raise CorpusLoadFailure(f"{path} is not a valid adventure: {e}") from e


def _load_sample_queries(path: Path) -> list[SampleQuery]:
    if not path.is_file():
        raise CorpusLoadFailure(f"Sample query index not found: {path}")
    data = _read_json(path)
    entries = data.get("queries") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise CorpusLoadFailure(f"{path} must contain a \"queries\" list")
    queries = []
    for entry in entries:
        try:
            queries.append(SampleQuery(
                query=entry["query"],
                adventure_key=key_from_filename(entry["adventure_file"]),
            ))
        except (KeyError, TypeError, ValidationError) as e:
            raise CorpusLoadFailure(f"Malformed sample query entry in {path}: {entry!r}") from e
    return queries


def _ordered(records: dict[str, AdventureRecord], order: Sequence[str]) -> list[AdventureRecord]:
    unknown = [k for k in order if k not in records]
    if unknown:
        raise CorpusLoadFailure(f"adventure_order names unknown adventures: {unknown}")
    listed = list(dict.fromkeys(order))
    rest = sorted(k for k in records if k not in listed)
    return [records[k] for k in listed + rest]


def load_corpus(
    base_path: Path,
    default_key: str,
    order: Sequence[str] = (),
) -> Corpus:
    """Read every adventure file and the sample-query index under ``base_path``.

    Raises CorpusLoadFailure for a missing or empty adventures directory, an
    unreadable or invalid file, an index entry pointing at an unknown key, or
    a default/order key that is not in the corpus.
    """
    adv_dir = base_path / ADVENTURES_DIR
    if not adv_dir.is_dir():
        raise CorpusLoadFailure(f"Adventures directory not found: {adv_dir}")

    records = {p.stem: _load_record(p) for p in sorted(adv_dir.glob("*.json"))}
    if not records:
        raise CorpusLoadFailure(f"No adventure files in {adv_dir}")

    corpus = Corpus(
        _ordered(records, order),
        _load_sample_queries(base_path / SAMPLE_QUERIES_FILE),
        default_key=key_from_filename(default_key),
    )
    logger.info(
        "Loaded %d adventures and %d sample queries from %s",
        len(corpus), len(corpus.sample_queries), base_path,
    )
    return corpus
