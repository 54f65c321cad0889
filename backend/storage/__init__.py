"""Read-only file storage for the adventure corpus and planner config.

Data layout:
  data/
    adventures/          One JSON file per adventure, keyed by file stem
      <key>.json         name, activity, city, description, schedule, keywords
    sample-queries.json  {"queries": [{"query", "adventure_file"}]}
    config.json          Optional overrides: default_adventure,
                         adventure_order, hint_llm

Config: get_config() returns defaults merged with stored values; hint_llm is
merged key by key, scalars and adventure_order are overwritten.

Nothing here writes: the corpus is authored by hand and shipped with the
deployment. load_corpus() reads it once; the app keeps the result.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from pocket_ranger.corpus import Corpus, load_corpus as _load_corpus

from .core import (  # noqa: F401
    data_dir,
    init_storage,
)

from .config import (  # noqa: F401
    get_config,
    public_config,
)


def load_corpus(config: dict | None = None) -> Corpus:
    """Load the corpus under data_dir() using the configured default and order."""
    config = config or get_config()
    return _load_corpus(
        data_dir(),
        default_key=config["default_adventure"],
        order=config["adventure_order"],
    )
