"""FastMCP server exposing the adventure resolver as MCP tools.

Tools:
  - plan_adventure(user_input, recommended_file): resolve text to one itinerary
  - list_adventures(): corpus summaries

The corpus is set via set_corpus() for tests, or loaded from DATA_DIR
(default ./data) when run as __main__.

Usage:
    uv run python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from pocket_ranger.corpus import Corpus
from pocket_ranger.resolver import resolve

mcp = FastMCP("pocket-ranger")

_corpus: Corpus | None = None


def set_corpus(corpus: Corpus) -> None:
    """Replace the active corpus (used in tests and at startup)."""
    global _corpus
    _corpus = corpus


def get_corpus() -> Corpus:
    assert _corpus is not None, "Call set_corpus() before using the MCP tools"
    return _corpus


@mcp.tool()
def plan_adventure(user_input: str, recommended_file: str | None = None) -> dict:
    """Pick the adventure itinerary that best matches a free-text request."""
    return resolve(get_corpus(), user_input, recommended_file).to_json_dict()


@mcp.tool()
def list_adventures() -> list[dict]:
    """List the available adventures (key, name, city, activity)."""
    return [r.summary() for r in get_corpus()]


if __name__ == "__main__":
    import os
    from pathlib import Path

    from backend import storage

    storage.init_storage(Path(os.getenv("DATA_DIR", "data")))
    set_corpus(storage.load_corpus())
    mcp.run()
