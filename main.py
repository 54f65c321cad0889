"""Pocket Ranger: API launcher and one-shot resolver."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = os.getenv("PORT", "8081")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def resolve_once(data_dir: Path, query: str, hint: str | None) -> int:
    from backend import storage
    from pocket_ranger.resolver import InvalidInput, resolve_with_strategy

    storage.init_storage(data_dir)
    corpus = storage.load_corpus()
    try:
        resolution = resolve_with_strategy(corpus, query, hint)
    except InvalidInput as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    logging.getLogger(__name__).info(
        "%r -> %s via %s", query, resolution.record.key, resolution.strategy
    )
    print(json.dumps(resolution.record.to_json_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pocket Ranger adventure planner")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Corpus directory (default: $DATA_DIR or ./data)")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=int(PORT))
    parser.add_argument("--reload", action="store_true",
                        help="Restart the server on code changes")
    parser.add_argument("--query", default=None,
                        help="Resolve one request, print the adventure JSON and exit")
    parser.add_argument("--hint", default=None,
                        help="Recommended adventure key or file, used with --query")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    data_dir = args.data_dir or Path(os.getenv("DATA_DIR", str(ROOT / "data")))
    if args.query is not None:
        return resolve_once(data_dir, args.query, args.hint)

    import uvicorn

    # Child processes started by --reload pick the data dir up from the env
    os.environ["DATA_DIR"] = str(data_dir.resolve())
    print(f"Starting backend on http://localhost:{args.port} ...")
    uvicorn.run(
        "backend.app:create_app", factory=True,
        host=args.host, port=args.port, reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
