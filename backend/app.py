import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend import storage
from backend.llm import hint_llm_from_config
from backend.routes import router
from pocket_ranger.hints import HintProvider
from pocket_ranger.llm import LLM

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"

logger = logging.getLogger(__name__)


def create_app(data_dir: Path | None = None, llm: LLM | None = None) -> FastAPI:
    """Build the API app. The corpus is loaded here, once.

    Raises CorpusLoadFailure if the corpus is missing or invalid, so a broken
    deployment never starts serving. ``llm`` overrides the configured hint LLM.
    """
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)
    config = storage.get_config()
    corpus = storage.load_corpus(config)

    app = FastAPI(title="Pocket Ranger")
    app.state.config = config
    app.state.corpus = corpus
    app.state.hints = HintProvider(corpus, llm or hint_llm_from_config(config))
    app.include_router(router, prefix="/api")

    logger.info("Serving %d adventures from %s", len(corpus), resolved)
    return app
