"""Storage initialization."""

from pathlib import Path

_data_dir: Path | None = None


def init_storage(data_dir: Path) -> None:
    """Point storage at ``data_dir``. Nothing is created: the data is read-only."""
    global _data_dir
    _data_dir = data_dir


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir
