"""Runtime settings shared by the CLI and the composition root."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_LOG_LEVEL = "WARNING"

DATA_DIR_ENVVAR = "ORDERDESK_DATA_DIR"
LOG_LEVEL_ENVVAR = "ORDERDESK_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"
