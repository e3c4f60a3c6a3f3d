"""Runtime settings read from ``WAREHOUSE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "WAREHOUSE_"

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        environ = os.environ if environ is None else environ
        data_dir = environ.get(f"{ENV_PREFIX}DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            log_level=environ.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
        )

    @property
    def command_store_path(self) -> Path:
        return self.data_dir / "command" / "products.json"

    @property
    def query_store_path(self) -> Path:
        return self.data_dir / "query" / "products.json"

    @property
    def queue_dir(self) -> Path:
        return self.data_dir / "queues"
