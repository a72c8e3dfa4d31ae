from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    data_dir: Path | None
    database_url: str | None = None


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("FAMILYLEDGER_DATA_DIR")
    if env and env.strip():
        data_dir: Path | None = Path(env.strip()).expanduser()
    else:
        # 2) default: ~/.familyledger
        try:
            data_dir = Path.home() / ".familyledger"
        except (RuntimeError, KeyError):
            # pas de home => le store remonte PathResolutionError
            data_dir = None

    db_url = os.getenv("FAMILYLEDGER_DATABASE_URL")
    database_url = db_url.strip() if db_url and db_url.strip() else None

    # Pas de mkdir ici : c'est le store qui crée le dossier
    return Settings(data_dir=data_dir, database_url=database_url)


def get_app_data_directory() -> Path | None:
    return get_settings().data_dir
