from __future__ import annotations

import contextlib
import json
import logging
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

from ledger.errors import (
    DeserializationError,
    DirectoryCreationError,
    PathResolutionError,
    ReadError,
    SerializationError,
    WriteError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DirectoryProvider = Callable[[], Optional[Path]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name} is not allowed")


class JsonFileStore(ABC, Generic[T]):
    """
    Persists a whole collection as one pretty-printed JSON array.

    Subclasses set ``file_name`` / ``collection_name`` and implement
    ``_to_record`` / ``_from_record``. The store keeps no records in memory:
    every ``save`` rewrites the file, every ``load`` re-reads it.
    """

    file_name: str
    collection_name: str

    def __init__(self, *, directory_provider: DirectoryProvider) -> None:
        self._directory_provider = directory_provider

    def resolve_storage_path(self) -> Path:
        data_dir = self._directory_provider()
        if data_dir is None:
            raise PathResolutionError("Failed to get data file path: app data directory is unavailable")

        data_dir = Path(data_dir)
        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(f"Failed to get data file path: {e}") from e

        return data_dir / self.file_name

    def save(self, records: Sequence[T]) -> None:
        path = self.resolve_storage_path()

        try:
            payload = [self._to_record(r) for r in records]
            text = json.dumps(payload, ensure_ascii=False, indent=2, allow_nan=False) + "\n"
            # surrogates isolés : échec ici plutôt qu'au milieu de l'écriture
            data = text.encode("utf-8")
        except (TypeError, ValueError, AttributeError) as e:
            raise SerializationError(f"Failed to serialize {self.collection_name}: {e}") from e

        self._write_bytes(path, data)
        logger.info("Saved %d %s to %s", len(payload), self.collection_name, path)

    def load(self) -> list[T]:
        path = self.resolve_storage_path()

        # Fichier absent => premier lancement, collection vide
        if not path.exists():
            logger.info("No %s file at %s, starting fresh", self.collection_name, path)
            return []

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ReadError(f"Failed to read {self.collection_name} file: {e}") from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(f"Failed to parse {self.collection_name}: not valid UTF-8 ({e})") from e

        try:
            payload = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            raise DeserializationError(f"Failed to parse {self.collection_name}: invalid JSON ({e})") from e

        if not isinstance(payload, list):
            raise DeserializationError(f"Failed to parse {self.collection_name}: root must be an array")

        out: list[T] = []
        for i, rec in enumerate(payload):
            ctx = f"[{i}]"
            try:
                if not isinstance(rec, dict):
                    raise ValueError(f"{ctx} must be an object")
                out.append(self._from_record(rec, ctx=ctx))
            except ValueError as e:
                raise DeserializationError(f"Failed to parse {self.collection_name}: {e}") from e

        logger.info("Loaded %d %s from %s", len(out), self.collection_name, path)
        return out

    # ---------- record codec ----------
    @abstractmethod
    def _to_record(self, item: T) -> dict[str, Any]: ...

    @abstractmethod
    def _from_record(self, data: dict[str, Any], *, ctx: str) -> T: ...

    # ---------- helpers ----------
    def _write_bytes(self, path: Path, data: bytes) -> None:
        # tmp unique + replace : un crash laisse l'ancien fichier intact,
        # deux saves concurrents ne partagent jamais le même tmp
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=path.parent,
                prefix=f"{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(data)
            tmp_path.replace(path)
        except OSError as e:
            self._discard(tmp_path)
            raise WriteError(f"Failed to write {self.collection_name} file: {e}") from e
        except BaseException:
            self._discard(tmp_path)
            raise

    @staticmethod
    def _discard(tmp_path: Path | None) -> None:
        if tmp_path is None:
            return
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)

    @staticmethod
    def _req_str(d: dict, key: str, *, ctx: str) -> str:
        if key not in d:
            raise ValueError(f"{ctx} missing field '{key}'")
        v = d[key]
        if not isinstance(v, str):
            raise ValueError(f"{ctx}.{key} must be a string")
        return v

    @staticmethod
    def _req_number(d: dict, key: str, *, ctx: str) -> float:
        if key not in d:
            raise ValueError(f"{ctx} missing field '{key}'")
        v = d[key]
        # bool est un int en Python, on le refuse explicitement
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"{ctx}.{key} must be a number")
        return _as_float(v, key=key, ctx=ctx)

    @staticmethod
    def _opt_str(d: dict, key: str, *, ctx: str, default: str | None = None) -> str | None:
        v = d.get(key, default)
        if v is not None and not isinstance(v, str):
            raise ValueError(f"{ctx}.{key} must be null or a string")
        return v

    @staticmethod
    def _opt_number(d: dict, key: str, *, ctx: str) -> float | None:
        v = d.get(key)
        if v is None:
            return None
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"{ctx}.{key} must be null or a number")
        return _as_float(v, key=key, ctx=ctx)


def _as_float(v: int | float, *, key: str, ctx: str) -> float:
    try:
        return float(v)
    except OverflowError as e:
        raise ValueError(f"{ctx}.{key} is out of range") from e
