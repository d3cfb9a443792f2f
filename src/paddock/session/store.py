"""Save-game persistence.

A snapshot is a plain dict: the character record (``Character.to_data``)
plus the bits of session context needed to resume (schedule id, seed).
Stores hand back result dicts rather than raising so the bindings can
show a message and stay on the current screen.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


class SaveSnapshot(BaseModel):
    """On-disk shape of one save file."""

    ref: str
    saved_at: str
    """ISO 8601 timestamp."""
    schedule_id: str
    seed: int | None = None
    character: dict[str, Any]

    @property
    def turn(self) -> int:
        return int(self.character.get("career", {}).get("turn", 1))


def make_ref(name: str, saved_at: datetime) -> str:
    """File-safe save reference, e.g. ``thunder_20250101T120000``."""
    slug = _UNSAFE_CHARS.sub("_", name.strip().lower()).strip("_") or "save"
    return f"{slug}_{saved_at.strftime('%Y%m%dT%H%M%S')}"


class SessionStore(ABC):
    """Where save snapshots live."""

    def save(self, snapshot: dict[str, Any]) -> dict[str, Any]:
        """Persist *snapshot* and return ``{"success", "data"}``.

        ``data`` carries the ``ref`` to pass to :meth:`load` later.
        """
        now = datetime.now(timezone.utc)
        character = snapshot["character"]
        name = character.get("profile", {}).get("name", "save")
        record = SaveSnapshot(
            ref=snapshot.get("ref") or self._unique_ref(make_ref(name, now)),
            saved_at=now.isoformat(),
            schedule_id=snapshot["schedule_id"],
            seed=snapshot.get("seed"),
            character=character,
        )
        self._write(record)
        logger.debug("Saved %s at turn %d", record.ref, record.turn)
        return {
            "success": True,
            "data": {"ref": record.ref, "saved_at": record.saved_at, "turn": record.turn},
        }

    def load(self, ref: str) -> dict[str, Any]:
        """Return ``{"success", "character", "turn", ...}`` for *ref*.

        An unknown or unreadable ref gives ``{"success": False, "error"}``.
        """
        ref = ref.strip()
        if not ref:
            return {"success": False, "error": "No save file selected"}
        record = self._read(ref)
        if record is None:
            return {"success": False, "error": f"Save file not found: {ref}"}
        return {
            "success": True,
            "character": record.character,
            "turn": record.turn,
            "schedule_id": record.schedule_id,
            "seed": record.seed,
        }

    def _unique_ref(self, ref: str) -> str:
        """*ref*, or *ref* with a ``_2``, ``_3``... suffix if already taken.

        Explicit refs passed to :meth:`save` overwrite on purpose; generated
        ones must not, since two saves can land in the same second.
        """
        taken = set(self.list_saves())
        candidate, n = ref, 1
        while candidate in taken:
            n += 1
            candidate = f"{ref}_{n}"
        return candidate

    @abstractmethod
    def list_saves(self) -> list[str]:
        """Refs of every stored snapshot, oldest first."""

    @abstractmethod
    def _write(self, record: SaveSnapshot) -> None: ...

    @abstractmethod
    def _read(self, ref: str) -> SaveSnapshot | None: ...


class MemorySessionStore(SessionStore):
    """Keeps snapshots in a dict.  Used by tests and throwaway sessions."""

    def __init__(self) -> None:
        self._saves: dict[str, SaveSnapshot] = {}

    def list_saves(self) -> list[str]:
        return list(self._saves)

    def _write(self, record: SaveSnapshot) -> None:
        self._saves[record.ref] = record.model_copy(deep=True)

    def _read(self, ref: str) -> SaveSnapshot | None:
        record = self._saves.get(ref)
        return record.model_copy(deep=True) if record is not None else None


class JsonFileSessionStore(SessionStore):
    """One JSON file per snapshot under *directory*.

    Parameters
    ----------
    directory:
        Save directory.  Created on first save.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def list_saves(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        paths = sorted(self.directory.glob("*.json"), key=lambda p: p.stat().st_mtime)
        return [p.stem for p in paths]

    def _path(self, ref: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', ref)}.json"

    def _write(self, record: SaveSnapshot) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(record.ref).write_text(json.dumps(record.model_dump(), indent=2))

    def _read(self, ref: str) -> SaveSnapshot | None:
        path = self._path(ref)
        if not path.is_file():
            return None
        try:
            return SaveSnapshot.model_validate(json.loads(path.read_text()))
        except (json.JSONDecodeError, ValidationError):
            logger.warning("Ignoring corrupt save file %s", path)
            return None
