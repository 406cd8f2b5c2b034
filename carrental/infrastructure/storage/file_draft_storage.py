"""Almacenamiento de borradores en archivos JSON (uno por sesión)."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from carrental.application.interfaces.draft_storage import DraftStorage

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class FileDraftStorage(DraftStorage):
    """
    Guarda cada borrador en `<directorio>/<clave>.json`.

    Un archivo ilegible se trata como ausente para no bloquear al cliente.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._directory / f"{_SAFE_KEY.sub('_', key)}.json"

    def get(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable draft file", extra={"path": str(path), "error": str(exc)})
            return None

    def set(self, key: str, value: dict[str, Any]) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(value, default=str), encoding="utf-8")
        tmp_path.replace(path)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
