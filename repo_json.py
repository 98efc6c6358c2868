# repo_json.py
"""Key-value store kept in a single JSON file, standing in for browser local storage."""
import json
import logging
import os
from copy import deepcopy
from typing import Any, Dict, Optional

from config import STORAGE_QUOTA_BYTES

logger = logging.getLogger(__name__)


class StorageFullError(Exception):
    """The serialized store would exceed its byte quota."""


class JSONRepo:
    def __init__(self, path: str, max_bytes: int = STORAGE_QUOTA_BYTES):
        self.path = path
        self.max_bytes = max_bytes
        self.last_error: Optional[str] = None
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        if not os.path.exists(path):
            self._write({})
        self.data = self._read()

    def _read(self) -> Dict[str, Any]:
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, obj) -> str:
        text = json.dumps(obj, indent=2, ensure_ascii=False)
        size = len(text.encode("utf-8"))
        if size > self.max_bytes:
            raise StorageFullError(f"{size} bytes exceeds the {self.max_bytes} byte quota")
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, self.path)
        return text

    # -------- Key-value access --------
    def get(self, key: str, default=None):
        """Detached copy of the stored value, or of default when the key is missing."""
        if key in self.data:
            return deepcopy(self.data[key])
        return deepcopy(default)

    def has(self, key: str) -> bool:
        return key in self.data

    def set(self, key: str, value) -> bool:
        return self.set_many({key: value})

    def set_many(self, values: Dict[str, Any]) -> bool:
        """Write several keys in one file replacement; all land or none do.

        On failure the file and the cached data keep their previous state,
        the reason goes to ``last_error`` and False is returned.
        """
        staged = dict(self.data)
        staged.update(values)
        try:
            text = self._write(staged)
        except (OSError, StorageFullError, TypeError, ValueError) as exc:
            self.last_error = f"Failed to save data: {exc}"
            logger.error("Could not write %s (keys: %s): %s", self.path, ", ".join(values), exc)
            return False
        self.data = json.loads(text)
        self.last_error = None
        return True

