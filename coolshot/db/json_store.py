"""
coolshot/db/json_store.py

Purpose: Whole-file JSON document persistence

- One file per document (users, analytics)
- Pretty-printed, hand-editable output
- Every save rewrites the whole file via a temp file + rename
- Read/write failures are logged and reported, never raised to callers
"""

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

from coolshot.core.exceptions import StorageError
from coolshot.core.logging import get_logger

logger = get_logger(__name__)


class JsonDocument:
    """
    A single JSON document on local disk.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[Any]:
        """
        Reads the document.

        Returns:
            Parsed JSON, or None if the file is missing or unreadable
        """
        if not self.path.exists():
            logger.debug(f"Document not found, starting empty: {self.path}")
            return None

        try:
            return self._read()
        except StorageError as e:
            logger.error(f"Error loading {self.path}: {e.message}")
            return None

    def save(self, data: Any) -> bool:
        """
        Rewrites the whole document.

        Returns:
            True if written, False if the write failed (already logged)
        """
        try:
            self._write(data)
            return True
        except StorageError as e:
            logger.error(f"Error saving {self.path}: {e.message}")
            return False

    def _read(self) -> Any:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(str(e), details={"path": str(self.path)}) from e

    def _write(self, data: Any):
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(str(e), details={"path": str(self.path)}) from e
