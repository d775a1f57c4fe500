"""
Flat-file persistence for questions and exam results.

Each repository owns exactly one JSON document and only knows how to load
it whole and save it whole. Stores and logs never open the files directly,
so a transactional backend can replace this class without touching them.
"""
import json
import logging
import os
import tempfile
from typing import Any, Callable, Optional

from examdesk.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)


class JsonFileRepository:
    """Load-all / save-all access to one JSON file."""

    def __init__(self, path: str, default_factory: Optional[Callable[[], Any]] = None):
        self.path = os.path.abspath(path)
        self._default_factory = default_factory or list

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load_all(self) -> Any:
        """
        Return the decoded document, or an empty default when the file is absent.
        """
        if not self.exists():
            return self._default_factory()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("Failed to read %s: %s", self.path, e)
            raise PersistenceFailure(self.path, str(e)) from e

    def save_all(self, data: Any) -> None:
        """
        Overwrite the document with ``data``.

        The new content goes to a sibling temp file which then replaces the
        target, so readers see either the old document or the new one.
        """
        directory = os.path.dirname(self.path)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{os.path.basename(self.path)}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise PersistenceFailure(self.path, str(e)) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
