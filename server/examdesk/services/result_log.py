from __future__ import annotations

import asyncio
import logging
from typing import List

from pydantic import ValidationError

from examdesk.exceptions import PersistenceFailure
from examdesk.schemas import ExamResult
from examdesk.storage import JsonFileRepository

logger = logging.getLogger(__name__)


class ResultLog:
    """Append-only history of graded exams, kept in its own JSON file."""

    def __init__(self, repository: JsonFileRepository) -> None:
        self._repository = repository
        self._lock = asyncio.Lock()

    @property
    def path(self) -> str:
        return self._repository.path

    async def append(self, result: ExamResult) -> None:
        """Read the whole history, add ``result`` and write it all back."""
        async with self._lock:
            history = self._load_records()
            history.append(result.model_dump(mode="json", by_alias=True))
            self._repository.save_all(history)
            logger.info(
                "Logged result for %r (%s/%s), %d results on file",
                result.student_name, result.score, result.total_marks, len(history),
            )

    async def history(self) -> List[ExamResult]:
        async with self._lock:
            records = self._load_records()
        try:
            return [ExamResult.model_validate(record) for record in records]
        except ValidationError as e:
            raise PersistenceFailure(self.path, f"corrupt result record: {e}") from e

    def _load_records(self) -> list:
        records = self._repository.load_all()
        if not isinstance(records, list):
            raise PersistenceFailure(self.path, "expected a list of results")
        return records
