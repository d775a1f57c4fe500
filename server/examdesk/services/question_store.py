from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List

from pydantic import ValidationError

from examdesk.exceptions import PersistenceFailure, QuestionNotFound
from examdesk.schemas import DEFAULT_MARKS, Question, QuestionCreate
from examdesk.storage import JsonFileRepository

logger = logging.getLogger(__name__)


class QuestionStore:
    """
    Append-only question collection mirrored to a JSON file.

    Identifiers come from a counter that is persisted with the questions and
    only moves forward. There is no update or delete, so the counter always
    equals the number of questions for files this store wrote itself.

    Every operation runs under one lock. Requests inside this process are
    therefore applied in arrival order; another process writing the same
    file can still overwrite our changes.
    """

    def __init__(self, repository: JsonFileRepository) -> None:
        self._repository = repository
        self._lock = asyncio.Lock()
        self._questions: List[Question] = []
        self._last_id = 0

    @property
    def path(self) -> str:
        return self._repository.path

    def load(self) -> None:
        """Replace in-memory state with the persisted document."""
        document = self._repository.load_all()
        if isinstance(document, list):
            # Bare list written before the counter was persisted.
            records, last_id = document, 0
        elif isinstance(document, dict):
            records, last_id = document.get("questions", []), document.get("lastId", 0)
        else:
            raise PersistenceFailure(self.path, "unexpected document type")

        if not isinstance(records, list):
            raise PersistenceFailure(self.path, "questions must be a list")
        if isinstance(last_id, bool) or not isinstance(last_id, int):
            raise PersistenceFailure(self.path, f"lastId must be an integer, got {last_id!r}")

        try:
            questions = [Question.model_validate(record) for record in records]
        except ValidationError as e:
            raise PersistenceFailure(self.path, f"corrupt question record: {e}") from e

        self._questions = questions
        self._last_id = max([last_id] + [q.id for q in questions])
        logger.info("Loaded %d questions from %s", len(questions), self.path)

    async def append(self, data: QuestionCreate) -> Question:
        async with self._lock:
            question = Question(
                id=self._last_id + 1,
                question=data.question,
                options=list(data.options),
                correct_answer=data.correct_answer,
                marks=data.marks or DEFAULT_MARKS,
                file_url=data.file_url,
                created_at=datetime.now(timezone.utc),
            )
            updated = self._questions + [question]
            # Flush first: a failed write must leave memory untouched.
            self._repository.save_all(self._serialize(updated, question.id))
            self._questions = updated
            self._last_id = question.id
            logger.info("Added question %d", question.id)
            return question

    async def list(self) -> List[Question]:
        async with self._lock:
            return [q.model_copy(deep=True) for q in self._questions]

    async def get(self, question_id: int) -> Question:
        async with self._lock:
            for question in self._questions:
                if question.id == question_id:
                    return question.model_copy(deep=True)
        raise QuestionNotFound(question_id)

    async def lookup(self) -> Dict[int, Question]:
        """Snapshot keyed by id, used to resolve exam answers."""
        async with self._lock:
            return {q.id: q.model_copy(deep=True) for q in self._questions}

    @staticmethod
    def _serialize(questions: List[Question], last_id: int) -> dict:
        return {
            "lastId": last_id,
            "questions": [q.model_dump(mode="json", by_alias=True) for q in questions],
        }
