"""
Unit tests for the question store
"""
import asyncio
import json

import pytest

from examdesk.exceptions import PersistenceFailure, QuestionNotFound
from examdesk.schemas import QuestionCreate
from examdesk.services.question_store import QuestionStore
from examdesk.storage import JsonFileRepository


def _create(text="Q?", **kwargs):
    return QuestionCreate(question=text, **kwargs)


@pytest.fixture
def store(questions_repo):
    question_store = QuestionStore(questions_repo)
    question_store.load()
    return question_store


class TestAppend:

    @pytest.mark.asyncio
    async def test_ids_are_monotonic_in_append_order(self, store):
        created = [await store.append(_create(f"Q{i}")) for i in range(5)]

        assert [q.id for q in created] == [1, 2, 3, 4, 5]
        listed = await store.list()
        assert [q.id for q in listed] == [1, 2, 3, 4, 5]
        assert [q.question for q in listed] == ["Q0", "Q1", "Q2", "Q3", "Q4"]

    @pytest.mark.asyncio
    async def test_defaults(self, store):
        question = await store.append(_create())
        assert question.marks == 1
        assert question.options == []
        assert question.correct_answer == ""
        assert question.file_url is None
        assert question.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_zero_marks_fall_back_to_default(self, store):
        question = await store.append(_create(marks=0))
        assert question.marks == 1

    @pytest.mark.asyncio
    async def test_accepts_inconsistent_answer(self, store):
        question = await store.append(
            _create(options=["A. x", "B. y"], correct_answer="Z", marks=2.5)
        )
        assert question.correct_answer == "Z"
        assert question.marks == 2.5

    @pytest.mark.asyncio
    async def test_concurrent_appends_get_distinct_ids(self, store):
        created = await asyncio.gather(*(store.append(_create(f"Q{i}")) for i in range(10)))
        assert sorted(q.id for q in created) == list(range(1, 11))
        assert len(await store.list()) == 10

    @pytest.mark.asyncio
    async def test_persists_after_every_append(self, store, questions_repo):
        await store.append(_create("first", file_url="/uploads/1-a.txt"))

        document = questions_repo.load_all()
        assert document["lastId"] == 1
        assert document["questions"][0]["question"] == "first"
        assert document["questions"][0]["fileUrl"] == "/uploads/1-a.txt"
        assert "correctAnswer" in document["questions"][0]
        assert "createdAt" in document["questions"][0]

    @pytest.mark.asyncio
    async def test_failed_flush_leaves_memory_untouched(self, store, monkeypatch):
        await store.append(_create("kept"))

        def failing_save(data):
            raise PersistenceFailure(store.path, "disk full")

        monkeypatch.setattr(store._repository, "save_all", failing_save)
        with pytest.raises(PersistenceFailure):
            await store.append(_create("lost"))

        monkeypatch.undo()
        assert [q.question for q in await store.list()] == ["kept"]
        # The failed call did not consume an id
        assert (await store.append(_create("next"))).id == 2


class TestRead:

    @pytest.mark.asyncio
    async def test_get_round_trip(self, store):
        created = await store.append(
            _create("Round?", options=["A. 1", "B. 2"], correct_answer="B. 2", marks=3)
        )
        fetched = await store.get(created.id)
        assert fetched == created

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, store):
        await store.append(_create())
        with pytest.raises(QuestionNotFound) as exc_info:
            await store.get(42)
        assert exc_info.value.question_id == 42

    @pytest.mark.asyncio
    async def test_list_is_a_snapshot(self, store):
        await store.append(_create("one"))
        snapshot = await store.list()
        snapshot[0].options.append("tampered")
        snapshot.clear()

        listed = await store.list()
        assert len(listed) == 1
        assert listed[0].options == []

    @pytest.mark.asyncio
    async def test_lookup_keys_by_id(self, store):
        await store.append(_create("one"))
        await store.append(_create("two"))
        lookup = await store.lookup()
        assert set(lookup) == {1, 2}
        assert lookup[2].question == "two"


class TestLoad:

    @pytest.mark.asyncio
    async def test_reload_restores_questions_and_counter(self, store, questions_repo):
        created = [await store.append(_create(f"Q{i}")) for i in range(3)]

        reloaded = QuestionStore(questions_repo)
        reloaded.load()
        assert await reloaded.list() == created
        assert (await reloaded.append(_create("next"))).id == 4

    @pytest.mark.asyncio
    async def test_legacy_bare_list(self, settings):
        legacy = [
            {
                "id": 1,
                "question": "1. Old?",
                "options": ["A. yes", "B. no"],
                "correctAnswer": "A. yes",
                "marks": 1,
                "createdAt": "2024-03-01T10:00:00.000Z",
            },
            {
                "id": 2,
                "question": "2. Older?",
                "options": [],
                "correctAnswer": "",
                "marks": 2,
                "createdAt": "2024-03-01T10:05:00.000Z",
            },
        ]
        with open(settings.questions_file, "w", encoding="utf-8") as f:
            json.dump(legacy, f)

        store = QuestionStore(JsonFileRepository(settings.questions_file))
        store.load()
        assert [q.id for q in await store.list()] == [1, 2]
        assert (await store.get(1)).correct_answer == "A. yes"
        assert (await store.append(_create("new"))).id == 3

    def test_missing_file_is_empty_store(self, questions_repo):
        store = QuestionStore(questions_repo)
        store.load()
        assert store._last_id == 0

    def test_corrupt_record_is_persistence_failure(self, settings):
        with open(settings.questions_file, "w", encoding="utf-8") as f:
            json.dump([{"id": "not-a-number"}], f)

        store = QuestionStore(JsonFileRepository(settings.questions_file))
        with pytest.raises(PersistenceFailure):
            store.load()

    def test_counter_never_goes_below_existing_ids(self, settings):
        document = {
            "lastId": 1,
            "questions": [
                {"id": 5, "question": "Q", "createdAt": "2024-03-01T10:00:00Z"},
            ],
        }
        with open(settings.questions_file, "w", encoding="utf-8") as f:
            json.dump(document, f)

        store = QuestionStore(JsonFileRepository(settings.questions_file))
        store.load()
        assert store._last_id == 5

    @pytest.mark.parametrize(
        "document",
        [
            {"lastId": None, "questions": []},
            {"lastId": "3", "questions": []},
            {"lastId": True, "questions": []},
            {"lastId": 0, "questions": None},
            {"lastId": 0, "questions": {"id": 1}},
        ],
    )
    def test_malformed_envelope_is_persistence_failure(self, settings, document):
        with open(settings.questions_file, "w", encoding="utf-8") as f:
            json.dump(document, f)

        store = QuestionStore(JsonFileRepository(settings.questions_file))
        with pytest.raises(PersistenceFailure):
            store.load()
        assert store._last_id == 0
