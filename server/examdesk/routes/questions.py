from fastapi import APIRouter, Depends
from typing import List

from examdesk.dependencies import get_question_store
from examdesk.schemas import Question, QuestionCreate, QuestionCreatedResponse
from examdesk.services.question_store import QuestionStore

router = APIRouter(tags=["Questions"])


@router.post("/questions", response_model=QuestionCreatedResponse)
async def create_question(
    request: QuestionCreate,
    store: QuestionStore = Depends(get_question_store),
):
    """
    Register a question, typically one confirmed from a parsed file.
    Options and correct answer are stored as given.
    """
    question = await store.append(request)
    return {"message": "Question added successfully", "question": question}


@router.get("/questions", response_model=List[Question])
async def list_questions(store: QuestionStore = Depends(get_question_store)):
    return await store.list()


@router.get("/questions/{question_id}", response_model=Question)
async def get_question(question_id: int, store: QuestionStore = Depends(get_question_store)):
    return await store.get(question_id)
