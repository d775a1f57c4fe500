from fastapi import APIRouter, Depends
from typing import List

from examdesk.dependencies import get_question_store, get_result_log
from examdesk.schemas import ExamResult, SubmitExamRequest
from examdesk.services.grader import grade_submission
from examdesk.services.question_store import QuestionStore
from examdesk.services.result_log import ResultLog

router = APIRouter(tags=["Exam"])


@router.post("/submit-exam", response_model=ExamResult)
async def submit_exam(
    request: SubmitExamRequest,
    store: QuestionStore = Depends(get_question_store),
    result_log: ResultLog = Depends(get_result_log),
):
    """
    Student submits their exam. The graded result is logged before it is returned.
    """
    questions = await store.lookup()
    result = grade_submission(request.student_name, request.answers, questions)
    await result_log.append(result)
    return result


@router.get("/results", response_model=List[ExamResult])
async def get_exam_results(result_log: ResultLog = Depends(get_result_log)):
    """
    All logged results, oldest first
    """
    return await result_log.history()
