"""
FastAPI dependencies resolving the process-wide services from app state.
"""
from fastapi import Request

from examdesk.config import Settings
from examdesk.services.question_store import QuestionStore
from examdesk.services.result_log import ResultLog


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_question_store(request: Request) -> QuestionStore:
    return request.app.state.question_store


def get_result_log(request: Request) -> ResultLog:
    return request.app.state.result_log
