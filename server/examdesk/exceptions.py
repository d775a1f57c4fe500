"""
Error taxonomy shared by the core services and the HTTP layer.
"""


class ExamDeskError(Exception):
    """Base class for every error raised by the exam services."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ExamDeskError):
    status_code = 404


class QuestionNotFound(NotFound):
    def __init__(self, question_id: int):
        super().__init__("Question not found")
        self.question_id = question_id


class BadInput(ExamDeskError):
    status_code = 400


class PersistenceFailure(ExamDeskError):
    """A persisted resource could not be read or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to access {path}: {reason}")
        self.path = path
        self.reason = reason
