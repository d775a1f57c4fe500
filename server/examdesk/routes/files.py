from fastapi import APIRouter, Depends, File, UploadFile
from typing import Optional

from examdesk.config import Settings
from examdesk.dependencies import get_settings
from examdesk.exceptions import BadInput
from examdesk.schemas import ParsedFile, UploadedFile
from examdesk.services.content_parser import parse_bytes
from examdesk.services.uploads import StoredUpload, save_upload

router = APIRouter(tags=["Files"])


def _store_file(file: Optional[UploadFile], settings: Settings) -> StoredUpload:
    if file is None:
        raise BadInput("No file uploaded")
    return save_upload(
        settings.upload_dir,
        file.filename,
        file.file,
        max_bytes=settings.max_upload_size_bytes,
    )


@router.post("/upload", response_model=UploadedFile)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
):
    stored = _store_file(file, settings)
    return {
        "message": "File uploaded successfully",
        "filename": stored.filename,
        "originalname": stored.originalname,
        "path": stored.path,
    }


@router.post("/parse-file", response_model=ParsedFile)
async def parse_file(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
):
    """
    Store the file and return the questions found in its text.
    Nothing is added to the question bank until each one is posted to /questions.
    """
    stored = _store_file(file, settings)
    questions = list(parse_bytes(stored.read_bytes()))
    return {
        "message": "File parsed successfully",
        "questions": questions,
        "file_url": stored.path,
    }
