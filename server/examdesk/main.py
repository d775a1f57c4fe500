import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from examdesk.config import Settings, settings as default_settings
from examdesk.exceptions import ExamDeskError
from examdesk.routes import exam, files, questions
from examdesk.services.question_store import QuestionStore
from examdesk.services.result_log import ResultLog
from examdesk.storage import JsonFileRepository

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # StaticFiles refuses to mount a missing directory
    os.makedirs(settings.upload_dir, exist_ok=True)

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=settings.debug
    )
    app.state.settings = settings
    app.state.question_store = QuestionStore(JsonFileRepository(settings.questions_file))
    app.state.result_log = ResultLog(JsonFileRepository(settings.results_file))

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount static files for uploads
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.exception_handler(ExamDeskError)
    async def exam_desk_error_handler(request: Request, exc: ExamDeskError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.on_event("startup")
    async def startup_event():
        """Load persisted questions before serving requests"""
        app.state.question_store.load()
        logger.info("%s is starting...", settings.app_name)
        logger.info("Questions: %s", app.state.question_store.path)
        logger.info("Results: %s", app.state.result_log.path)
        logger.info("Uploads: %s", os.path.abspath(settings.upload_dir))

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    app.include_router(files.router, prefix="/api")
    app.include_router(questions.router, prefix="/api")
    app.include_router(exam.router, prefix="/api")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "examdesk.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
    )
