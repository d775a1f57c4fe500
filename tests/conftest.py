"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from examdesk.config import Settings
from examdesk.main import create_app
from examdesk.storage import JsonFileRepository


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every persisted resource into a temp dir"""
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        questions_file=str(tmp_path / "questions.json"),
        results_file=str(tmp_path / "exam-results.json"),
        max_upload_size_mb=1,
        log_level="DEBUG",
    )


@pytest.fixture
def questions_repo(settings):
    return JsonFileRepository(settings.questions_file)


@pytest.fixture
def results_repo(settings):
    return JsonFileRepository(settings.results_file)


@pytest.fixture
def client(settings):
    """Test client with startup handlers run"""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
