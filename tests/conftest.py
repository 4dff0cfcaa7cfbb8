import httpx
import pytest
from fastapi.testclient import TestClient

from chat import ChatProxy
from main import app
from routes.chat import get_chat_proxy
from settings import Settings, get_settings
from storage import StudentStore, get_store


@pytest.fixture()
def students_file(tmp_path):
    return tmp_path / "students.json"


@pytest.fixture()
def store(students_file):
    """A store backed by a temporary file instead of ./students.json."""
    s = StudentStore(str(students_file))
    s.load()
    return s


@pytest.fixture()
def settings():
    s = Settings()
    s.openrouter_api_key = "test-key"
    s.chat_api_url = "https://llm.test/api/v1/chat/completions"
    return s


class FakeCompletionAPI:
    """Stands in for the completion API; records every request it receives."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"choices": [{"message": {"role": "assistant", "content": "  There are 2 students.  "}}]}
        self.raise_error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture()
def fake_api():
    return FakeCompletionAPI()


@pytest.fixture()
def client(store, settings, fake_api):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_chat_proxy] = lambda: ChatProxy(settings, transport=httpx.MockTransport(fake_api))
    yield TestClient(app)
    app.dependency_overrides.clear()
