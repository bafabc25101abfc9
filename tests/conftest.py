import pytest
import httpx
from pos_skills.utils.config import PosSettings, get_settings

POS_ENV_VARS = (
    "POS_API_KEY",
    "API_KEY",
    "SHOP_ID",
    "POS_BASE_URL",
    "POS_TIMEOUT",
    "CONFIRM_WRITE",
    "POS_ENVIRONMENT",
    "LOG_LEVEL",
)

BASE_URL = "https://pos.pages.fm/api/v1"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Each test starts from an empty POS environment and a fresh settings cache."""
    for name in POS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pos_env(monkeypatch):
    monkeypatch.setenv("SHOP_ID", "123")
    monkeypatch.setenv("POS_API_KEY", "abc")
    return monkeypatch


@pytest.fixture
def make_settings():
    def _make(**values):
        return PosSettings(_env_file=None, **values)
    return _make


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, response=None, error=None):
        self.requests = []
        self.response = response or httpx.Response(200, content=b'{"success":true,"data":[]}')
        self.error = error
        super().__init__(self._handle)

    def _handle(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def transport():
    return RecordingTransport()
