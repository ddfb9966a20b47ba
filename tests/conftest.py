"""Pytest configuration and fixtures.

이 모듈은 모든 테스트에서 공유되는 pytest fixture들을 정의합니다.

주요 Fixture:
- client: FastAPI 테스트 클라이언트 (lifespan/스케줄러는 실행하지 않음)
- callback_config: 테스트용 callback base URL 설정
- mock_sign_in: 로그인 함수 mock (GitHub로 이동하지 않음)
- navigator: 이동 요청을 기록하는 navigator
- fake_timers: call_later를 대체하는 가상 타이머
- fake_document: load 이벤트를 직접 발생시킬 수 있는 document
- mock_github_api: GitHub OAuth API mock (httpx)
- session_cookie: 유효한 세션 쿠키
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch
from typing import Callable, List, Tuple

from contribase.adapters.github import SignInResult
from contribase.models.session import SessionUser
from contribase.pages.callback import CallbackBaseConfig
from contribase.server.main import app


TEST_BASE_URL = "https://contribase.test"
GITHUB_AUTHORIZE_PREFIX = "https://github.com/login/oauth/authorize"


@pytest.fixture(autouse=True)
def _set_auth_settings():
    """GitHub OAuth와 세션 서명 키를 테스트 값으로 설정합니다."""
    from contribase.server.settings import settings
    original = (settings.GITHUB_CLIENT_ID, settings.GITHUB_CLIENT_SECRET, settings.SESSION_SECRET)
    settings.GITHUB_CLIENT_ID = "test_client_id"
    settings.GITHUB_CLIENT_SECRET = "test_client_secret"
    settings.SESSION_SECRET = "test-session-secret-with-enough-length-for-hs256"
    yield settings
    settings.GITHUB_CLIENT_ID, settings.GITHUB_CLIENT_SECRET, settings.SESSION_SECRET = original


@pytest.fixture
def callback_config():
    return CallbackBaseConfig.from_candidates([TEST_BASE_URL])


@pytest.fixture
def client(callback_config):
    """FastAPI 테스트 클라이언트를 생성합니다.

    설명:
        - lifespan을 실행하지 않으므로 백그라운드 스케줄러가 시작되지 않음
        - callback base URL은 TEST_BASE_URL로 고정
        - 리다이렉트는 따라가지 않음 (Location 헤더 검증용)
    """
    from contribase.server.deps import get_callback_config
    app.dependency_overrides[get_callback_config] = lambda: callback_config
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_sign_in():
    """로그인 함수 mock.

    Returns:
        AsyncMock: 항상 GitHub authorize URL을 담은 성공 결과를 반환
    """
    async def _sign_in(provider, *, callback_url, redirect=True):
        return SignInResult(ok=True, url=f"{GITHUB_AUTHORIZE_PREFIX}?state=test", redirect=redirect)

    return AsyncMock(side_effect=_sign_in)


class RecordingNavigator:
    def __init__(self):
        self.pushed: List[str] = []

    def push(self, path: str) -> None:
        self.pushed.append(path)


@pytest.fixture
def navigator():
    return RecordingNavigator()


class FakeTimerHandle:
    def __init__(self, timers: "FakeTimers", when: float, callback: Callable[[], None]):
        self._timers = timers
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimers:
    """asyncio loop.call_later를 대체하는 가상 시계 (밀리초 단위로 진행)."""

    def __init__(self):
        self.now_ms = 0.0
        self.handles: List[FakeTimerHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimerHandle:
        handle = FakeTimerHandle(self, self.now_ms + delay * 1000, callback)
        self.handles.append(handle)
        return handle

    def advance(self, ms: float) -> None:
        target = self.now_ms + ms
        for handle in sorted(self.handles, key=lambda h: h.when):
            if handle.when <= target and not handle.cancelled:
                self.now_ms = handle.when
                handle.cancelled = True
                handle.callback()
        self.now_ms = target

    @property
    def pending(self) -> List[FakeTimerHandle]:
        return [h for h in self.handles if not h.cancelled]


@pytest.fixture
def fake_timers():
    return FakeTimers()


class FakeDocument:
    """브라우저 document 대용. fire_load()로 load 이벤트를 발생시킵니다."""

    def __init__(self, ready_state: str = "loading"):
        self.ready_state = ready_state
        self.listeners: List[Tuple[str, Callable[[], None]]] = []

    def add_event_listener(self, event, listener):
        self.listeners.append((event, listener))

    def remove_event_listener(self, event, listener):
        if (event, listener) in self.listeners:
            self.listeners.remove((event, listener))

    def fire_load(self):
        self.ready_state = "complete"
        for event, listener in list(self.listeners):
            if event == "load":
                listener()


@pytest.fixture
def fake_document():
    return FakeDocument()


@pytest.fixture
def session_user():
    return SessionUser(
        github_id=12345678,
        username="testuser",
        email="testuser@example.com",
        avatar_url="https://avatars.githubusercontent.com/u/12345678",
    )


@pytest.fixture
def session_cookie(session_user):
    """유효한 세션 쿠키 (이름, 값)."""
    from contribase.server.security import issue_session_token
    from contribase.server.settings import settings
    return settings.SESSION_COOKIE_NAME, issue_session_token(session_user)


@pytest.fixture
def mock_github_api():
    """GitHub OAuth API를 mocking합니다.

    설명:
        - POST /login/oauth/access_token: 액세스 토큰 반환
        - GET /user: 사용자 정보 반환 (testuser, id=12345678)
    """
    with patch('httpx.AsyncClient') as mock_client:
        mock_instance = AsyncMock()

        token_response = MagicMock()
        token_response.json.return_value = {"access_token": "gho_test_token"}

        user_response = MagicMock()
        user_response.json.return_value = {
            "id": 12345678,
            "login": "testuser",
            "email": "testuser@example.com",
            "name": "Test User",
            "avatar_url": "https://avatars.githubusercontent.com/u/12345678"
        }

        mock_instance.post = AsyncMock(return_value=token_response)
        mock_instance.get = AsyncMock(return_value=user_response)
        mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
        mock_instance.__aexit__ = AsyncMock(return_value=None)

        mock_client.return_value = mock_instance
        yield mock_instance
