"""GitHub OAuth handoff page controller.

페이지가 마운트되면 세션 상태를 확인하고:
1. 세션 확인 중(loading)이면 다음 상태 변화를 기다림
2. 이미 로그인(authenticated)이면 /dashboard로 이동
3. error 쿼리 파라미터가 있으면 오류 화면 표시 (로그인 시도 안 함)
4. 그 외에는 callback URL을 절대 URL로 만들어 GitHub 로그인 시작

세션 상태, 쿼리 파라미터가 바뀔 때마다 effect가 다시 실행됩니다.
실행마다 generation이 증가하며, 이전 generation의 로그인 결과는 무시합니다.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Literal, Mapping, Optional, Protocol, Set

from pydantic import BaseModel

from contribase.adapters.github import SignInResult
from contribase.models.session import SessionState, SessionStatus
from contribase.pages import messages
from contribase.pages.callback import CallbackBaseConfig

logger = logging.getLogger(__name__)

DEFAULT_CALLBACK_URL = "/dashboard"
DASHBOARD_PATH = "/dashboard"
PROVIDER = "github"


class Navigator(Protocol):
    def push(self, path: str) -> None: ...


class SignInFn(Protocol):
    def __call__(
        self, provider: str, *, callback_url: str, redirect: bool = True
    ) -> Awaitable[SignInResult]: ...


class AuthView(BaseModel):
    """렌더링할 화면 상태.

    Attributes:
        state: loading / error / success 중 하나
        message: 화면에 표시할 문구
        callback_url: 다시 시도 버튼이 사용할 원래 callback 값
        redirect_url: success 상태에서 이동할 provider URL
    """
    state: Literal["loading", "error", "success"]
    message: str
    callback_url: str
    redirect_url: Optional[str] = None


class AuthRedirectPage:
    """GitHub 로그인 핸드오프 화면의 상태 머신."""

    def __init__(
        self,
        session: SessionState,
        navigator: Navigator,
        query: Mapping[str, str],
        sign_in: SignInFn,
        base_config: CallbackBaseConfig,
    ):
        self._session = session
        self._navigator = navigator
        self._query = dict(query)
        self._sign_in = sign_in
        self._base_config = base_config

        self.is_loading = True
        self.error: Optional[str] = None
        self.sign_in_result: Optional[SignInResult] = None

        self._generation = 0
        self._mounted = False
        self._closed = False
        self._unsubscribe = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def callback_url(self) -> str:
        return self._query.get("callbackUrl") or DEFAULT_CALLBACK_URL

    @property
    def auth_status(self) -> SessionStatus:
        return self._session.status

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """세션 상태를 구독하고 effect를 한 번 실행합니다."""
        if self._mounted:
            return
        self._mounted = True
        self._closed = False
        self._unsubscribe = self._session.subscribe(self._on_status_change)
        self._schedule()

    def unmount(self) -> None:
        """구독 해제, 진행 중인 effect 취소. 이후의 결과는 모두 무시됩니다."""
        self._closed = True
        self._generation += 1
        if not self._mounted:
            return
        self._mounted = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        for task in list(self._tasks):
            task.cancel()

    def update_query(self, query: Mapping[str, str]) -> None:
        self._query = dict(query)
        if self._mounted:
            self._schedule()

    async def settle(self) -> None:
        """예약된 effect 실행이 모두 끝날 때까지 기다립니다."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_status_change(self, status: SessionStatus) -> None:
        self._schedule()

    def _schedule(self) -> asyncio.Task:
        self._generation += 1
        task = asyncio.get_running_loop().create_task(
            self.run_effect(self._generation, self._session.status)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._generation

    def _is_retry_current(self, generation: int) -> bool:
        # retry는 마운트 없이도 호출됩니다 (POST /auth/github/retry)
        return not self._closed and generation == self._generation

    async def run_effect(self, generation: int, status: SessionStatus) -> None:
        """effect 본문. status는 예약 시점의 값입니다."""
        if status == SessionStatus.LOADING:
            return

        if status == SessionStatus.AUTHENTICATED:
            self._navigator.push(DASHBOARD_PATH)
            return

        if not self._is_current(generation):
            logger.debug("Skipping superseded effect run (generation %s)", generation)
            return

        error_param = self._query.get("error")
        if error_param:
            self.is_loading = False
            self.error = messages.provider_error(error_param)
            return

        self.is_loading = True
        try:
            target = self._base_config.resolve(self.callback_url)
            result = await self._sign_in(PROVIDER, callback_url=target, redirect=False)
        except Exception as exc:
            if not self._is_current(generation):
                logger.debug("Ignoring stale sign-in failure (generation %s)", generation)
                return
            logger.warning("GitHub sign-in failed to start: %s", exc)
            self._fail()
            return

        if not self._is_current(generation):
            logger.debug("Ignoring stale sign-in result (generation %s)", generation)
            return

        if not result.ok:
            logger.warning("GitHub sign-in returned error: %s", result.error)
            self._fail()
            return

        self.sign_in_result = result
        self.is_loading = False
        self.error = None

    async def retry(self) -> Optional[SignInResult]:
        """다시 시도 버튼. 원래 callback 값으로 redirect 모드 로그인을 시작합니다.

        진행 중인 effect 결과는 무시되며, 언마운트 이후 도착한 결과도 반영하지 않습니다.
        """
        if self._closed:
            return None
        self._generation += 1
        generation = self._generation
        self.is_loading = True
        self.error = None
        try:
            result = await self._sign_in(PROVIDER, callback_url=self.callback_url, redirect=True)
        except Exception as exc:
            if not self._is_retry_current(generation):
                logger.debug("Ignoring sign-in retry failure after unmount")
                return None
            logger.warning("GitHub sign-in retry failed: %s", exc)
            self._fail()
            return None

        if not self._is_retry_current(generation):
            logger.debug("Ignoring sign-in retry result after unmount")
            return None

        if not result.ok:
            self._fail()
            return None

        self.sign_in_result = result
        self.is_loading = False
        return result

    def _fail(self) -> None:
        self.is_loading = False
        self.error = messages.AUTH_SIGN_IN_FAILED

    def view(self) -> AuthView:
        if self.is_loading:
            return AuthView(state="loading", message=messages.AUTH_LOADING, callback_url=self.callback_url)
        if self.error:
            return AuthView(state="error", message=self.error, callback_url=self.callback_url)
        return AuthView(
            state="success",
            message=messages.AUTH_SUCCESS,
            callback_url=self.callback_url,
            redirect_url=self.sign_in_result.url if self.sign_in_result else None,
        )
