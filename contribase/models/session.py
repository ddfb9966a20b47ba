"""Session model and observable session state.

GitHub OAuth로 로그인한 사용자의 세션 상태를 표현합니다.
페이지 컨트롤러는 SessionState를 주입받아 상태 변화만 구독하며,
세션 상태를 직접 변경하지 않습니다.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    """세션 상태.

    - loading: 세션 확인 중
    - authenticated: 로그인 확인됨
    - unauthenticated: 세션 없음 (또는 만료/위조)
    """
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionUser(BaseModel):
    """세션에 담기는 GitHub 사용자 정보.

    Attributes:
        github_id: GitHub 사용자 ID
        username: GitHub 사용자명 (login)
        email: 사용자 이메일 (optional)
        name: 사용자 표시 이름 (optional)
        avatar_url: 프로필 이미지 URL (optional)
    """
    github_id: int = Field(..., description="GitHub user ID")
    username: str = Field(..., description="GitHub username")
    email: Optional[str] = Field(None, description="User email")
    name: Optional[str] = Field(None, description="User display name")
    avatar_url: Optional[str] = Field(None, description="Avatar image URL")

    class Config:
        json_schema_extra = {
            "example": {
                "github_id": 12345678,
                "username": "parkj",
                "email": "parkj@example.com",
                "name": "Park J",
                "avatar_url": "https://avatars.githubusercontent.com/u/12345678",
            }
        }

    @classmethod
    def from_github(cls, payload: dict) -> "SessionUser":
        """GitHub /user 응답(get_user_info 결과)에서 생성합니다."""
        return cls(
            github_id=payload["id"],
            username=payload["login"],
            email=payload.get("email"),
            name=payload.get("name"),
            avatar_url=payload.get("avatar_url"),
        )


StatusListener = Callable[[SessionStatus], None]


class SessionState:
    """외부에서 관리되는 세션 상태의 observable.

    상태가 실제로 바뀔 때만 구독자에게 알립니다.
    같은 상태로 update를 반복 호출해도 알림은 한 번뿐입니다.
    """

    def __init__(
        self,
        status: SessionStatus = SessionStatus.LOADING,
        user: Optional[SessionUser] = None,
    ):
        self._status = status
        self._user = user
        self._listeners: List[StatusListener] = []

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """상태 변화 구독. 반환된 함수를 호출하면 구독이 해제됩니다."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, status: SessionStatus, user: Optional[SessionUser] = None) -> None:
        """세션 상태를 갱신하고 상태 전이가 있으면 구독자에게 알립니다."""
        self._user = user if status == SessionStatus.AUTHENTICATED else None
        if status == self._status:
            return

        logger.debug("Session status %s -> %s", self._status.value, status.value)
        self._status = status
        for listener in list(self._listeners):
            listener(status)
