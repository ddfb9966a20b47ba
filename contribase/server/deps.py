"""Dependency injection for FastAPI routes.

페이지 컨트롤러가 사용하는 외부 협력자(세션, 로그인 함수, base URL 설정, 정적 자산)를
요청마다 주입합니다. 테스트에서는 app.dependency_overrides로 교체합니다.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request

from contribase.adapters import github
from contribase.models.session import SessionState
from contribase.pages.assets import LandingAssets, landing_assets
from contribase.pages.auth_redirect import SignInFn
from contribase.pages.callback import CallbackBaseConfig
from contribase.server.settings import settings

logger = logging.getLogger(__name__)


def get_callback_config(request: Request) -> CallbackBaseConfig:
    """시작 시 만들어 둔 callback base URL 설정."""
    config = getattr(request.app.state, "callback_config", None)
    if config is None:
        config = CallbackBaseConfig.from_settings(settings)
        request.app.state.callback_config = config
    return config


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_session_state() -> SessionState:
    """아직 확인되지 않은(loading) 세션 상태."""
    return SessionState()


def get_sign_in() -> SignInFn:
    return github.sign_in


def get_landing_assets() -> LandingAssets:
    return landing_assets
