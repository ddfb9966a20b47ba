"""Security utilities for session cookies and OAuth state tokens.

세션 쿠키와 OAuth state 파라미터는 모두 SESSION_SECRET으로 서명한 JWT입니다.
- session token: 로그인한 GitHub 사용자 정보
- state token: 로그인 후 돌아갈 callback URL (위조 방지 + 만료)
"""
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt import InvalidTokenError

from contribase.models.session import SessionState, SessionStatus, SessionUser
from contribase.server.settings import settings

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"
STATE_TOKEN_TYPE = "oauth_state"


class SessionTokenError(Exception):
    """Raised when a session or state token cannot be verified."""


def _get_secret() -> str:
    if not settings.SESSION_SECRET:
        raise SessionTokenError("SESSION_SECRET is not configured")
    return settings.SESSION_SECRET


def _encode(claims: Dict[str, Any], ttl_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, _get_secret(), algorithm=settings.SESSION_JWT_ALGORITHM)


def _decode(token: str, expected_type: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            _get_secret(),
            algorithms=[settings.SESSION_JWT_ALGORITHM],
        )
    except InvalidTokenError as exc:
        logger.warning("Token verification failed: %s", exc)
        raise SessionTokenError(str(exc)) from exc

    if payload.get("typ") != expected_type:
        raise SessionTokenError(f"Unexpected token type: {payload.get('typ')}")
    return payload


def issue_session_token(user: SessionUser) -> str:
    """로그인한 사용자에 대한 세션 JWT를 발급합니다."""
    return _encode(
        {"typ": SESSION_TOKEN_TYPE, "sub": str(user.github_id), "user": user.model_dump()},
        settings.SESSION_MAX_AGE_SECONDS,
    )


def verify_session_token(token: str) -> SessionUser:
    """세션 JWT를 검증하고 사용자 정보를 반환합니다.

    Raises:
        SessionTokenError: 서명 불일치, 만료, 형식 오류
    """
    payload = _decode(token, SESSION_TOKEN_TYPE)
    try:
        return SessionUser(**payload["user"])
    except (KeyError, TypeError, ValueError) as exc:
        raise SessionTokenError("Malformed session payload") from exc


def issue_state_token(callback_url: str) -> str:
    """OAuth state 파라미터로 쓸 서명된 토큰을 발급합니다."""
    return _encode(
        {"typ": STATE_TOKEN_TYPE, "cb": callback_url, "nonce": secrets.token_urlsafe(16)},
        settings.OAUTH_STATE_TTL_SECONDS,
    )


def verify_state_token(token: str) -> str:
    """state 토큰을 검증하고 그 안의 callback URL을 반환합니다."""
    payload = _decode(token, STATE_TOKEN_TYPE)
    callback_url = payload.get("cb")
    if not isinstance(callback_url, str) or not callback_url:
        raise SessionTokenError("State token missing callback URL")
    return callback_url


def load_session(state: SessionState, token: Optional[str]) -> SessionState:
    """쿠키의 세션 토큰으로 SessionState를 loading에서 확정 상태로 옮깁니다."""
    if not token:
        state.update(SessionStatus.UNAUTHENTICATED)
        return state

    try:
        user = verify_session_token(token)
    except SessionTokenError:
        state.update(SessionStatus.UNAUTHENTICATED)
        return state

    state.update(SessionStatus.AUTHENTICATED, user)
    return state
