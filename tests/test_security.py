"""Tests for session and OAuth state tokens."""
import jwt
import pytest

from contribase.models.session import SessionState, SessionStatus
from contribase.server.security import (
    SessionTokenError,
    issue_session_token,
    issue_state_token,
    load_session,
    verify_session_token,
    verify_state_token,
)


def test_load_session_authenticated(session_user):
    state = SessionState()
    seen = []
    state.subscribe(seen.append)

    load_session(state, issue_session_token(session_user))

    assert state.status == SessionStatus.AUTHENTICATED
    assert state.user.username == "testuser"
    assert seen == [SessionStatus.AUTHENTICATED]


def test_load_session_without_token():
    state = load_session(SessionState(), None)

    assert state.status == SessionStatus.UNAUTHENTICATED
    assert state.user is None


def test_expired_session_token_rejected(session_user, _set_auth_settings):
    """만료된 세션 토큰은 거부되는지 테스트."""
    token = jwt.encode(
        {"typ": "session", "user": session_user.model_dump(), "exp": 1},
        _set_auth_settings.SESSION_SECRET,
        algorithm="HS256",
    )

    with pytest.raises(SessionTokenError):
        verify_session_token(token)
    assert load_session(SessionState(), token).status == SessionStatus.UNAUTHENTICATED


def test_state_token_cannot_be_used_as_session():
    """state 토큰을 세션 쿠키로 쓸 수 없는지 테스트."""
    token = issue_state_token("/dashboard")

    with pytest.raises(SessionTokenError):
        verify_session_token(token)
    assert verify_state_token(token) == "/dashboard"


def test_token_signed_with_other_secret_rejected(session_user, _set_auth_settings):
    token = issue_session_token(session_user)
    _set_auth_settings.SESSION_SECRET = "another-secret-value-that-is-long-enough"

    with pytest.raises(SessionTokenError):
        verify_session_token(token)


def test_missing_secret_raises(_set_auth_settings):
    _set_auth_settings.SESSION_SECRET = None

    with pytest.raises(SessionTokenError):
        issue_state_token("/dashboard")


def test_session_state_notifies_only_on_transition():
    state = SessionState()
    seen = []
    unsubscribe = state.subscribe(seen.append)

    state.update(SessionStatus.UNAUTHENTICATED)
    state.update(SessionStatus.UNAUTHENTICATED)
    unsubscribe()
    state.update(SessionStatus.LOADING)

    assert seen == [SessionStatus.UNAUTHENTICATED]
