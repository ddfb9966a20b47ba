"""GitHub OAuth authentication endpoints.

엔드포인트:
- GET  /auth/github: GitHub 인증 핸드오프 화면 (AuthRedirectPage)
- POST /auth/github/retry: 오류 화면의 "다시 시도하기" 버튼
- GET  /auth/callback/{provider}: OAuth provider 콜백, 세션 쿠키 발급
- GET  /auth/session: 현재 세션 상태
- POST /auth/signout: 로그아웃

인증 흐름:
1. /auth/github 가 callback URL을 절대 URL로 만들어 로그인 시작
2. GitHub에서 사용자가 승인하면 /auth/callback/github?code=...&state=... 로 돌아옴
3. code를 access token으로 교환하고 사용자 정보를 조회해 세션 JWT 쿠키 발급
4. state에 서명되어 있던 callback URL로 이동 (같은 origin만 허용)
"""
import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from contribase.adapters import github
from contribase.models.session import SessionState, SessionUser
from contribase.pages.auth_redirect import AuthRedirectPage, SignInFn
from contribase.pages.callback import CallbackBaseConfig
from contribase.server.deps import (
    get_callback_config,
    get_session_state,
    get_session_token,
    get_sign_in,
)
from contribase.server.schemas import ErrorDetail, ErrorResponse, SessionResponse
from contribase.server.security import (
    SessionTokenError,
    issue_session_token,
    load_session,
    verify_state_token,
)
from contribase.server.settings import settings
from contribase.server.templating import templates

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

AUTH_PAGE_PATH = "/auth/github"

# OAuth 오류 코드 (/auth/github?error=... 로 전달)
ERROR_ACCESS_DENIED = "AccessDenied"
ERROR_OAUTH_CALLBACK = "OAuthCallback"
ERROR_CONFIGURATION = "Configuration"


class RedirectNavigator:
    """AuthRedirectPage의 navigator. 이동 요청을 HTTP 리다이렉트로 바꿉니다."""

    def __init__(self):
        self.target: Optional[str] = None

    def push(self, path: str) -> None:
        self.target = path


def _render_auth_page(request: Request, page: AuthRedirectPage) -> HTMLResponse:
    view = page.view()
    return templates.TemplateResponse(
        request,
        "auth_github.html",
        {
            "view": view,
            "title": "GitHub 인증 - Contribase",
            "redirect_url": view.redirect_url,
        },
    )


def _auth_error_redirect(error: str, callback_url: Optional[str] = None) -> RedirectResponse:
    params = {"error": error}
    if callback_url:
        params["callbackUrl"] = callback_url
    return RedirectResponse(
        f"{AUTH_PAGE_PATH}?{urlencode(params)}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


def _safe_redirect_target(callback_url: str, config: CallbackBaseConfig) -> str:
    """callback URL을 절대 URL로 만들고, 다른 origin이면 기본 경로로 대체합니다."""
    target = config.resolve(callback_url)
    if config.is_same_origin(target):
        return target
    logger.warning(f"Refusing cross-origin callback URL: {target}")
    return config.resolve(settings.DEFAULT_CALLBACK_PATH)


@router.get("/github", response_class=HTMLResponse)
async def github_auth_page(
    request: Request,
    session: SessionState = Depends(get_session_state),
    session_token: Optional[str] = Depends(get_session_token),
    sign_in: SignInFn = Depends(get_sign_in),
    callback_config: CallbackBaseConfig = Depends(get_callback_config),
):
    """GitHub 인증 핸드오프 화면.

    Query Parameters:
        callbackUrl: 로그인 후 이동할 경로 (기본값: /dashboard)
        error: provider가 전달한 오류 코드

    Returns:
        - 이미 로그인한 경우: /dashboard 로 307 리다이렉트
        - error 파라미터가 있는 경우: 오류 화면 (다시 시도하기 버튼)
        - 그 외: GitHub로 이동하는 화면 (meta refresh)
    """
    navigator = RedirectNavigator()
    page = AuthRedirectPage(
        session=session,
        navigator=navigator,
        query=dict(request.query_params),
        sign_in=sign_in,
        base_config=callback_config,
    )

    page.mount()
    try:
        load_session(session, session_token)
        await page.settle()
    finally:
        page.unmount()

    if navigator.target:
        return RedirectResponse(navigator.target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    return _render_auth_page(request, page)


@router.post("/github/retry")
async def retry_github_auth(
    request: Request,
    callback_url: str = Form(settings.DEFAULT_CALLBACK_PATH, alias="callbackUrl"),
    sign_in: SignInFn = Depends(get_sign_in),
    callback_config: CallbackBaseConfig = Depends(get_callback_config),
):
    """오류 화면의 "다시 시도하기" 버튼.

    원래 callback 값 그대로 redirect 모드 로그인을 시작합니다.
    """
    page = AuthRedirectPage(
        session=SessionState(),
        navigator=RedirectNavigator(),
        query={"callbackUrl": callback_url},
        sign_in=sign_in,
        base_config=callback_config,
    )

    result = await page.retry()
    if result is None or not result.url:
        return _render_auth_page(request, page)

    return RedirectResponse(result.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/callback/{provider}")
async def oauth_callback(
    provider: str,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    callback_config: CallbackBaseConfig = Depends(get_callback_config),
):
    """OAuth provider 콜백.

    Query Parameters:
        code: GitHub OAuth authorization code
        state: sign_in이 발급한 서명된 state 토큰
        error: 사용자가 승인을 거부했을 때 GitHub가 전달하는 오류

    Returns:
        성공 시 세션 쿠키와 함께 callback URL로 303 리다이렉트,
        실패 시 /auth/github?error=... 로 303 리다이렉트
    """
    if provider not in github.SUPPORTED_PROVIDERS:
        body = ErrorResponse(error=ErrorDetail(
            type="SignInError",
            message=f"Unsupported provider: {provider}",
            code="UNSUPPORTED_PROVIDER",
        ))
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())

    callback_url: Optional[str] = None
    if state:
        try:
            callback_url = verify_state_token(state)
        except SessionTokenError as exc:
            logger.warning(f"Invalid OAuth state: {exc}")
            return _auth_error_redirect(ERROR_OAUTH_CALLBACK)

    if error:
        logger.info(f"GitHub returned OAuth error: {error}")
        code_name = ERROR_ACCESS_DENIED if error == "access_denied" else ERROR_OAUTH_CALLBACK
        return _auth_error_redirect(code_name, callback_url)

    if not code or not callback_url:
        return _auth_error_redirect(ERROR_OAUTH_CALLBACK, callback_url)

    access_token = await github.exchange_code_for_token(code)
    if not access_token:
        return _auth_error_redirect(ERROR_OAUTH_CALLBACK, callback_url)

    user_info = await github.get_user_info(access_token)
    if not user_info:
        return _auth_error_redirect(ERROR_OAUTH_CALLBACK, callback_url)

    user = SessionUser.from_github(user_info)
    try:
        session_token = issue_session_token(user)
    except SessionTokenError as exc:
        logger.error(f"Cannot issue session token: {exc}")
        return _auth_error_redirect(ERROR_CONFIGURATION, callback_url)

    target = _safe_redirect_target(callback_url, callback_config)
    logger.info(f"User {user.username} signed in, redirecting to {target}")

    response = RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session_token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=callback_config.base_url.startswith("https://"),
    )
    return response


@router.get("/session", response_model=SessionResponse)
async def get_session(
    session: SessionState = Depends(get_session_state),
    session_token: Optional[str] = Depends(get_session_token),
) -> SessionResponse:
    """현재 요청의 세션 상태를 반환합니다."""
    load_session(session, session_token)
    return SessionResponse(status=session.status, user=session.user)


@router.post("/signout")
async def sign_out():
    """세션 쿠키를 지우고 랜딩 페이지로 이동합니다."""
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
