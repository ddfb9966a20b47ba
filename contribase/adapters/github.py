"""GitHub adapter for OAuth sign-in.

GitHub OAuth 2.0 로그인 흐름을 처리합니다.
1. sign_in: GitHub authorize URL 생성 (state에 callback URL 서명)
2. exchange_code_for_token: 인증 code를 access token으로 교환
3. get_user_info: access token으로 사용자 정보 조회
"""
import logging
import httpx
from typing import Dict, Any, Optional
from urllib.parse import urlencode

from pydantic import BaseModel

from contribase.server.security import SessionTokenError, issue_state_token
from contribase.server.settings import settings

logger = logging.getLogger(__name__)

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_API_URL = "https://api.github.com"

SUPPORTED_PROVIDERS = ("github",)


class SignInError(Exception):
    """Raised when a sign-in flow cannot be started."""


class SignInResult(BaseModel):
    """sign_in 호출 결과.

    Attributes:
        ok: 로그인 흐름 시작 성공 여부
        url: 브라우저가 이동할 provider authorize URL
        error: 실패 시 오류 코드
        status: HTTP 상태 코드에 대응하는 값
        redirect: 호출자가 즉시 url로 이동시켜야 하는지 여부
    """
    ok: bool
    url: Optional[str] = None
    error: Optional[str] = None
    status: int = 200
    redirect: bool = True


def build_authorize_url(state: str) -> str:
    """GitHub authorize URL을 만듭니다."""
    query = urlencode({
        "client_id": settings.GITHUB_CLIENT_ID,
        "redirect_uri": settings.GITHUB_REDIRECT_URI,
        "scope": settings.GITHUB_OAUTH_SCOPE,
        "state": state,
        "allow_signup": "true",
    })
    return f"{GITHUB_AUTHORIZE_URL}?{query}"


async def sign_in(provider: str, *, callback_url: str, redirect: bool = True) -> SignInResult:
    """OAuth 로그인 흐름을 시작합니다.

    Args:
        provider: OAuth provider 이름 (현재 "github"만 지원)
        callback_url: 로그인 완료 후 돌아갈 URL (절대 URL 또는 상대 경로)
        redirect: True면 호출자가 바로 authorize URL로 리다이렉트

    Returns:
        authorize URL을 담은 SignInResult

    Raises:
        SignInError: 지원하지 않는 provider, OAuth 설정 누락
    """
    if provider not in SUPPORTED_PROVIDERS:
        raise SignInError(f"Unsupported provider: {provider}")

    if not settings.GITHUB_CLIENT_ID or not settings.GITHUB_CLIENT_SECRET:
        logger.error("GitHub OAuth credentials not configured")
        raise SignInError("GitHub OAuth credentials not configured")

    try:
        state = issue_state_token(callback_url)
    except SessionTokenError as exc:
        raise SignInError(f"Cannot sign OAuth state: {exc}") from exc

    logger.info(f"Starting GitHub sign-in (callback={callback_url}, redirect={redirect})")
    return SignInResult(ok=True, url=build_authorize_url(state), redirect=redirect)


async def exchange_code_for_token(code: str) -> Optional[str]:
    """GitHub OAuth code를 access token으로 교환합니다.

    Args:
        code: GitHub OAuth authorization code

    Returns:
        Access token 문자열, 실패 시 None
    """
    if not settings.GITHUB_CLIENT_ID or not settings.GITHUB_CLIENT_SECRET:
        logger.error("GitHub OAuth credentials not configured")
        return None

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                GITHUB_TOKEN_URL,
                headers={"Accept": "application/json"},
                data={
                    "client_id": settings.GITHUB_CLIENT_ID,
                    "client_secret": settings.GITHUB_CLIENT_SECRET,
                    "code": code,
                    "redirect_uri": settings.GITHUB_REDIRECT_URI,
                }
            )

            response.raise_for_status()
            data = response.json()

            access_token = data.get("access_token")
            if not access_token:
                logger.error(f"No access token in response: {data.get('error', data)}")
                return None

            logger.info("Successfully exchanged code for access token")
            return access_token

    except httpx.HTTPError as e:
        logger.error(f"Failed to exchange code for token: {e}")
        return None


async def get_user_info(access_token: str) -> Optional[Dict[str, Any]]:
    """GitHub access token으로 사용자 정보를 가져옵니다.

    Returns:
        사용자 정보 딕셔너리 (id, login, email, name, avatar_url), 실패 시 None
    """
    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {access_token}",
        "X-GitHub-Api-Version": "2022-11-28"
    }

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{GITHUB_API_URL}/user", headers=headers)
            response.raise_for_status()
            user_data = response.json()

            # 공개 이메일이 없으면 primary 이메일 조회
            email = user_data.get("email")
            if not email:
                try:
                    email_response = await client.get(f"{GITHUB_API_URL}/user/emails", headers=headers)
                    email_response.raise_for_status()
                    emails = email_response.json()

                    for email_item in emails:
                        if email_item.get("primary"):
                            email = email_item.get("email")
                            break

                    if not email and emails:
                        email = emails[0].get("email")

                except httpx.HTTPError as e:
                    logger.warning(f"Failed to fetch user emails: {e}")

            result = {
                "id": user_data["id"],
                "login": user_data["login"],
                "email": email,
                "name": user_data.get("name"),
                "avatar_url": user_data.get("avatar_url")
            }

            logger.info(f"Successfully fetched user info for {result['login']}")
            return result

    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch user info: {e}")
        return None
    except (KeyError, TypeError) as e:
        logger.error(f"Unexpected GitHub user payload: {e}")
        return None
