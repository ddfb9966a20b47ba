"""Application settings loaded from environment variables."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application configuration settings."""

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # Callback base URL 후보 (우선순위 순서)
    VERCEL_URL: Optional[str] = None  # 배포 환경이 주입하는 호스트 (scheme 없음)
    SITE_URL: Optional[str] = None
    LOCAL_FALLBACK_URL: str = "http://localhost:8000"
    DEFAULT_CALLBACK_PATH: str = "/dashboard"

    # GitHub OAuth
    GITHUB_CLIENT_ID: Optional[str] = None
    GITHUB_CLIENT_SECRET: Optional[str] = None
    GITHUB_REDIRECT_URI: str = "http://localhost:8000/auth/callback/github"
    GITHUB_OAUTH_SCOPE: str = "read:user user:email"

    # Session (JWT cookie)
    SESSION_SECRET: Optional[str] = None
    SESSION_COOKIE_NAME: str = "contribase.session"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 30  # 30일
    SESSION_JWT_ALGORITHM: str = "HS256"
    OAUTH_STATE_TTL_SECONDS: int = 600

    # Landing page
    LANDING_READY_TIMEOUT_SECONDS: float = 2.0
    ASSET_WARMUP_INTERVAL_MINUTES: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = True

    def callback_base_candidates(self) -> List[str]:
        """Callback base URL 후보를 우선순위 순서로 반환합니다."""
        candidates: List[str] = []
        if self.VERCEL_URL:
            candidates.append(f"https://{self.VERCEL_URL}")
        if self.SITE_URL:
            candidates.append(self.SITE_URL)
        candidates.append(self.LOCAL_FALLBACK_URL)
        return candidates


settings = Settings()
