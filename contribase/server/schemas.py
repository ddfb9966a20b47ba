"""Pydantic schemas for request/response models.

이 파일은 FastAPI 엔드포인트의 요청/응답 모델을 정의합니다.
"""
from typing import Optional
from pydantic import BaseModel

from contribase.models.session import SessionStatus, SessionUser


# ============================================================================
# Session 관련 스키마
# ============================================================================

class SessionResponse(BaseModel):
    """현재 요청의 세션 상태.

    Attributes:
        status: authenticated / unauthenticated
        user: 로그인한 사용자 정보 (로그인 상태일 때만)
    """
    status: SessionStatus
    user: Optional[SessionUser] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "authenticated",
                "user": {
                    "github_id": 12345678,
                    "username": "parkj",
                    "email": "parkj@example.com",
                    "name": "Park J",
                    "avatar_url": "https://avatars.githubusercontent.com/u/12345678"
                }
            }
        }


# ============================================================================
# Error 관련 스키마
# ============================================================================

class ErrorDetail(BaseModel):
    """에러 상세 정보 모델.

    Attributes:
        type: 에러 타입 (예: "SignInError")
        message: 사람이 읽을 수 있는 에러 메시지
        code: 선택적 에러 코드 (예: "UNSUPPORTED_PROVIDER")
    """
    type: str
    message: str
    code: Optional[str] = None


class ErrorResponse(BaseModel):
    """에러 응답 래퍼 모델.

    JSON 형식:
        {"error": {"type": "...", "message": "...", "code": "..."}}
    """
    error: ErrorDetail
