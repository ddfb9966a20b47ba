"""Callback URL resolution.

상대 경로 callback은 배포 환경에 따라 정해지는 base URL에 붙여 절대 URL로 만듭니다.
base URL 후보는 시작 시 한 번 설정에서 읽어 CallbackBaseConfig로 고정합니다.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from pydantic import BaseModel, Field, field_validator

ABSOLUTE_URL_PREFIXES = ("http://", "https://")


def is_absolute_url(value: str) -> bool:
    """http:// 또는 https:// 로 시작하면 절대 URL로 간주합니다."""
    return value.lower().startswith(ABSOLUTE_URL_PREFIXES)


class CallbackBaseConfig(BaseModel):
    """우선순위 순서의 base URL 후보 목록.

    Attributes:
        candidates: 앞쪽이 우선. 비어 있는 값은 건너뜁니다.
    """
    candidates: Tuple[str, ...] = Field(..., min_length=1)

    class Config:
        frozen = True

    @field_validator("candidates")
    @classmethod
    def _require_usable_candidate(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not any(candidate.strip() for candidate in value):
            raise ValueError("at least one non-empty base URL candidate is required")
        return value

    @classmethod
    def from_candidates(cls, candidates: Iterable[str]) -> "CallbackBaseConfig":
        return cls(candidates=tuple(candidates))

    @classmethod
    def from_settings(cls, settings) -> "CallbackBaseConfig":
        return cls.from_candidates(settings.callback_base_candidates())

    @property
    def base_url(self) -> str:
        for candidate in self.candidates:
            candidate = candidate.strip()
            if candidate:
                return candidate.rstrip("/")
        # validator guarantees a usable candidate
        raise ValueError("no base URL candidate")

    def resolve(self, callback: str) -> str:
        """callback을 절대 URL로 만듭니다.

        Examples:
            >>> config = CallbackBaseConfig.from_candidates(["https://contribase.app"])
            >>> config.resolve("/projects")
            'https://contribase.app/projects'
            >>> config.resolve("https://example.com/x")
            'https://example.com/x'
        """
        if is_absolute_url(callback):
            return callback
        return f"{self.base_url}/{callback.lstrip('/')}"

    def is_same_origin(self, url: str) -> bool:
        """url이 base URL과 같은 origin인지 확인합니다."""
        base = self.base_url
        return url == base or url.startswith(base + "/") or url.startswith(base + "?")
