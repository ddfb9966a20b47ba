"""화면에 표시되는 문구."""

AUTH_TITLE = "GitHub 인증"
AUTH_LOADING = "GitHub 계정에 연결 중입니다..."
AUTH_SUCCESS = "연결 중... 대시보드로 이동합니다"
AUTH_RETRY = "다시 시도하기"
AUTH_NOTICE = (
    "GitHub 계정을 연결하면 Contribase가 공개 저장소에 접근할 수 있게 됩니다. "
    "저희는 귀하의 개인 정보를 보호하며, 모든 분석은 클라이언트 측에서 처리됩니다."
)

AUTH_PROVIDER_ERROR = "GitHub 인증 중 오류가 발생했습니다: {error}"
AUTH_SIGN_IN_FAILED = "GitHub 인증을 시작하는 중 오류가 발생했습니다."


def provider_error(error: str) -> str:
    return AUTH_PROVIDER_ERROR.format(error=error)
