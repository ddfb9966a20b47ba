"""Landing page copy."""
from typing import List

from pydantic import BaseModel, Field


class LinkItem(BaseModel):
    label: str
    href: str


class FeatureCard(BaseModel):
    title: str
    description: str
    icon: str = Field("", description="SVG path data")


class RoadmapItem(BaseModel):
    title: str
    description: str


class HeroSection(BaseModel):
    title_lines: List[str]
    highlight: str
    subtitle_lines: List[str]
    actions: List[LinkItem]
    image_src: str
    image_alt: str


class CallToAction(BaseModel):
    title: str
    lines: List[str]
    link: LinkItem
    image_src: str


class LandingContent(BaseModel):
    """랜딩 페이지 전체 콘텐츠.

    스켈레톤 UI도 같은 구조(hero, 카드 3개, CTA)를 따릅니다.
    """
    hero: HeroSection
    features_title: str
    features_lines: List[str]
    features: List[FeatureCard]
    roadmap_title: str
    roadmap_intro: str
    roadmap: List[RoadmapItem]
    cta: CallToAction


LANDING_CONTENT = LandingContent(
    hero=HeroSection(
        title_lines=["GitHub 기여도를", "포트폴리오로"],
        highlight=" 자동 변환",
        subtitle_lines=[
            "규칙 기반 분석 시스템이 GitHub 기록을 분석하여",
            "개발자의 기술 스택과 기여도를 시각화합니다.",
        ],
        actions=[
            LinkItem(label="시작하기", href="/dashboard"),
            LinkItem(label="자세히 알아보기", href="/about"),
        ],
        image_src="/assets/images/contribase_main.svg",
        image_alt="GitHub 분석 이미지",
    ),
    features_title="주요 기능",
    features_lines=[
        "Contribase는 GitHub 저장소를 분석하여",
        "개발자의 기술 스택과 기여도를 시각화하고 포트폴리오로 변환합니다.",
    ],
    features=[
        FeatureCard(
            title="규칙 기반 분석",
            description=(
                "규칙 기반 분석 시스템이 GitHub 저장소의 코드와 커밋 패턴을 분석하여 "
                "개발자의 기술 스택을 자동으로 식별합니다."
            ),
            icon=(
                "M9.663 17h4.673M12 3v1m6.364 1.636l-.707.707M21 12h-1M4 12H3m3.343-5.657l-.707-.707"
                "m2.828 9.9a5 5 0 117.072 0l-.548.547A3.374 3.374 0 0014 18.469V19a2 2 0 11-4 0v-.531"
                "c0-.895-.356-1.754-.988-2.386l-.548-.547z"
            ),
        ),
        FeatureCard(
            title="시각화 대시보드",
            description="다양한 차트와 그래프로 프로젝트별 기여도와 기술 스택을 한눈에 확인할 수 있습니다.",
            icon=(
                "M9 19v-6a2 2 0 00-2-2H5a2 2 0 00-2 2v6a2 2 0 002 2h2a2 2 0 002-2zm0 0V9a2 2 0 012-2h2"
                "a2 2 0 012 2v10m-6 0a2 2 0 002 2h2a2 2 0 002-2m0 0V5a2 2 0 012-2h2a2 2 0 012 2v14"
                "a2 2 0 01-2 2h-2a2 2 0 01-2-2z"
            ),
        ),
        FeatureCard(
            title="PDF 포트폴리오",
            description=(
                "분석 결과를 바탕으로 전문적인 포트폴리오 PDF를 자동으로 생성하여 "
                "개발자의 역량을 효과적으로 표현합니다."
            ),
            icon=(
                "M12 10v6m0 0l-3-3m3 3l3-3M3 17V7a2 2 0 012-2h6l2 2h6a2 2 0 012 2v8a2 2 0 01-2 2H5"
                "a2 2 0 01-2-2z"
            ),
        ),
    ],
    roadmap_title="향후 개발 계획",
    roadmap_intro=(
        "규칙 기반 분석을 넘어, 다음 버전에서는 인공지능 기술을 도입하여 "
        "더욱 정교한 분석을 제공할 예정입니다."
    ),
    roadmap=[
        RoadmapItem(title="AI 기반 커밋 분석", description="머신러닝 모델을 활용한 고도화된 커밋 메시지 분석"),
        RoadmapItem(title="코드 품질 평가", description="인공지능 기반 코드 품질 평가 및 개선 제안"),
        RoadmapItem(title="개발자 프로필 생성", description="자연어 처리 기술을 활용한 맞춤형 개발자 프로필 자동 생성"),
        RoadmapItem(title="기술 트렌드 분석", description="최신 기술 트렌드와 개발자 역량을 연계한 분석"),
    ],
    cta=CallToAction(
        title="개발자의 역량을 돋보이게 하세요",
        lines=[
            "규칙 기반 분석 시스템이 GitHub 기록을 분석하여 객관적인 기술 프로필을 생성합니다.",
            "향후 인공지능 기술 도입으로 더욱 향상된 분석이 제공될 예정입니다.",
        ],
        link=LinkItem(label="GitHub 로그인", href="/auth/github"),
        image_src="/assets/images/github_login.svg",
    ),
)
