"""Jinja2 template configuration."""
from pathlib import Path

from fastapi.templating import Jinja2Templates

from contribase.pages import messages

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["messages"] = messages


def render(name: str, **context) -> str:
    """템플릿을 문자열로 렌더링합니다 (스트리밍 응답용)."""
    return templates.get_template(name).render(**context)
