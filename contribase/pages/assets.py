"""Landing page static assets.

랜딩 페이지가 사용하는 정적 파일(메인 이미지, GitHub 로그인 버튼)을 미리 읽어 둡니다.
모든 파일을 읽으면 ready_state가 complete가 되고 load 리스너가 한 번씩 호출됩니다.
LandingPage에는 브라우저의 document 대신 이 객체가 주입됩니다.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from contribase.pages.landing import LOAD_EVENT, READY_STATE_COMPLETE, Listener

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

LANDING_ASSET_PATHS = (
    "images/contribase_main.svg",
    "images/github_login.svg",
)


class LandingAssets:
    """정적 자산 캐시 + load 이벤트."""

    def __init__(self, root: Path = STATIC_DIR, paths: Iterable[str] = LANDING_ASSET_PATHS):
        self.root = Path(root)
        self.paths = tuple(paths)
        self._ready_state = "loading"
        self._cache: Dict[str, bytes] = {}
        self._listeners: List[Listener] = []
        self._lock: Optional[asyncio.Lock] = None

    @property
    def ready_state(self) -> str:
        return self._ready_state

    def add_event_listener(self, event: str, listener: Listener) -> None:
        if event != LOAD_EVENT:
            raise ValueError(f"Unsupported event: {event}")
        self._listeners.append(listener)

    def remove_event_listener(self, event: str, listener: Listener) -> None:
        if event == LOAD_EVENT and listener in self._listeners:
            self._listeners.remove(listener)

    def get(self, path: str) -> Optional[bytes]:
        return self._cache.get(path)

    def _read_all(self) -> Dict[str, bytes]:
        contents: Dict[str, bytes] = {}
        for path in self.paths:
            try:
                contents[path] = (self.root / path).read_bytes()
            except OSError as e:
                logger.warning(f"Landing asset not readable: {path} ({e})")
        return contents

    async def warm(self) -> int:
        """모든 자산을 읽고 load 이벤트를 발생시킵니다.

        Returns:
            읽은 파일 수
        """
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            contents = await asyncio.to_thread(self._read_all)
            self._cache.update(contents)
            first_load = self._ready_state != READY_STATE_COMPLETE
            self._ready_state = READY_STATE_COMPLETE

        if first_load:
            logger.info(f"Landing assets warm ({len(contents)}/{len(self.paths)} files)")
            self._dispatch_load()
        return len(contents)

    def _dispatch_load(self) -> None:
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener()


landing_assets = LandingAssets()
