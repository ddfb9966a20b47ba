"""Landing page controller.

스켈레톤 UI를 보여주다가 페이지가 준비되면 실제 콘텐츠로 전환합니다.
준비 시점은 다음 중 먼저 일어나는 쪽입니다.
- document의 load 이벤트 (이미 complete이면 즉시)
- 최대 대기 시간(기본 2초) 타이머

두 신호는 ReadinessLatch 하나에 기록되며 먼저 도착한 쪽만 반영됩니다.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

READY_TIMEOUT_SECONDS = 2.0
LOAD_EVENT = "load"
READY_STATE_COMPLETE = "complete"

Listener = Callable[[], None]


class LoadTarget(Protocol):
    """load 이벤트를 내보내는 대상 (브라우저의 document에 해당)."""

    @property
    def ready_state(self) -> str: ...

    def add_event_listener(self, event: str, listener: Listener) -> None: ...

    def remove_event_listener(self, event: str, listener: Listener) -> None: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


CallLater = Callable[[float, Callable[[], Any]], TimerHandle]


class ReadinessLatch:
    """한 번만 닫히는 준비 완료 신호.

    먼저 set한 쪽이 이기고, 이후 set은 무시됩니다.
    close() 이후에는 어떤 set도 상태를 바꾸지 않습니다.
    """

    def __init__(self):
        self._source: Optional[str] = None
        self._closed = False
        self._event = asyncio.Event()

    @property
    def is_set(self) -> bool:
        return self._source is not None

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, source: str) -> bool:
        """신호를 기록합니다. 실제로 상태가 바뀌었으면 True."""
        if self._closed or self._source is not None:
            return False
        self._source = source
        self._event.set()
        return True

    def close(self) -> None:
        """이후의 set을 막고 기다리던 쪽을 깨웁니다 (source는 그대로)."""
        self._closed = True
        self._event.set()

    async def wait(self) -> Optional[str]:
        """완료 또는 close까지 기다립니다. 준비 전에 닫혔으면 None."""
        await self._event.wait()
        return self._source


class LandingPage:
    """랜딩 페이지의 loading -> ready 전환."""

    def __init__(
        self,
        document: LoadTarget,
        timeout: float = READY_TIMEOUT_SECONDS,
        call_later: Optional[CallLater] = None,
    ):
        self._document = document
        self._timeout = timeout
        self._call_later = call_later
        self._latch = ReadinessLatch()
        self._timer: Optional[TimerHandle] = None
        self._listening = False

    @property
    def is_loading(self) -> bool:
        return not self._latch.is_set

    @property
    def ready_source(self) -> Optional[str]:
        """준비를 끝낸 신호 ("load" 또는 "timeout")."""
        return self._latch.source

    def mount(self) -> None:
        if self._document.ready_state == READY_STATE_COMPLETE:
            self._handle_load()
        else:
            self._document.add_event_listener(LOAD_EVENT, self._handle_load)
            self._listening = True

        call_later = self._call_later or asyncio.get_running_loop().call_later
        self._timer = call_later(self._timeout, self._handle_timeout)

    def unmount(self) -> None:
        if self._listening:
            self._document.remove_event_listener(LOAD_EVENT, self._handle_load)
            self._listening = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._latch.close()

    async def wait_ready(self) -> Optional[str]:
        return await self._latch.wait()

    def _handle_load(self) -> None:
        if self._latch.set("load"):
            logger.debug("Landing page ready on load event")

    def _handle_timeout(self) -> None:
        self._timer = None
        if self._latch.set("timeout"):
            logger.debug("Landing page ready after %.1fs ceiling", self._timeout)
