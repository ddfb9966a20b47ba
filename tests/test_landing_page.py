"""Tests for the landing page skeleton-to-content swap.

이 모듈은 LandingPage의 준비 시점을 테스트합니다:
1. load 이벤트가 먼저 오면 그 시점에 준비 완료
2. load가 오지 않으면 정확히 2초에 준비 완료
3. 이미 로드된 document는 즉시 준비 완료
4. 언마운트 후에는 어떤 신호도 상태를 바꾸지 않음

타이머는 FakeTimers(가상 시계)로 구동합니다.
"""
import asyncio

import pytest

from contribase.pages.assets import LandingAssets
from contribase.pages.landing import LandingPage, ReadinessLatch


def test_load_event_before_ceiling(fake_document, fake_timers):
    """load 이벤트가 500ms에 오면 500ms에 준비되는지 테스트."""
    # Given
    page = LandingPage(fake_document, call_later=fake_timers.call_later)
    page.mount()
    assert page.is_loading is True

    # When: 500ms 후 load
    fake_timers.advance(500)
    fake_document.fire_load()

    # Then: 2000ms를 기다리지 않고 준비
    assert page.is_loading is False
    assert page.ready_source == "load"
    assert fake_timers.now_ms == 500

    # 이후 타이머가 울려도 변화 없음
    fake_timers.advance(2000)
    assert page.ready_source == "load"
    page.unmount()


def test_ceiling_when_load_never_fires(fake_document, fake_timers):
    """load가 오지 않으면 정확히 2000ms에 준비되는지 테스트."""
    page = LandingPage(fake_document, call_later=fake_timers.call_later)
    page.mount()

    fake_timers.advance(1999)
    assert page.is_loading is True

    fake_timers.advance(1)
    assert page.is_loading is False
    assert page.ready_source == "timeout"

    # 늦게 도착한 load는 무시
    fake_document.fire_load()
    assert page.ready_source == "timeout"
    page.unmount()


def test_already_complete_document(fake_document, fake_timers):
    """이미 로드된 document면 마운트 즉시 준비되는지 테스트."""
    fake_document.ready_state = "complete"
    page = LandingPage(fake_document, call_later=fake_timers.call_later)

    page.mount()

    assert page.is_loading is False
    assert page.ready_source == "load"
    assert fake_document.listeners == []
    page.unmount()


def test_unmount_releases_listener_and_timer(fake_document, fake_timers):
    """언마운트 시 리스너와 타이머가 해제되고 이후 상태가 바뀌지 않는지 테스트."""
    # Given: 아직 준비되지 않은 페이지
    page = LandingPage(fake_document, call_later=fake_timers.call_later)
    page.mount()
    assert len(fake_document.listeners) == 1
    assert len(fake_timers.pending) == 1

    # When: 언마운트
    page.unmount()

    # Then: 리스너/타이머 없음
    assert fake_document.listeners == []
    assert fake_timers.pending == []

    # 이후 신호가 와도 상태 변화 없음
    fake_document.fire_load()
    fake_timers.advance(5000)
    assert page.is_loading is True
    assert page.ready_source is None


def test_latch_first_writer_wins():
    latch = ReadinessLatch()

    assert latch.set("load") is True
    assert latch.set("timeout") is False
    assert latch.source == "load"


def test_latch_closed_ignores_set():
    latch = ReadinessLatch()
    latch.close()

    assert latch.set("timeout") is False
    assert latch.is_set is False


@pytest.mark.asyncio
async def test_wait_ready_returns_after_unmount(fake_document, fake_timers):
    """준비 전에 언마운트되면 wait_ready가 None으로 끝나는지 테스트."""
    # Given: load도 타이머도 아직 발생하지 않음
    page = LandingPage(fake_document, call_later=fake_timers.call_later)
    page.mount()
    waiter = asyncio.ensure_future(page.wait_ready())
    await asyncio.sleep(0)

    # When
    page.unmount()

    # Then: 기다리던 쪽이 깨어나고 상태는 그대로
    assert await asyncio.wait_for(waiter, timeout=1) is None
    assert page.is_loading is True


@pytest.mark.asyncio
async def test_wait_ready_with_real_loop(fake_document):
    """실제 이벤트 루프 타이머로 최대 대기 시간이 동작하는지 테스트."""
    page = LandingPage(fake_document, timeout=0.05)
    page.mount()

    source = await asyncio.wait_for(page.wait_ready(), timeout=1)

    assert source == "timeout"
    page.unmount()


@pytest.mark.asyncio
async def test_landing_assets_fire_load(tmp_path):
    """자산 warmup이 끝나면 load 리스너가 호출되는지 테스트."""
    # Given: 자산 하나는 있고 하나는 없음
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "main.svg").write_text("<svg/>")
    assets = LandingAssets(root=tmp_path, paths=["images/main.svg", "images/missing.svg"])
    page = LandingPage(assets, timeout=5)
    page.mount()
    assert page.is_loading is True

    # When
    count = await assets.warm()

    # Then: 없는 파일은 건너뛰고 load 발생
    assert count == 1
    assert assets.ready_state == "complete"
    assert assets.get("images/main.svg") == b"<svg/>"
    assert page.ready_source == "load"
    page.unmount()
