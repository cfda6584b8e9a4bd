"""Unit tests for the headless-browser rasterizer with Playwright mocked out."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from playwright.async_api import Error as PlaywrightError

from hanbok.errors import RasterizationError
from hanbok.services import rasterizer as rasterizer_module
from hanbok.services.rasterizer import Rasterizer

from conftest import png_bytes


class FakeBrowser:
    """Browser whose pages return a canned screenshot and track how many are open."""

    def __init__(self, screenshot=None, delay: float = 0):
        self.screenshot = screenshot or png_bytes()
        self.delay = delay
        self.pages = []
        self.open_pages = 0
        self.peak_open = 0
        self.connected = True
        self.close = AsyncMock()

    def is_connected(self):
        return self.connected

    async def new_page(self, **kwargs):
        if not self.connected:
            raise PlaywrightError("Target page, context or browser has been closed")
        self.open_pages += 1
        self.peak_open = max(self.peak_open, self.open_pages)
        page = Mock()
        page.options = kwargs
        page.set_content = AsyncMock()

        async def screenshot(**options):
            if self.delay:
                await asyncio.sleep(self.delay)
            if isinstance(self.screenshot, Exception):
                raise self.screenshot
            return self.screenshot

        async def close():
            self.open_pages -= 1

        page.screenshot = AsyncMock(side_effect=screenshot)
        page.close = AsyncMock(side_effect=close)
        self.pages.append(page)
        return page


@pytest.fixture
def browser():
    return FakeBrowser()


@pytest.fixture
def fake_playwright(monkeypatch, browser):
    """Replace async_playwright with a stub that launches `browser`."""
    playwright = SimpleNamespace(
        chromium=SimpleNamespace(launch=AsyncMock(return_value=browser)),
        stop=AsyncMock(),
    )
    starter = SimpleNamespace(start=AsyncMock(return_value=playwright))
    monkeypatch.setattr(rasterizer_module, "async_playwright", lambda: starter)
    return playwright


class TestRasterizer:
    """Test cases for Rasterizer."""

    @pytest.mark.asyncio
    async def test_render_returns_png(self, settings, fake_playwright, browser):
        rasterizer = Rasterizer()
        png = await rasterizer.render("<html></html>")

        assert png == browser.screenshot
        page = browser.pages[0]
        assert page.options == {"viewport": {"width": 1080, "height": 1350}, "device_scale_factor": 1}
        page.set_content.assert_awaited_once_with("<html></html>", wait_until="load")
        page.screenshot.assert_awaited_once_with(full_page=True, type="png")
        page.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_browser_launched_once(self, settings, fake_playwright):
        rasterizer = Rasterizer()
        await asyncio.gather(*(rasterizer.render("<p>x</p>") for _ in range(4)))
        fake_playwright.chromium.launch.assert_awaited_once_with(headless=True)

    @pytest.mark.asyncio
    async def test_wrong_size_is_rejected(self, settings, fake_playwright, browser):
        browser.screenshot = png_bytes(1080, 1400)
        rasterizer = Rasterizer()

        with pytest.raises(RasterizationError) as exc_info:
            await rasterizer.render("<p>x</p>", slide_index=3)
        assert exc_info.value.slide_index == 3
        assert "1080x1400" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_browser_error_closes_page(self, settings, fake_playwright, browser):
        browser.screenshot = PlaywrightError("Target crashed")
        rasterizer = Rasterizer()

        with pytest.raises(RasterizationError, match="Target crashed") as exc_info:
            await rasterizer.render("<p>x</p>", slide_index=1)
        assert exc_info.value.slide_index == 1
        assert browser.open_pages == 0

    @pytest.mark.asyncio
    async def test_timeout(self, settings, fake_playwright, browser):
        browser.delay = 1
        rasterizer = Rasterizer(timeout=0.05)

        with pytest.raises(RasterizationError, match="timed out"):
            await rasterizer.render("<p>x</p>", slide_index=0)
        assert browser.open_pages == 0

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, settings, fake_playwright, browser):
        browser.delay = 0.02
        rasterizer = Rasterizer(concurrency=2)

        await asyncio.gather(*(rasterizer.render("<p>x</p>") for _ in range(6)))
        assert browser.peak_open == 2
        assert len(browser.pages) == 6

    @pytest.mark.asyncio
    async def test_render_to_file(self, settings, fake_playwright, tmp_path):
        rasterizer = Rasterizer()
        path = await rasterizer.render_to_file("<p>x</p>", tmp_path / "slide-1.png")
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    @pytest.mark.asyncio
    async def test_context_manager_stops_browser(self, settings, fake_playwright, browser):
        async with Rasterizer() as rasterizer:
            assert rasterizer.running
        assert not rasterizer.running
        browser.close.assert_awaited_once()
        fake_playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_failure(self, settings, fake_playwright):
        fake_playwright.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")
        rasterizer = Rasterizer()

        with pytest.raises(RasterizationError, match="Could not launch browser"):
            await rasterizer.start()
        assert not rasterizer.running
        fake_playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnected_browser_is_relaunched(self, settings, fake_playwright, browser):
        replacement = FakeBrowser()
        fake_playwright.chromium.launch.side_effect = [browser, replacement]
        rasterizer = Rasterizer()
        await rasterizer.render("<p>x</p>")

        browser.connected = False
        assert not rasterizer.running
        for index in range(3):
            assert await rasterizer.render("<p>x</p>", slide_index=index) == replacement.screenshot

        assert fake_playwright.chromium.launch.await_count == 2
        browser.close.assert_awaited_once()
        assert len(replacement.pages) == 3
        assert rasterizer.running

    @pytest.mark.asyncio
    async def test_crash_fails_only_the_current_slide(self, settings, fake_playwright, browser):
        replacement = FakeBrowser()
        fake_playwright.chromium.launch.side_effect = [browser, replacement]
        rasterizer = Rasterizer()

        async def crash(**options):
            browser.connected = False
            raise PlaywrightError("Target crashed")

        await rasterizer.start()
        page = await browser.new_page()
        browser.new_page = AsyncMock(return_value=page)
        page.screenshot = AsyncMock(side_effect=crash)

        with pytest.raises(RasterizationError, match="Target crashed"):
            await rasterizer.render("<p>x</p>", slide_index=4)
        assert await rasterizer.render("<p>x</p>", slide_index=5) == replacement.screenshot

    @pytest.mark.asyncio
    async def test_close_error_on_dead_browser_is_tolerated(self, settings, fake_playwright, browser):
        rasterizer = Rasterizer()
        await rasterizer.start()
        browser.close.side_effect = PlaywrightError("Browser has been closed")

        await rasterizer.stop()
        assert not rasterizer.running
        fake_playwright.stop.assert_awaited_once()
