"""
HTML to PNG rasterization with headless Chromium.

One browser is shared for the life of the process. Each render gets a fresh
page that is closed afterwards, and a semaphore bounds how many pages are
open at once.
"""

import asyncio
import io
import logging
from pathlib import Path

from PIL import Image
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from hanbok.config import get_settings
from hanbok.design_templates import HEIGHT, WIDTH
from hanbok.errors import RasterizationError

logger = logging.getLogger(__name__)


class Rasterizer:
    """Bounded pool of screenshot jobs over a single Chromium instance."""

    def __init__(self, concurrency: int | None = None, timeout: float | None = None):
        settings = get_settings()
        self.concurrency = concurrency or settings.render_concurrency
        self.timeout = timeout or settings.render_timeout_seconds
        self._semaphore = asyncio.Semaphore(self.concurrency)
        self._start_lock = asyncio.Lock()
        self._playwright = None
        self._browser = None

    @property
    def running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def start(self):
        async with self._start_lock:
            if self.running:
                return
            if self._browser is not None:
                logger.warning("Browser disconnected, relaunching")
                await self._shutdown()
            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(headless=True)
            except PlaywrightError as e:
                await self._shutdown()
                raise RasterizationError(f"Could not launch browser: {e}") from e
            logger.info(f"Browser started (concurrency={self.concurrency})")

    async def stop(self):
        async with self._start_lock:
            await self._shutdown()

    async def _shutdown(self):
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Browser did not close cleanly: {e}")
            self._browser = None
            logger.info("Browser stopped")
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.stop()

    async def _screenshot(self, browser, html: str) -> bytes:
        page = await browser.new_page(
            viewport={"width": WIDTH, "height": HEIGHT},
            device_scale_factor=1,
        )
        try:
            await page.set_content(html, wait_until="load")
            return await page.screenshot(full_page=True, type="png")
        finally:
            await page.close()

    async def render(self, html: str, slide_index: int | None = None) -> bytes:
        """
        Screenshot one HTML document.

        Raises:
            RasterizationError: browser failure, timeout, or a PNG that is not 1080x1350
        """
        async with self._semaphore:
            if not self.running:
                await self.start()
            browser = self._browser
            try:
                png = await asyncio.wait_for(self._screenshot(browser, html), timeout=self.timeout)
            except asyncio.TimeoutError as e:
                raise RasterizationError(
                    f"Screenshot timed out after {self.timeout}s", slide_index=slide_index
                ) from e
            except PlaywrightError as e:
                raise RasterizationError(f"Screenshot failed: {e}", slide_index=slide_index) from e

        size = Image.open(io.BytesIO(png)).size
        if size != (WIDTH, HEIGHT):
            raise RasterizationError(
                f"Expected {WIDTH}x{HEIGHT} PNG, got {size[0]}x{size[1]}", slide_index=slide_index
            )
        return png

    async def render_to_file(self, html: str, path: str | Path, slide_index: int | None = None) -> Path:
        path = Path(path)
        png = await self.render(html, slide_index=slide_index)
        path.write_bytes(png)
        return path


_rasterizer: Rasterizer | None = None


def get_rasterizer() -> Rasterizer:
    global _rasterizer
    if _rasterizer is None:
        _rasterizer = Rasterizer()
    return _rasterizer
