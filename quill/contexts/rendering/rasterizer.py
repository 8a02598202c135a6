"""
Rasterizers

A rasterizer turns a rendered surface into a high-resolution PNG. The export
pipeline only relies on Rasterizer.capture(); PlaywrightRasterizer is the
production implementation (headless Chromium screenshot of the target
element at the requested device scale).

Remote images (a photo URL) are fetched by the browser under its
cross-origin rules. A photo that cannot be fetched is simply missing from
the raster; capture does not fail because of it.
"""

from dataclasses import dataclass
from io import BytesIO

from PIL import Image
from playwright.async_api import async_playwright

from quill.contexts.rendering.exceptions import RasterizeError, TargetNotFoundError
from quill.contexts.rendering.logger import _log_debug, _log_info
from quill.contexts.rendering.surface import RenderTarget

# CSS reference pixels per millimetre (96 dpi)
PX_PER_MM = 96 / 25.4


@dataclass(frozen=True)
class Raster:
    """
    Captured image of a render target.

    Attributes:
        png: PNG bytes
        width: Width in device pixels
        height: Height in device pixels
        scale: Device pixels per CSS pixel used for the capture
    """

    png: bytes
    width: int
    height: int
    scale: int = 1

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_png(cls, png: bytes, scale: int = 1) -> "Raster":
        """
        Raises:
            RasterizeError: If the bytes are not a readable image
        """
        try:
            with Image.open(BytesIO(png)) as image:
                width, height = image.size
        except Exception as e:
            raise RasterizeError("Captured data is not a readable image", e) from e
        return cls(png=png, width=width, height=height, scale=scale)


class Rasterizer:
    """Interface of the capture collaborator used by the export pipeline."""

    name = "base"

    async def capture(self, target: RenderTarget, scale: int) -> Raster:
        """
        Capture the element with id target.handle from target.html.

        Args:
            target: Live render to capture
            scale: Upscale factor (device pixels per CSS pixel)

        Returns:
            Raster of the element

        Raises:
            TargetNotFoundError: If the element is missing from the page
            RasterizeError: If capture fails
        """
        raise NotImplementedError


class PlaywrightRasterizer(Rasterizer):
    """Screenshots the target element with headless Chromium."""

    name = "playwright"

    def __init__(self, page_width_mm: float = 210, timeout_ms: int = 30_000):
        self.viewport_width = round(page_width_mm * PX_PER_MM)
        self.timeout_ms = timeout_ms

    async def capture(self, target: RenderTarget, scale: int) -> Raster:
        _log_info(f"Capturing #{target.handle} at {scale}x with Chromium")

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(
                    headless=True,
                    args=["--no-sandbox", "--disable-dev-shm-usage"],
                )
                try:
                    page = await browser.new_page(
                        viewport={"width": self.viewport_width, "height": 1024},
                        device_scale_factor=scale,
                    )
                    # networkidle lets remote photos finish (or fail) loading first
                    await page.set_content(target.html, wait_until="networkidle", timeout=self.timeout_ms)
                    element = await page.query_selector(f"#{target.handle}")
                    if element is None:
                        raise TargetNotFoundError(target.handle)
                    png = await element.screenshot(type="png", timeout=self.timeout_ms)
                finally:
                    await browser.close()
        except (TargetNotFoundError, RasterizeError):
            raise
        except Exception as e:
            raise RasterizeError("Chromium capture failed", e) from e

        raster = Raster.from_png(png, scale=scale)
        _log_debug(f"  Raster: {raster.width}x{raster.height}px")
        return raster
