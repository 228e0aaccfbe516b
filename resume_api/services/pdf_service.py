# =============================================================================
# PDF Renderer
# =============================================================================
"""
HTML to PDF rendering with headless Chromium through Playwright.

Every render launches its own browser and closes it on every exit path.
Nothing is pooled, so no page state leaks between unrelated requests.

Usage:
    from resume_api.services.pdf_service import PdfRenderer

    renderer = PdfRenderer(timeout_seconds=30)
    pdf_bytes = await renderer.render("<h1>Ada Lovelace</h1>", "h1 { color: navy; }")
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from resume_api.services.errors import (
    InvalidInputError,
    RenderError,
    RenderTimeoutError,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]

# Serverless sandboxes allow a single process and no shared memory
SERVERLESS_BROWSER_ARGS = BROWSER_ARGS + ["--single-process", "--hide-scrollbars"]

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <style>
      *, ::before, ::after {{
        box-sizing: border-box;
        border-width: 0;
        border-style: solid;
        border-color: #e5e7eb;
      }}
      html, body {{
        margin: 0;
        padding: 0;
        -webkit-print-color-adjust: exact;
        print-color-adjust: exact;
        -webkit-font-smoothing: antialiased;
        -moz-osx-font-smoothing: grayscale;
      }}
      {css}
    </style>
  </head>
  <body>
    {html}
  </body>
</html>
"""

PDF_OPTIONS: dict[str, Any] = {
    "format": "Letter",
    "print_background": True,
    "display_header_footer": False,
    "margin": {"top": "0px", "bottom": "0px", "left": "0px", "right": "0px"},
    "prefer_css_page_size": True,
}


# -----------------------------------------------------------------------------
# PDF Renderer Class
# -----------------------------------------------------------------------------
class PdfRenderer:
    """
    Renders HTML fragments to US Letter PDFs.

    Attributes:
        timeout_seconds: Upper bound for loading and printing one document.
        serverless: Use the serverless launch flags and executable.
        executable_path: Chromium binary to launch instead of the bundled one.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        serverless: bool = False,
        executable_path: Optional[str] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        """
        Initialize the renderer.

        Args:
            timeout_seconds: Render timeout in seconds.
            serverless: Whether the process runs in a serverless sandbox.
            executable_path: Optional Chromium binary path.
            playwright_factory: Returns an async context manager yielding a
                Playwright instance.
        """
        self.timeout_seconds = timeout_seconds
        self.serverless = serverless
        self.executable_path = executable_path
        self._playwright_factory = playwright_factory

    @staticmethod
    def build_document(html: str, css: Optional[str] = None) -> str:
        """
        Wrap a fragment in a full UTF-8 document with the base reset and CSS inline.

        Args:
            html: Body markup.
            css: Stylesheet appended after the base reset.

        Returns:
            Complete HTML document.
        """
        return DOCUMENT_TEMPLATE.format(css=css or "", html=html)

    def launch_options(self) -> dict[str, Any]:
        """Chromium launch options for the current environment."""
        options: dict[str, Any] = {
            "headless": True,
            "args": SERVERLESS_BROWSER_ARGS if self.serverless else BROWSER_ARGS,
        }
        if self.executable_path:
            options["executable_path"] = self.executable_path
        return options

    async def render(self, html: str, css: Optional[str] = None) -> bytes:
        """
        Render an HTML fragment to PDF bytes.

        Args:
            html: Body markup, must not be empty.
            css: Optional stylesheet.

        Returns:
            PDF document bytes.

        Raises:
            InvalidInputError: If html is empty.
            RenderTimeoutError: If loading or printing exceeds the timeout.
            RenderError: If the browser fails for any other reason.
        """
        if not html or not html.strip():
            raise InvalidInputError("HTML content is required")

        document = self.build_document(html, css)
        logger.info("Generating PDF...")

        try:
            pdf = await asyncio.wait_for(self._render(document), timeout=self.timeout_seconds)
        except (asyncio.TimeoutError, PlaywrightTimeoutError) as e:
            logger.error(f"PDF render timed out after {self.timeout_seconds}s")
            raise RenderTimeoutError(
                "Failed to generate PDF",
                details=f"Render timed out after {self.timeout_seconds} seconds",
            ) from e
        except PlaywrightError as e:
            logger.error(f"Failed to generate PDF: {e}", exc_info=True)
            raise RenderError("Failed to generate PDF", details=str(e)) from e

        logger.info(f"PDF generated successfully, size: {len(pdf)}")
        return pdf

    async def _render(self, document: str) -> bytes:
        """Launch a browser, print the document and close the browser."""
        timeout_ms = self.timeout_seconds * 1000

        async with self._playwright_factory() as playwright:
            browser = await playwright.chromium.launch(**self.launch_options())
            try:
                page = await browser.new_page()
                await page.set_content(document, wait_until="networkidle", timeout=timeout_ms)
                await page.evaluate("document.fonts.ready")
                return await page.pdf(**PDF_OPTIONS)
            finally:
                await browser.close()
