"""
浏览器显示区域
预览内容放在 Playwright 页面的容器元素中，MathJax 和 Mermaid 在页面内运行
"""

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from playwright.async_api import Page

from ...types import MathConfig
from ...utils.logger import logger
from .page_template import CONTAINER_ID, build_page

if TYPE_CHECKING:
    from .browser_manager import BrowserManager


class PageSurface:
    """浏览器显示区域"""

    def __init__(self, page: Page, container_id: str = CONTAINER_ID):
        self._page = page
        self._container_id = container_id

    @classmethod
    async def open(
        cls,
        browser_manager: "BrowserManager",
        math_config: Optional[MathConfig] = None,
        highlight_css: str = "",
        ready_timeout: int = 10000,
    ) -> "PageSurface":
        """打开预览页并等待 MathJax 就绪"""
        page = await browser_manager.new_page(build_page(math_config, highlight_css))
        try:
            await page.wait_for_function(
                "() => window.mathJaxReady === true", timeout=ready_timeout
            )
            logger.debug("[ContentPreviewer] MathJax 已就绪")
        except Exception as e:
            logger.warning(f"[ContentPreviewer] MathJax 等待超时: {e}")
        return cls(page)

    @property
    def page(self) -> Page:
        return self._page

    @property
    def container_id(self) -> str:
        return self._container_id

    async def inject(self, html: str) -> None:
        await self._page.evaluate(
            "([id, html]) => { document.getElementById(id).innerHTML = html; }",
            [self._container_id, html],
        )

    async def get_html(self) -> str:
        return await self._page.evaluate(
            "(id) => document.getElementById(id).innerHTML", self._container_id
        )

    async def transform(self, func: Callable[[str], str]) -> None:
        await self.inject(func(await self.get_html()))

    async def replace_element(self, element_id: str, html: str) -> bool:
        return await self._page.evaluate(
            """([containerId, elementId, html]) => {
                const container = document.getElementById(containerId);
                const target = container && container.querySelector('#' + CSS.escape(elementId));
                if (!target) return false;
                target.outerHTML = html;
                return true;
            }""",
            [self._container_id, element_id, html],
        )

    async def screenshot(self, output: Path, width: int = 1150) -> None:
        """截取整页截图"""
        height = await self._page.evaluate("document.body.scrollHeight")
        await self._page.set_viewport_size({"width": width, "height": height})

        logger.info(f"[ContentPreviewer] 截图中，高度: {height}px")
        await self._page.screenshot(path=str(output), full_page=True, timeout=60000)
        logger.info(f"[ContentPreviewer] 截图已保存: {output}")

    async def close(self) -> None:
        await self._page.close()
