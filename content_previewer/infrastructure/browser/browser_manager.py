"""
浏览器管理器
管理Playwright浏览器实例的生命周期
"""
import asyncio
import traceback
from typing import Optional

from playwright.async_api import async_playwright, Browser, Page, Playwright

from ...utils.logger import logger
from ...domain.errors import BrowserError


class BrowserManager:
    """浏览器管理器 - 管理Playwright浏览器生命周期"""

    def __init__(self, headless: bool = True):
        self._headless = headless
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    async def get_browser(self) -> Browser:
        """获取或创建浏览器实例（并发安全）"""
        async with self._lock:
            try:
                if self._browser is None or not self._browser.is_connected():
                    logger.info("[ContentPreviewer] 正在启动浏览器...")
                    if self._playwright is None:
                        self._playwright = await async_playwright().start()
                        logger.debug("[ContentPreviewer] Playwright 已启动")

                    self._browser = await self._playwright.chromium.launch(
                        headless=self._headless
                    )
                    logger.info("[ContentPreviewer] 浏览器实例已创建")
                return self._browser

            except Exception as e:
                logger.error(f"[ContentPreviewer] 浏览器启动失败: {type(e).__name__}: {e}")
                logger.error(f"[ContentPreviewer] 堆栈信息:\n{traceback.format_exc()}")
                raise BrowserError(f"浏览器启动失败: {e}")

    async def new_page(self, html: str, width: int = 1150, height: int = 2000) -> Page:
        """打开新页面并加载 HTML，页面日志转发到 logger"""
        browser = await self.get_browser()
        page = await browser.new_page(viewport={"width": width, "height": height})
        page.on(
            "console", lambda msg: logger.debug(f"[Browser] {msg.type}: {msg.text}")
        )
        page.on("pageerror", lambda err: logger.error(f"[Browser Error] {err}"))
        await page.set_content(html, wait_until="load")
        return page

    async def close(self) -> None:
        """关闭浏览器和Playwright"""
        async with self._lock:
            if self._browser:
                try:
                    await self._browser.close()
                except Exception as e:
                    logger.warning(f"[ContentPreviewer] 关闭浏览器时出错: {e}")
                finally:
                    self._browser = None

            if self._playwright:
                try:
                    await self._playwright.stop()
                except Exception as e:
                    logger.warning(f"[ContentPreviewer] 关闭Playwright时出错: {e}")
                finally:
                    self._playwright = None

            logger.info("[ContentPreviewer] 浏览器资源已释放")

    @property
    def is_connected(self) -> bool:
        """检查浏览器是否已连接"""
        return self._browser is not None and self._browser.is_connected()
