"""
内存显示区域
用 BeautifulSoup 片段模拟预览 DOM 子树
"""

from typing import Callable

from bs4 import BeautifulSoup


class HtmlSurface:
    """内存显示区域"""

    def __init__(self, html: str = ""):
        self._soup = BeautifulSoup(html, "html.parser")
        self.inject_count = 0

    async def inject(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")
        self.inject_count += 1

    async def get_html(self) -> str:
        return str(self._soup)

    async def transform(self, func: Callable[[str], str]) -> None:
        self._soup = BeautifulSoup(func(str(self._soup)), "html.parser")

    async def replace_element(self, element_id: str, html: str) -> bool:
        target = self._soup.find(id=element_id)
        if target is None:
            return False
        replacement = BeautifulSoup(html, "html.parser")
        target.replace_with(*list(replacement.contents))
        return True

    @property
    def html(self) -> str:
        """同步读取当前内容"""
        return str(self._soup)
