"""
Mermaid 渲染器
在浏览器页面内调用 mermaid.render，返回 SVG
"""

from playwright.async_api import Page

from ...domain.errors import DiagramRenderError
from ...utils.logger import logger


class MermaidRenderer:
    """Mermaid 渲染器"""

    def __init__(self, page: Page):
        self._page = page

    async def render(self, source: str, diagram_id: str) -> str:
        try:
            return await self._page.evaluate(
                """async ([id, code]) => {
                    const { svg } = await mermaid.render(id, code);
                    return svg;
                }""",
                [diagram_id, source],
            )
        except Exception as e:
            logger.debug(f"[ContentPreviewer] Mermaid 渲染错误 {diagram_id}: {e}")
            raise DiagramRenderError(f"Mermaid 渲染失败: {e}", diagram_id=diagram_id)
