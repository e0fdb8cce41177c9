"""
MathJax 排版器
在浏览器页面内调用 MathJax 排版预览容器
"""

from typing import TYPE_CHECKING

from ...domain.errors import MathTypesetError
from ...utils.decorators import with_timeout

if TYPE_CHECKING:
    from .page_surface import PageSurface

MATHJAX_TIMEOUT_MS = 10000


class MathJaxTypesetter:
    """MathJax 排版器，只能配合 PageSurface 使用"""

    @with_timeout(MATHJAX_TIMEOUT_MS)
    async def typeset(self, surface: "PageSurface") -> None:
        try:
            await surface.page.evaluate(
                """async (id) => {
                    await MathJax.startup.promise;
                    await MathJax.typesetPromise([document.getElementById(id)]);
                }""",
                surface.container_id,
            )
        except Exception as e:
            raise MathTypesetError(f"MathJax 排版失败: {e}")

    async def clear(self, surface: "PageSurface") -> None:
        """清除排版状态并重置公式编号"""
        try:
            await surface.page.evaluate(
                """(id) => {
                    if (!window.MathJax || !MathJax.typesetClear) return;
                    if (MathJax.texReset) MathJax.texReset();
                    MathJax.typesetClear([document.getElementById(id)]);
                }""",
                surface.container_id,
            )
        except Exception as e:
            raise MathTypesetError(f"MathJax 清除失败: {e}")
