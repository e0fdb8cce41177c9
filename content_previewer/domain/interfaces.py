"""
领域层 - 核心接口定义
遵循依赖倒置原则(DIP)，编排器只依赖这些协作者抽象
"""

from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..types import PreviewFormat, RenderResult


@runtime_checkable
class IContentConverter(Protocol):
    """内容转换器接口：源文本 -> HTML"""

    def convert(self, content: str) -> str:
        """转换内容"""
        ...


@runtime_checkable
class ICodeHighlighter(Protocol):
    """代码高亮接口，不抛异常，未知语言时自动检测"""

    def highlight(self, code: str, language: Optional[str] = None) -> str:
        ...


@runtime_checkable
class IDisplaySurface(Protocol):
    """显示区域接口（预览 DOM 子树）"""

    async def inject(self, html: str) -> None:
        """用新 HTML 替换全部内容"""
        ...

    async def get_html(self) -> str:
        """当前内容"""
        ...

    async def transform(self, func: Callable[[str], str]) -> None:
        """对当前内容应用同步的 HTML 变换"""
        ...

    async def replace_element(self, element_id: str, html: str) -> bool:
        """替换指定 id 的元素

        Returns:
            元素不存在（已被新一轮渲染覆盖）时返回 False
        """
        ...


@runtime_checkable
class IMathTypesetter(Protocol):
    """主数学排版引擎接口（异步）"""

    async def typeset(self, surface: IDisplaySurface) -> None:
        """排版显示区域中的公式"""
        ...

    async def clear(self, surface: IDisplaySurface) -> None:
        """清除之前排版产生的内容"""
        ...


@runtime_checkable
class IMathRenderer(Protocol):
    """备用数学渲染器接口（同步，不抛异常）"""

    def render(self, html: str) -> str:
        """渲染 HTML 中的公式，错误处显示内联标记"""
        ...

    def clear(self, html: str) -> str:
        """还原已渲染的公式"""
        ...


@runtime_checkable
class IDiagramRenderer(Protocol):
    """图表渲染器接口"""

    async def render(self, source: str, diagram_id: str) -> str:
        """渲染图表

        diagram_id 只用于渲染，不能是显示区域中已有元素的 id。

        Returns:
            渲染产物（SVG 标记）

        Raises:
            DiagramRenderError: 图表语法错误或渲染失败
        """
        ...


@runtime_checkable
class IRenderOrchestrator(Protocol):
    """渲染编排器接口"""

    async def render(self, text: str, fmt: "PreviewFormat") -> "RenderResult":
        """执行一次完整渲染"""
        ...

    async def clear_math(self) -> None:
        """立即清除显示区域中的排版产物"""
        ...
