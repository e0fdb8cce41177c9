"""
ContentPreviewer
Markdown / LaTeX / HTML 实时预览渲染
"""
from .application import InputController, RenderOrchestrator
from .infrastructure.converter import LatexConverter, MarkdownConverter, is_diagram_incomplete
from .infrastructure.surface import HtmlSurface
from .types import PreviewConfig, PreviewFormat, RenderResult

__version__ = "1.0.0"

__all__ = [
    "InputController",
    "RenderOrchestrator",
    "LatexConverter",
    "MarkdownConverter",
    "is_diagram_incomplete",
    "HtmlSurface",
    "PreviewConfig",
    "PreviewFormat",
    "RenderResult",
]
