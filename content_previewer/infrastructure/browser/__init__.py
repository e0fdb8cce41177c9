"""
基础设施层 - 浏览器模块
"""
from .browser_manager import BrowserManager
from .page_surface import PageSurface
from .mathjax_typesetter import MathJaxTypesetter
from .mermaid_renderer import MermaidRenderer
from .page_template import build_page

__all__ = [
    "BrowserManager",
    "PageSurface",
    "MathJaxTypesetter",
    "MermaidRenderer",
    "build_page",
]
