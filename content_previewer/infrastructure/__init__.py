"""
基础设施层
"""
from .browser import (
    BrowserManager,
    PageSurface,
    MathJaxTypesetter,
    MermaidRenderer,
)
from .converter import (
    LatexConverter,
    MarkdownConverter,
    HtmlPassthroughConverter,
    CodeHighlighter,
    MermaidConverter,
)
from .math import MathMLRenderer, MathMLTypesetter
from .surface import HtmlSurface

__all__ = [
    "BrowserManager",
    "PageSurface",
    "MathJaxTypesetter",
    "MermaidRenderer",
    "LatexConverter",
    "MarkdownConverter",
    "HtmlPassthroughConverter",
    "CodeHighlighter",
    "MermaidConverter",
    "MathMLRenderer",
    "MathMLTypesetter",
    "HtmlSurface",
]
