"""
基础设施层 - 转换器模块
"""
from .latex_preprocessor import LatexPreprocessor
from .inline_commands import InlineCommandConverter
from .list_converter import ListConverter
from .environment_renderer import EnvironmentRenderer
from .latex_converter import LatexConverter
from .code_highlighter import CodeHighlighter
from .markdown_converter import MarkdownConverter
from .html_converter import HtmlPassthroughConverter
from .mermaid_converter import MermaidConverter, is_diagram_incomplete

__all__ = [
    "LatexPreprocessor",
    "InlineCommandConverter",
    "ListConverter",
    "EnvironmentRenderer",
    "LatexConverter",
    "CodeHighlighter",
    "MarkdownConverter",
    "HtmlPassthroughConverter",
    "MermaidConverter",
    "is_diagram_incomplete",
]
