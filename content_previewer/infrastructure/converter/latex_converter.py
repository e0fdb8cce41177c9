"""
LaTeX子集转换器
将LaTeX文档或片段线性扫描转换为HTML

Pipeline:
text ──► preprocess ──► scan ──► environments / $$ / paragraphs ──► html

对任何输入都会终止且不抛异常：未闭合的环境和 $$ 降级为普通文本。
"""

from typing import Optional

from ...types import EnvironmentBlock
from .environment_renderer import EnvironmentRenderer
from .inline_commands import InlineCommandConverter
from .latex_preprocessor import LatexPreprocessor
from .latex_scanner import (
    BEGIN_TOKEN,
    DISPLAY_MATH_TOKEN,
    ScanCursor,
    match_display_math,
    match_environment,
)
from .list_converter import ListConverter


class LatexConverter:
    """LaTeX子集转换器"""

    DOCUMENT_CLASS = "latex-document tex2jax_process"

    def __init__(
        self,
        preprocessor: Optional[LatexPreprocessor] = None,
        inline_converter: Optional[InlineCommandConverter] = None,
        environment_renderer: Optional[EnvironmentRenderer] = None,
    ):
        self._preprocessor = preprocessor or LatexPreprocessor()
        self._inline_converter = inline_converter or InlineCommandConverter()
        self._environment_renderer = environment_renderer or EnvironmentRenderer(
            inline_converter=self._inline_converter,
            list_converter=ListConverter(self._inline_converter),
        )

    def convert(self, content: str) -> str:
        """转换为包裹在文档容器中的HTML"""
        return f'<div class="{self.DOCUMENT_CLASS}">{self.parse(content)}</div>'

    def parse(self, content: str) -> str:
        """预处理并扫描，返回HTML片段"""
        return self._scan(self._preprocessor.preprocess(content))

    def _scan(self, source: str) -> str:
        html = []
        cursor = ScanCursor(source)

        while True:
            cursor.skip_whitespace()
            if cursor.at_end:
                break

            if cursor.startswith(BEGIN_TOKEN):
                block = match_environment(source, cursor.pos)
                if block is not None:
                    html.append(self._render_environment(block))
                    cursor.move_to(block.end)
                    continue

            if cursor.startswith(DISPLAY_MATH_TOKEN):
                span = match_display_math(source, cursor.pos)
                if span is not None:
                    html.append(f'<div class="math-display">$${span.content}$$</div>')
                    cursor.move_to(span.end)
                    continue

            text = self._read_text_run(cursor)
            if text.strip():
                html.append(f"<p>{self._inline_converter.convert(text.strip())}</p>")

        return "".join(html)

    def _render_environment(self, block: EnvironmentBlock) -> str:
        return self._environment_renderer.render(block)

    def _read_text_run(self, cursor: ScanCursor) -> str:
        """读取到下一个 \\begin{ 或 $$ 为止的文本

        至少消费一个字符：未闭合的 \\begin{ 或 $$ 在这里作为普通文本被吞掉，
        否则扫描会在同一位置停滞。
        """
        start = cursor.pos
        stops = [
            index
            for index in (cursor.find(BEGIN_TOKEN, 1), cursor.find(DISPLAY_MATH_TOKEN, 1))
            if index != -1
        ]
        cursor.move_to(min(stops) if stops else len(cursor.source))
        return cursor.source[start:cursor.pos]
