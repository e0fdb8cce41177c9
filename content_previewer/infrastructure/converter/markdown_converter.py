"""
Markdown转换器
将Markdown转换为HTML片段，保护公式和代码块不被Markdown处理
"""

import html
import re
from typing import Optional

import markdown

from ...domain.interfaces import ICodeHighlighter
from ...utils import regex_patterns as patterns
from .code_highlighter import CodeHighlighter


class MarkdownConverter:
    """Markdown转换器"""

    DIAGRAM_LANGUAGE = "mermaid"
    EXTENSIONS = ["fenced_code", "tables", "nl2br"]

    def __init__(self, highlighter: Optional[ICodeHighlighter] = None):
        self._highlighter = highlighter or CodeHighlighter()

    def convert(self, content: str) -> str:
        """将Markdown转换为HTML片段"""
        # 预处理
        md_text = self._preprocess_markdown(content)

        # 保护代码块、行内代码和数学公式
        md_text, code_blocks = self._extract_code_blocks(md_text)
        md_text, inline_codes = self._extract_inline_code(md_text)
        md_text, math_blocks = self._extract_math_blocks(md_text)

        # Markdown转换
        html_body = markdown.markdown(md_text, extensions=self.EXTENSIONS)

        # 还原
        html_body = self._restore_math_blocks(html_body, math_blocks)
        html_body = self._restore_inline_code(html_body, inline_codes)
        return self._restore_code_blocks(html_body, code_blocks)

    def _preprocess_markdown(self, text: str) -> str:
        """在标题或列表前补空行（GFM 不要求空行，Python-Markdown 要求）"""
        lines = text.split("\n")
        result = []
        in_code_block = False

        for line in lines:
            stripped = line.strip()

            if stripped.startswith("```") or stripped.startswith("~~~"):
                in_code_block = not in_code_block
                result.append(line)
                continue

            if in_code_block:
                result.append(line)
                continue

            is_heading = bool(patterns.MD_HEADING_DETECT.match(stripped))
            is_list_item = self._is_list_item(stripped)

            if (is_heading or is_list_item) and result:
                prev_line = result[-1].strip()
                if prev_line and (is_heading or not self._is_list_item(prev_line)):
                    result.append("")

            result.append(line)

        return "\n".join(result)

    def _is_list_item(self, line: str) -> bool:
        return bool(
            patterns.MD_UNORDERED_LIST_DETECT.match(line)
            or patterns.MD_ORDERED_LIST_DETECT.match(line)
        )

    def _extract_code_blocks(self, text: str) -> tuple[str, list[str]]:
        """提取围栏代码块，占位符独占一段

        还在输入中的最后一个代码块没有闭合围栏，视为延伸到文本末尾。
        """
        blocks = []

        def substitute(match):
            placeholder = f"\n\nCODEBLOCK{len(blocks)}CODEBLOCK\n\n"
            blocks.append(match.group(0))
            return placeholder

        def substitute_unclosed(match):
            placeholder = f"\n\nCODEBLOCK{len(blocks)}CODEBLOCK\n\n"
            blocks.append(match.group(0).rstrip("\n") + "\n```")
            return placeholder

        text = patterns.MD_CODE_BLOCK.sub(substitute, text)
        text = patterns.MD_UNCLOSED_CODE_BLOCK.sub(substitute_unclosed, text, count=1)
        return text, blocks

    def _extract_inline_code(self, text: str) -> tuple[str, list[str]]:
        """提取行内代码，避免其中的 $ 被当作公式"""
        codes = []

        def substitute(match):
            placeholder = f"INLINECODE{len(codes)}INLINECODE"
            codes.append(match.group(1))
            return placeholder

        text = patterns.MD_INLINE_CODE.sub(substitute, text)
        return text, codes

    def _extract_math_blocks(self, text: str) -> tuple[str, list[str]]:
        """提取数学公式块"""
        blocks = []

        def substitute(match):
            placeholder = f"MATHBLOCK{len(blocks)}MATHBLOCK"
            blocks.append(match.group(0))
            return placeholder

        text = patterns.MD_DISPLAY_MATH_DOLLAR.sub(substitute, text)
        text = patterns.MD_DISPLAY_MATH_BRACKET.sub(substitute, text)
        text = patterns.MD_INLINE_MATH_PAREN.sub(substitute, text)
        text = patterns.MD_INLINE_MATH_DOLLAR.sub(substitute, text)

        return text, blocks

    def _restore_math_blocks(self, html_body: str, blocks: list[str]) -> str:
        """还原数学公式块（转义，保持为文本节点）"""
        # 倒序还原，避免 MATHBLOCK1 命中 MATHBLOCK10
        for i in reversed(range(len(blocks))):
            html_body = html_body.replace(
                f"MATHBLOCK{i}MATHBLOCK", html.escape(blocks[i], quote=False)
            )
        return html_body

    def _restore_inline_code(self, html_body: str, codes: list[str]) -> str:
        for i in reversed(range(len(codes))):
            html_body = html_body.replace(
                f"INLINECODE{i}INLINECODE",
                f"<code>{html.escape(codes[i], quote=False)}</code>",
            )
        return html_body

    def _restore_code_blocks(self, html_body: str, blocks: list[str]) -> str:
        """还原代码块：图表代码原样转义，其余代码高亮"""
        for i in reversed(range(len(blocks))):
            code_html = self._render_code_block(blocks[i])
            html_body = re.sub(
                rf"<p>\s*CODEBLOCK{i}CODEBLOCK\s*</p>",
                lambda _: code_html,
                html_body,
            )
            html_body = html_body.replace(f"CODEBLOCK{i}CODEBLOCK", code_html)
        return html_body

    def _render_code_block(self, block: str) -> str:
        header, _, code = block[3:-3].partition("\n")
        words = header.split()
        language = words[0].lower() if words else ""
        code = code.rstrip("\n")

        if language == self.DIAGRAM_LANGUAGE:
            return (
                f'<pre><code class="language-{language}">'
                f"{html.escape(code, quote=False)}</code></pre>"
            )

        highlighted = self._highlighter.highlight(code, language or None)
        lang_class = f" language-{language}" if language else ""
        return f'<pre><code class="highlight{lang_class}">{highlighted}</code></pre>'
