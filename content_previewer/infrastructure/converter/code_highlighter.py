"""
代码高亮器
Pygments 高亮，未指定或未知语言时自动检测
"""

import html
from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from ...utils.logger import logger


class CodeHighlighter:
    """代码高亮器，任何情况下都不抛异常"""

    def __init__(self, style: str = "default"):
        self._formatter = HtmlFormatter(nowrap=True, style=style)

    def highlight(self, code: str, language: Optional[str] = None) -> str:
        """返回高亮后的内联标记（不含 <pre> 包装）"""
        try:
            lexer = self._get_lexer(code, language)
            return highlight(code, lexer, self._formatter).rstrip("\n")
        except Exception as e:
            logger.warning(f"[ContentPreviewer] 代码高亮失败，按纯文本输出: {e}")
            return html.escape(code)

    def _get_lexer(self, code: str, language: Optional[str]):
        if language:
            try:
                return get_lexer_by_name(language)
            except ClassNotFound:
                logger.debug(f"[ContentPreviewer] 未知语言 {language}，改为自动检测")
        return guess_lexer(code)

    def stylesheet(self) -> str:
        """高亮样式表"""
        return self._formatter.get_style_defs(".highlight")
