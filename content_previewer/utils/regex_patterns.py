"""
正则表达式模式集中管理模块

本模块集中定义和预编译正则表达式，按使用模块分组。
LaTeX 环境、行内命令和 $$ 公式使用显式扫描（latex_scanner.py），不在此处。
"""

import re
from typing import Pattern

# ============================================================================
# Markdown 转换器相关正则 (markdown_converter.py)
# ============================================================================

# 匹配围栏代码块 ```lang ... ```
MD_CODE_BLOCK: Pattern[str] = re.compile(r"```[^\n`]*\n[\s\S]*?```")

# 匹配未闭合的围栏代码块（延伸到文本末尾）
MD_UNCLOSED_CODE_BLOCK: Pattern[str] = re.compile(r"^```[^\n`]*(?:\n[\s\S]*)?\Z", re.MULTILINE)

# 匹配 display math \[...\]
MD_DISPLAY_MATH_BRACKET: Pattern[str] = re.compile(r"\\\[[\s\S]*?\\\]")

# 匹配 inline math \(...\)
MD_INLINE_MATH_PAREN: Pattern[str] = re.compile(r"\\\([\s\S]*?\\\)")

# 匹配 display math $$...$$
MD_DISPLAY_MATH_DOLLAR: Pattern[str] = re.compile(r"\$\$.*?\$\$", re.DOTALL)

# 匹配 inline math $...$（不跨行，忽略 \$）
MD_INLINE_MATH_DOLLAR: Pattern[str] = re.compile(r"(?<!\\)\$[^\n$]+?(?<!\\)\$")

# 检测标题行
MD_HEADING_DETECT: Pattern[str] = re.compile(r"^#{1,6}\s+")

# 检测无序列表
MD_UNORDERED_LIST_DETECT: Pattern[str] = re.compile(r"^[-*+]\s+")

# 检测有序列表
MD_ORDERED_LIST_DETECT: Pattern[str] = re.compile(r"^\d+\.\s+")

# 匹配行内代码 `...`
MD_INLINE_CODE: Pattern[str] = re.compile(r"(?<!`)`([^`\n]+)`(?!`)")


# ============================================================================
# Mermaid 转换器相关正则 (mermaid_converter.py)
# ============================================================================

# 图表语言标记 class
MERMAID_LANGUAGE_CLASS = "language-mermaid"


# ============================================================================
# 数学渲染相关正则 (math_renderer.py)
# ============================================================================

# 公式中需要移除的编号控制命令
MATH_NUMBERING_COMMANDS: Pattern[str] = re.compile(r"\\(?:nonumber|notag)(?![a-zA-Z])")


def macro_pattern(macro: str) -> Pattern[str]:
    """匹配完整的宏名（后面不能紧跟字母）"""
    return re.compile(re.escape(macro) + r"(?![a-zA-Z])")


__all__ = [
    "MD_CODE_BLOCK",
    "MD_UNCLOSED_CODE_BLOCK",
    "MD_DISPLAY_MATH_BRACKET",
    "MD_INLINE_MATH_PAREN",
    "MD_DISPLAY_MATH_DOLLAR",
    "MD_INLINE_MATH_DOLLAR",
    "MD_HEADING_DETECT",
    "MD_UNORDERED_LIST_DETECT",
    "MD_ORDERED_LIST_DETECT",
    "MD_INLINE_CODE",
    "MERMAID_LANGUAGE_CLASS",
    "MATH_NUMBERING_COMMANDS",
    "macro_pattern",
]
