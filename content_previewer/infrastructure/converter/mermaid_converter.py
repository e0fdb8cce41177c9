"""
Mermaid图表转换器
判断正在输入的图表代码是否值得渲染，并把HTML中的mermaid代码块替换为渲染占位
"""

import html
import time
from typing import Optional

from bs4 import BeautifulSoup

from ...types import DiagramCandidate
from ...utils.logger import logger
from ...utils.regex_patterns import MERMAID_LANGUAGE_CLASS

# Mermaid 支持的图表类型
DIAGRAM_TYPES = frozenset({
    "graph",
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "erDiagram",
    "journey",
    "gantt",
    "pie",
    "quadrantChart",
    "requirementDiagram",
    "gitGraph",
    "gitgraph",
    "mindmap",
    "timeline",
    "zenuml",
    "sankey",
    "xychart",
})

EDGE_TOKENS = ("-->", "->")

DEFAULT_MIN_LENGTH = 10


def is_diagram_incomplete(code: str, min_length: int = DEFAULT_MIN_LENGTH) -> bool:
    """判断图表代码是否明显未写完（True 表示暂不渲染）

    启发式而非语法检查：宁可把合法的短代码判为未完成，也不在输入途中报错。
    """
    # 1. 太短
    if len(code) < min_length:
        return True

    # 2. 少于两行有效内容
    lines = [line.strip() for line in code.split("\n") if line.strip()]
    if len(lines) < 2:
        return True

    # 3. 只有图表类型声明
    if code.strip() in DIAGRAM_TYPES:
        return True

    # 4. 连线不完整
    for token in EDGE_TOKENS:
        if token in code and len(code.split(token)) < 2:
            return True

    # 5. 方括号不配对
    if code.count("[") != code.count("]"):
        return True

    # 6. 圆括号不配对
    if code.count("(") != code.count(")"):
        return True

    return False


class MermaidConverter:
    """Mermaid图表转换器

    将 <pre><code class="language-mermaid"> 替换为带唯一 id 的占位：
    - 未完成的代码显示“继续输入”提示
    - 完成的代码保留源码，等待异步渲染替换
    """

    PLACEHOLDER_STYLE = (
        "padding: 1rem; background: #f6f8fa; border: 2px dashed #d1d9e0; "
        "border-radius: 6px; text-align: center; color: #656d76; font-style: italic;"
    )
    ERROR_STYLE = (
        "padding: 1rem; background: #fff8f8; border: 1px solid #f8d7da; "
        "border-radius: 6px; color: #721c24;"
    )

    RENDER_ID_SUFFIX = "-svg"

    def __init__(self, min_length: int = DEFAULT_MIN_LENGTH):
        self._min_length = min_length

    def is_incomplete(self, code: str) -> bool:
        return is_diagram_incomplete(code, self._min_length)

    def collect(
        self, html_body: str, timestamp_ms: Optional[int] = None
    ) -> tuple[str, list[DiagramCandidate]]:
        """收集图表候选并替换为占位

        Returns:
            (替换后的HTML, 按文档顺序排列的候选)
        """
        soup = BeautifulSoup(html_body, "html.parser")
        elements = soup.select(f"code.{MERMAID_LANGUAGE_CLASS}")
        if not elements:
            return html_body, []

        stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
        candidates = []

        for index, element in enumerate(elements):
            source = element.get_text().strip()
            diagram_id = f"mermaid-{stamp}-{index}"
            ready = not self.is_incomplete(source)

            slot_html = (
                self.pending_html(diagram_id, source)
                if ready
                else self.placeholder_html(diagram_id)
            )
            target = element.parent if element.parent and element.parent.name == "pre" else element
            target.replace_with(BeautifulSoup(slot_html, "html.parser").find())

            candidates.append(
                DiagramCandidate(
                    source=source, generated_id=diagram_id, position=index, ready=ready
                )
            )
            logger.debug(
                f"[ContentPreviewer] 图表 {diagram_id} 类型: {self._detect_diagram_type(source)}, "
                f"{'可渲染' if ready else '未完成'}"
            )

        return str(soup), candidates

    def placeholder_html(self, diagram_id: str) -> str:
        """未完成代码的提示，不是错误状态"""
        return (
            f'<div class="mermaid-placeholder" id="{diagram_id}">'
            f'<div style="{self.PLACEHOLDER_STYLE}">'
            "✏️ Continue typing your Mermaid diagram...</div></div>"
        )

    def pending_html(self, diagram_id: str, source: str) -> str:
        return (
            f'<div class="mermaid-pending" id="{diagram_id}">'
            f'<pre><code class="{MERMAID_LANGUAGE_CLASS}">'
            f"{html.escape(source, quote=False)}</code></pre></div>"
        )

    def render_id(self, diagram_id: str) -> str:
        """交给渲染器的 id，mermaid 会先删除页面上同 id 的元素，不能与占位 id 相同"""
        return f"{diagram_id}{self.RENDER_ID_SUFFIX}"

    def rendered_html(self, diagram_id: str, svg: str) -> str:
        return f'<div class="mermaid" id="{diagram_id}">{svg}</div>'

    def error_html(self, diagram_id: str) -> str:
        """渲染失败时的友好提示"""
        return (
            f'<div class="mermaid-error" id="{diagram_id}">'
            f'<div style="{self.ERROR_STYLE}">'
            "<strong>Mermaid Syntax Issue</strong><br>"
            "<small>Check your diagram syntax or continue editing...</small>"
            "</div></div>"
        )

    def _detect_diagram_type(self, code: str) -> str:
        """检测Mermaid图表类型"""
        first_line = code.split("\n")[0].strip().lower()

        for dtype in DIAGRAM_TYPES:
            if first_line.startswith(dtype.lower()):
                return dtype

        return "unknown"
