"""
LaTeX环境渲染器
按环境名分派：公式环境原样保留给排版引擎，列表转HTML，其余可见降级
"""

from typing import TYPE_CHECKING

from .latex_scanner import find_command, replace_command

if TYPE_CHECKING:
    from ...types import EnvironmentBlock
    from .inline_commands import InlineCommandConverter
    from .list_converter import ListConverter


class EnvironmentRenderer:
    """LaTeX环境渲染器"""

    # 主体原样保留的多行公式环境
    MATH_ENVIRONMENTS = frozenset({
        "align",
        "align*",
        "eqnarray",
        "eqnarray*",
        "gather",
        "gather*",
        "multline",
        "multline*",
    })

    def __init__(
        self,
        inline_converter: "InlineCommandConverter",
        list_converter: "ListConverter",
    ):
        self._inline_converter = inline_converter
        self._list_converter = list_converter

    def render(self, block: "EnvironmentBlock") -> str:
        name = block.name
        if name == "equation":
            return self._render_equation(block.body)
        if name in self.MATH_ENVIRONMENTS:
            return (
                f'<div class="math-display">'
                f"\\begin{{{name}}}{block.body}\\end{{{name}}}</div>"
            )
        if self._list_converter.handles(name):
            return self._list_converter.convert(name, block.body)
        return self._render_unknown(name, block.body)

    def _render_equation(self, body: str) -> str:
        """提取 \\label 并放回公式最前面"""
        label = find_command(body, "label")
        content = replace_command(body, "label", lambda _: "").strip()
        label_tex = f"\\label{{{label}}}" if label else ""
        return (
            f'<div class="math-display">'
            f"\\begin{{equation}}{label_tex} {content} \\end{{equation}}</div>"
        )

    def _render_unknown(self, name: str, body: str) -> str:
        """未识别的环境：显示原始标签，不能静默丢弃"""
        return (
            '<div class="latex-environment">'
            f'<div class="env-label tex2jax_ignore">\\begin{{{name}}}</div>'
            f'<div class="env-content">{self._inline_converter.convert(body)}</div>'
            f'<div class="env-label tex2jax_ignore">\\end{{{name}}}</div>'
            "</div>"
        )
