"""
LaTeX行内命令转换器
按固定顺序改写 \\textbf、\\textit、\\text、\\label、\\ref
"""

from .latex_scanner import replace_command


class InlineCommandConverter:
    """LaTeX行内命令转换器"""

    RULES = (
        ("textbf", lambda arg: f"<strong>{arg}</strong>"),
        ("textit", lambda arg: f"<em>{arg}</em>"),
        ("text", lambda arg: arg),
        ("label", lambda arg: f'<span class="latex-label">[label: {arg}]</span>'),
        ("ref", lambda arg: f'<span class="latex-ref">[ref: {arg}]</span>'),
    )

    def convert(self, text: str) -> str:
        """对一段文本依次应用所有改写规则"""
        for name, render in self.RULES:
            text = replace_command(text, name, render)
        return text
