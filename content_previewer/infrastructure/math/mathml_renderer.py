"""
MathML 数学渲染器
在 HTML 文本节点中识别公式分隔符，用 latex2mathml 转换为 MathML

两种用法：
- MathMLRenderer：同步备用渲染器，任何输入都不抛异常，错误处显示红色源码
- MathMLTypesetter：主排版引擎的进程内实现，额外处理公式环境并为 equation 编号
"""

import html
import traceback
from typing import TYPE_CHECKING, Optional

import latex2mathml.converter
from bs4 import BeautifulSoup, NavigableString

from ...types import MathConfig
from ...utils import regex_patterns as patterns
from ...utils.logger import logger
from ..converter.latex_scanner import (
    BEGIN_TOKEN,
    find_command,
    match_environment,
    replace_command,
)

if TYPE_CHECKING:
    from ...domain.interfaces import IDisplaySurface


class MathMLRenderer:
    """MathML 数学渲染器"""

    RENDERED_CLASS = "math-rendered"
    IGNORE_CLASS = "tex2jax_ignore"
    SKIP_TAGS = frozenset({"pre", "code", "script", "style", "textarea", "math"})

    NUMBERED_ENVIRONMENTS = frozenset({"equation"})
    MATH_ENVIRONMENTS = frozenset({
        "equation",
        "equation*",
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
        config: Optional[MathConfig] = None,
        process_environments: bool = False,
    ):
        self._config = config or MathConfig()
        self._process_environments = process_environments
        self._delimiters = self._config.delimiters()
        self._macros = [
            (patterns.macro_pattern(macro), expansion)
            for macro, expansion in self._config.macros.items()
        ]

    def render(self, html_body: str) -> str:
        """渲染 HTML 中的所有公式，出错时返回原 HTML"""
        try:
            soup = BeautifulSoup(html_body, "html.parser")
            counter = [0]
            for node in list(soup.find_all(string=True)):
                if type(node) is not NavigableString or self._should_skip(node):
                    continue
                self._render_text_node(node, counter)
            return str(soup)
        except Exception as e:
            logger.error(f"[ContentPreviewer] 公式渲染失败: {type(e).__name__}: {e}")
            logger.debug(f"[ContentPreviewer] 堆栈信息:\n{traceback.format_exc()}")
            return html_body

    def clear(self, html_body: str) -> str:
        """把已渲染的公式还原为原始 TeX 文本"""
        soup = BeautifulSoup(html_body, "html.parser")
        rendered = soup.select(f".{self.RENDERED_CLASS}")
        if not rendered:
            return html_body
        for element in rendered:
            element.replace_with(NavigableString(element.get("data-tex", "")))
        return str(soup)

    def _should_skip(self, node: NavigableString) -> bool:
        for parent in node.parents:
            if parent.name in self.SKIP_TAGS:
                return True
            classes = parent.get("class") or []
            if self.IGNORE_CLASS in classes or self.RENDERED_CLASS in classes:
                return True
        return False

    def _render_text_node(self, node: NavigableString, counter: list[int]) -> None:
        text = str(node)
        pieces = []
        last = 0
        found = False

        for start, end, latex, display, env_name in self._scan(text):
            found = True
            pieces.append(html.escape(text[last:start], quote=False))
            pieces.append(
                self._render_formula(text[start:end], latex, display, env_name, counter)
            )
            last = end

        if not found:
            return

        pieces.append(html.escape(text[last:], quote=False))
        fragment = BeautifulSoup("".join(pieces), "html.parser")
        for child in list(fragment.contents):
            node.insert_before(child)
        node.extract()

    def _scan(self, text: str):
        """依次产出 (start, end, latex, display, env_name)"""
        pos = 0
        while pos < len(text):
            # \$ 是转义的美元符号
            if text.startswith("\\$", pos):
                pos += 2
                continue

            if self._process_environments and text.startswith(BEGIN_TOKEN, pos):
                block = match_environment(text, pos)
                if block is not None and block.name in self.MATH_ENVIRONMENTS:
                    yield block.start, block.end, block.body, True, block.name
                    pos = block.end
                    continue

            matched = self._match_delimited(text, pos)
            if matched is not None:
                end, latex, display = matched
                yield pos, end, latex, display, None
                pos = end
                continue

            pos += 1

    def _match_delimited(self, text: str, pos: int):
        for left, right, display in self._delimiters:
            if not text.startswith(left, pos):
                continue
            content_start = pos + len(left)
            close_at = text.find(right, content_start)
            if close_at == -1:
                continue
            latex = text[content_start:close_at]
            if not latex.strip():
                continue
            return close_at + len(right), latex, display
        return None

    def _render_formula(
        self,
        source: str,
        latex: str,
        display: bool,
        env_name: Optional[str],
        counter: list[int],
    ) -> str:
        tag = ""
        element_id = ""
        if env_name is not None:
            label = find_command(latex, "label")
            latex = self._environment_body(latex, env_name)
            if env_name in self.NUMBERED_ENVIRONMENTS:
                counter[0] += 1
                tag = f'<span class="math-tag">({counter[0]})</span>'
                if label:
                    element_id = f' id="mjx-eqn-{html.escape(label.replace(" ", "_"))}"'

        data_tex = html.escape(source)
        css = f"{self.RENDERED_CLASS} {'math-display' if display else 'math-inline'}"
        try:
            mathml = latex2mathml.converter.convert(
                self._expand_macros(latex), display="block" if display else "inline"
            )
        except Exception as e:
            logger.warning(f"[ContentPreviewer] 公式转换失败: {type(e).__name__}: {e}")
            return (
                f'<span class="{self.RENDERED_CLASS} math-error" data-tex="{data_tex}" '
                f'style="color: {self._config.error_color}" title="{html.escape(str(e))}">'
                f"{html.escape(source, quote=False)}</span>"
            )

        return f'<span class="{css}"{element_id} data-tex="{data_tex}">{mathml}{tag}</span>'

    def _environment_body(self, body: str, env_name: str) -> str:
        body = replace_command(body, "label", lambda _: "")
        body = patterns.MATH_NUMBERING_COMMANDS.sub("", body).strip()
        if env_name.rstrip("*") == "equation":
            return body
        return f"\\begin{{align*}}{body}\\end{{align*}}"

    def _expand_macros(self, latex: str) -> str:
        for pattern, expansion in self._macros:
            latex = pattern.sub(lambda _: expansion, latex)
        return latex


class MathMLTypesetter:
    """主排版引擎的进程内实现（对显示区域异步操作）"""

    def __init__(self, config: Optional[MathConfig] = None):
        self._renderer = MathMLRenderer(config, process_environments=True)

    async def typeset(self, surface: "IDisplaySurface") -> None:
        await surface.transform(self._renderer.render)

    async def clear(self, surface: "IDisplaySurface") -> None:
        await surface.transform(self._renderer.clear)
