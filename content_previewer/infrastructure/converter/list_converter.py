"""
LaTeX列表转换器
将LaTeX enumerate/itemize环境转换为HTML列表
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .inline_commands import InlineCommandConverter


class ListConverter:
    """LaTeX列表转换器"""

    ITEM_TOKEN = "\\item"

    # 环境名 -> (标签, CSS类)
    LIST_TAGS = {
        "itemize": ("ul", "latex-itemize"),
        "enumerate": ("ol", "latex-enumerate"),
    }

    def __init__(self, inline_converter: "InlineCommandConverter"):
        self._inline_converter = inline_converter

    def handles(self, env_name: str) -> bool:
        return env_name in self.LIST_TAGS

    def convert(self, env_name: str, body: str) -> str:
        """将列表环境主体转换为 <ul>/<ol>"""
        tag, css_class = self.LIST_TAGS[env_name]
        items = "".join(
            f"<li>{self._inline_converter.convert(item)}</li>"
            for item in self._split_items(body)
        )
        return f'<{tag} class="{css_class}">{items}</{tag}>'

    def _split_items(self, body: str) -> list[str]:
        """按 \\item 分割，丢弃空白片段"""
        return [part.strip() for part in body.split(self.ITEM_TOKEN) if part.strip()]
