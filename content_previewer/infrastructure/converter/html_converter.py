"""
HTML 透传转换器
"""


class HtmlPassthroughConverter:
    """原样返回输入的 HTML"""

    def convert(self, content: str) -> str:
        return content
