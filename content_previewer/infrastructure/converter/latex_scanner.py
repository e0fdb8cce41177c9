"""
LaTeX扫描器
环境、行内命令、行间公式的显式扫描，保证终止且不处理嵌套
"""

from typing import Callable, Optional

from ...types import EnvironmentBlock, MathSpan

BEGIN_TOKEN = "\\begin{"
DISPLAY_MATH_TOKEN = "$$"


class ScanCursor:
    """不可变源字符串上的只进游标，单次解析内使用"""

    __slots__ = ("source", "pos")

    def __init__(self, source: str, pos: int = 0):
        self.source = source
        self.pos = pos

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def startswith(self, token: str) -> bool:
        return self.source.startswith(token, self.pos)

    def advance(self, count: int = 1) -> None:
        self.move_to(self.pos + count)

    def move_to(self, index: int) -> None:
        """移动到 index，游标只能前进"""
        self.pos = min(max(index, self.pos), len(self.source))

    def skip_whitespace(self) -> None:
        source = self.source
        pos = self.pos
        while pos < len(source) and source[pos].isspace():
            pos += 1
        self.pos = pos

    def find(self, token: str, offset: int = 0) -> int:
        """从 pos+offset 开始查找 token，找不到返回 -1"""
        return self.source.find(token, self.pos + offset)


def match_environment(source: str, start: int) -> Optional[EnvironmentBlock]:
    """匹配 start 处的 \\begin{NAME}...\\end{NAME}

    取第一个字面 \\end{NAME}，不解析嵌套。未闭合时返回 None。
    """
    if not source.startswith(BEGIN_TOKEN, start):
        return None

    name_start = start + len(BEGIN_TOKEN)
    name_end = source.find("}", name_start)
    if name_end <= name_start:
        return None

    name = source[name_start:name_end]
    close_token = f"\\end{{{name}}}"
    body_start = name_end + 1
    close_at = source.find(close_token, body_start)
    if close_at == -1:
        return None

    return EnvironmentBlock(
        name=name,
        body=source[body_start:close_at],
        start=start,
        end=close_at + len(close_token),
    )


def match_display_math(source: str, start: int) -> Optional[MathSpan]:
    """匹配 start 处的 $$...$$，未闭合时返回 None"""
    if not source.startswith(DISPLAY_MATH_TOKEN, start):
        return None

    content_start = start + len(DISPLAY_MATH_TOKEN)
    close_at = source.find(DISPLAY_MATH_TOKEN, content_start)
    if close_at == -1:
        return None

    return MathSpan(
        content=source[content_start:close_at],
        start=start,
        end=close_at + len(DISPLAY_MATH_TOKEN),
    )


def match_command(source: str, start: int, name: str) -> Optional[tuple[str, int]]:
    """匹配 start 处的 \\name{ARG}

    ARG 必须非空且不含花括号（命令不嵌套）。

    Returns:
        (ARG, 结束位置)，不匹配时返回 None
    """
    token = f"\\{name}{{"
    if not source.startswith(token, start):
        return None

    arg_start = start + len(token)
    pos = arg_start
    while pos < len(source):
        char = source[pos]
        if char == "}":
            break
        if char == "{":
            return None
        pos += 1
    else:
        return None

    if pos == arg_start:
        return None
    return source[arg_start:pos], pos + 1


def find_command(text: str, name: str) -> Optional[str]:
    """返回第一个合法 \\name{ARG} 的 ARG"""
    token = f"\\{name}{{"
    pos = text.find(token)
    while pos != -1:
        matched = match_command(text, pos, name)
        if matched is not None:
            return matched[0]
        pos = text.find(token, pos + 1)
    return None


def replace_command(text: str, name: str, render: Callable[[str], str]) -> str:
    """将所有合法的 \\name{ARG} 替换为 render(ARG)"""
    token = f"\\{name}{{"
    parts = []
    pos = 0
    while True:
        found = text.find(token, pos)
        if found == -1:
            parts.append(text[pos:])
            break

        matched = match_command(text, found, name)
        if matched is None:
            parts.append(text[pos:found + 1])
            pos = found + 1
            continue

        argument, end = matched
        parts.append(text[pos:found])
        parts.append(render(argument))
        pos = end

    return "".join(parts)
