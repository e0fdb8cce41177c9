"""
ContentPreviewer 类型定义
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from .domain.errors import ConfigError


class PreviewFormat(Enum):
    """输入格式"""

    MARKDOWN = "markdown"  # 通用标记语言
    LATEX = "latex"  # LaTeX 子集
    HTML = "html"  # 原样透传

    @classmethod
    def parse(cls, value: "str | PreviewFormat") -> "PreviewFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"未知的格式: {value}")


# 六个黑板粗体简写宏
BLACKBOARD_MACROS: dict[str, str] = {
    "\\RR": "\\mathbb{R}",
    "\\CC": "\\mathbb{C}",
    "\\NN": "\\mathbb{N}",
    "\\ZZ": "\\mathbb{Z}",
    "\\QQ": "\\mathbb{Q}",
    "\\FF": "\\mathbb{F}",
}


@dataclass(frozen=True)
class MathConfig:
    """数学排版配置（不可变）"""

    macros: Mapping[str, str] = field(default_factory=lambda: dict(BLACKBOARD_MACROS))
    inline_delimiters: tuple[tuple[str, str], ...] = (("$", "$"), ("\\(", "\\)"))
    display_delimiters: tuple[tuple[str, str], ...] = (("$$", "$$"), ("\\[", "\\]"))
    error_color: str = "#cc0000"

    def delimiters(self) -> list[tuple[str, str, bool]]:
        """所有分隔符对，左分隔符较长者优先"""
        pairs = [(left, right, True) for left, right in self.display_delimiters]
        pairs += [(left, right, False) for left, right in self.inline_delimiters]
        return sorted(pairs, key=lambda p: len(p[0]), reverse=True)


@dataclass(frozen=True)
class PreviewConfig:
    """预览配置（不可变，启动时构造一次）"""

    debounce_ms: int = 300
    diagram_min_length: int = 10
    typeset_delay_ms: int = 50
    diagram_timeout_ms: int = 10000
    highlight_style: str = "default"
    empty_message: str = (
        '<p style="color: #656d76; font-style: italic;">Preview will appear here...</p>'
    )
    math: MathConfig = field(default_factory=MathConfig)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "PreviewConfig":
        """从配置字典构造，缺失的键使用默认值"""
        data = dict(data or {})
        defaults = cls()

        def get_int(key: str) -> int:
            value = data.get(key, getattr(defaults, key))
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"配置项 {key} 必须是非负整数: {value!r}")
            return value

        math_data = data.get("math") or {}
        if not isinstance(math_data, Mapping):
            raise ConfigError("配置项 math 必须是对象")
        macros = math_data.get("macros", defaults.math.macros)
        if not isinstance(macros, Mapping):
            raise ConfigError("配置项 math.macros 必须是对象")

        math = MathConfig(
            macros=dict(macros),
            error_color=str(math_data.get("error_color", defaults.math.error_color)),
        )
        return cls(
            debounce_ms=get_int("debounce_ms"),
            diagram_min_length=get_int("diagram_min_length"),
            typeset_delay_ms=get_int("typeset_delay_ms"),
            diagram_timeout_ms=get_int("diagram_timeout_ms"),
            highlight_style=str(data.get("highlight_style", defaults.highlight_style)),
            empty_message=str(data.get("empty_message", defaults.empty_message)),
            math=math,
        )


@dataclass
class DocumentBuffer:
    """文档缓冲区（仅由用户输入修改）"""

    text: str = ""
    format: PreviewFormat = PreviewFormat.MARKDOWN


@dataclass(frozen=True)
class EnvironmentBlock:
    """\\begin{name}...\\end{name} 提取结果，span 为 [start, end)"""

    name: str
    body: str
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end


@dataclass(frozen=True)
class MathSpan:
    """$$...$$ 提取结果，span 为 [start, end)"""

    content: str
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end


@dataclass(frozen=True)
class DiagramCandidate:
    """单次渲染中的图表候选（不跨渲染保留身份）"""

    source: str
    generated_id: str
    position: int
    ready: bool


@dataclass
class RenderResult:
    """一次渲染的结果"""

    generation: int
    format: PreviewFormat
    html: str = ""
    success: bool = True
    diagrams_submitted: int = 0
    diagrams_deferred: int = 0
    error_message: Optional[str] = None
