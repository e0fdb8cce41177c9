"""
领域层 - 错误类型定义
"""

from enum import Enum


class ErrorCode(Enum):
    """错误代码枚举"""

    CONVERSION_FAILED = "CONVERSION_FAILED"
    MATH_TYPESET_FAILED = "MATH_TYPESET_FAILED"
    DIAGRAM_RENDER_FAILED = "DIAGRAM_RENDER_FAILED"
    BROWSER_LAUNCH_FAILED = "BROWSER_LAUNCH_FAILED"
    CONFIG_INVALID = "CONFIG_INVALID"
    RENDER_TIMEOUT = "RENDER_TIMEOUT"


class PreviewError(Exception):
    """预览错误基类"""

    def __init__(self, message: str, code: ErrorCode = None):
        super().__init__(message)
        self.code = code


class ConversionError(PreviewError):
    """格式转换错误"""

    def __init__(self, message: str, format_name: str = ""):
        super().__init__(message, code=ErrorCode.CONVERSION_FAILED)
        self.format_name = format_name


class MathTypesetError(PreviewError):
    """数学排版错误"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.MATH_TYPESET_FAILED)


class DiagramRenderError(PreviewError):
    """图表渲染错误"""

    def __init__(self, message: str, diagram_id: str = ""):
        super().__init__(message, code=ErrorCode.DIAGRAM_RENDER_FAILED)
        self.diagram_id = diagram_id


class BrowserError(PreviewError):
    """浏览器相关错误"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.BROWSER_LAUNCH_FAILED)


class ConfigError(PreviewError):
    """配置错误"""

    def __init__(self, message: str):
        super().__init__(message, code=ErrorCode.CONFIG_INVALID)


class RenderTimeoutError(PreviewError):
    """排版或图表渲染超时"""

    def __init__(self, message: str, timeout_ms: int = 0):
        super().__init__(message, code=ErrorCode.RENDER_TIMEOUT)
        self.timeout_ms = timeout_ms
