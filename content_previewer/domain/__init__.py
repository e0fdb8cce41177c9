"""
领域层 - 核心接口和错误定义
"""

from .interfaces import (
    IContentConverter,
    ICodeHighlighter,
    IDisplaySurface,
    IMathTypesetter,
    IMathRenderer,
    IDiagramRenderer,
    IRenderOrchestrator,
)
from .errors import (
    ErrorCode,
    PreviewError,
    ConversionError,
    MathTypesetError,
    DiagramRenderError,
    BrowserError,
    ConfigError,
    RenderTimeoutError,
)

__all__ = [
    "IContentConverter",
    "ICodeHighlighter",
    "IDisplaySurface",
    "IMathTypesetter",
    "IMathRenderer",
    "IDiagramRenderer",
    "IRenderOrchestrator",
    "ErrorCode",
    "PreviewError",
    "ConversionError",
    "MathTypesetError",
    "DiagramRenderError",
    "BrowserError",
    "ConfigError",
    "RenderTimeoutError",
]
