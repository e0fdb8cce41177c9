"""
基础设施层 - 数学渲染模块
"""
from .mathml_renderer import MathMLRenderer, MathMLTypesetter

__all__ = [
    "MathMLRenderer",
    "MathMLTypesetter",
]
