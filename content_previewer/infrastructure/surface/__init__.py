"""
基础设施层 - 显示区域模块
"""
from .html_surface import HtmlSurface

__all__ = ["HtmlSurface"]
