"""
应用层
"""
from .render_orchestrator import RenderOrchestrator
from .input_controller import InputController

__all__ = ["RenderOrchestrator", "InputController"]
