"""
输入缓冲控制器
持有当前文本和格式，对编辑做防抖后交给渲染编排器
"""
import asyncio
from typing import Mapping, Optional

from ..domain.interfaces import IRenderOrchestrator
from ..samples import SAMPLE_DOCUMENTS
from ..types import DocumentBuffer, PreviewConfig, PreviewFormat, RenderResult
from ..utils.logger import logger


class InputController:
    """
    输入缓冲控制器

    - edit(): 每次编辑重启定时器，只有定时器不被打断地触发才渲染
    - set_format(): 立即清除排版产物、更新占位文本并渲染
    """

    def __init__(
        self,
        orchestrator: IRenderOrchestrator,
        config: Optional[PreviewConfig] = None,
        fmt: PreviewFormat = PreviewFormat.MARKDOWN,
        placeholders: Optional[Mapping[PreviewFormat, str]] = None,
    ):
        self._orchestrator = orchestrator
        self._config = config or PreviewConfig()
        self._placeholders = placeholders or SAMPLE_DOCUMENTS
        self._buffer = DocumentBuffer(format=PreviewFormat.parse(fmt))
        self._timer: Optional[asyncio.TimerHandle] = None
        self._render_task: Optional[asyncio.Task] = None
        self.placeholder = self._placeholders.get(self._buffer.format, "")
        self.last_result: Optional[RenderResult] = None

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def format(self) -> PreviewFormat:
        return self._buffer.format

    @property
    def pending(self) -> bool:
        """是否有尚未触发的防抖定时器"""
        return self._timer is not None

    def edit(self, text: str) -> None:
        """记录一次编辑并重启防抖定时器（需在事件循环中调用）"""
        self._buffer.text = text
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._config.debounce_ms / 1000, self._fire)

    async def set_format(self, fmt: PreviewFormat) -> RenderResult:
        """切换格式：先同步清除排版产物，再渲染"""
        fmt = PreviewFormat.parse(fmt)
        logger.info(f"[ContentPreviewer] 切换格式: {self._buffer.format.value} -> {fmt.value}")
        self._buffer.format = fmt
        self._cancel_timer()

        await self._orchestrator.clear_math()
        self.placeholder = self._placeholders.get(fmt, "")
        return await self._render()

    async def flush(self) -> Optional[RenderResult]:
        """立即执行挂起的渲染，或等待正在进行的渲染"""
        if self._timer is not None:
            self._cancel_timer()
            return await self._render()
        if self._render_task is not None:
            return await self._render_task
        return self.last_result

    def close(self) -> None:
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        self._render_task = asyncio.get_running_loop().create_task(self._render())

    async def _render(self) -> RenderResult:
        self.last_result = await self._orchestrator.render(
            self._buffer.text, self._buffer.format
        )
        return self.last_result
