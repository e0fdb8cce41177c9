"""
渲染编排器
编排一次完整的预览渲染流程
"""
import asyncio
import html
import traceback
from typing import Coroutine, Optional

from ..domain.interfaces import (
    IContentConverter,
    IDiagramRenderer,
    IDisplaySurface,
    IMathRenderer,
    IMathTypesetter,
)
from ..infrastructure.converter import (
    CodeHighlighter,
    HtmlPassthroughConverter,
    LatexConverter,
    MarkdownConverter,
    MermaidConverter,
)
from ..infrastructure.math import MathMLRenderer, MathMLTypesetter
from ..types import DiagramCandidate, PreviewConfig, PreviewFormat, RenderResult
from ..utils.decorators import log_render, run_with_timeout
from ..utils.logger import logger


class RenderOrchestrator:
    """
    渲染编排器

    Pipeline:
    text ──► convert ──► inject ──► math ──► diagrams

    1. 空内容显示占位提示
    2. 按格式转换 (latex / markdown / html)
    3. 注入显示区域
    4. 数学排版：latex 先清除旧排版再异步排版，其余格式同步渲染
    5. markdown 的 mermaid 代码块经启发式判断后逐个异步渲染

    每次渲染有递增的 generation，过期的异步结果直接丢弃。
    """

    ERROR_TEMPLATE = '<div class="error">Error: {message}</div>'

    def __init__(
        self,
        surface: IDisplaySurface,
        config: Optional[PreviewConfig] = None,
        latex_converter: Optional[IContentConverter] = None,
        markdown_converter: Optional[IContentConverter] = None,
        html_converter: Optional[IContentConverter] = None,
        math_typesetter: Optional[IMathTypesetter] = None,
        math_renderer: Optional[IMathRenderer] = None,
        diagram_renderer: Optional[IDiagramRenderer] = None,
        mermaid_converter: Optional[MermaidConverter] = None,
    ):
        self._surface = surface
        self._config = config or PreviewConfig()

        # 转换器
        self._converters: dict[PreviewFormat, IContentConverter] = {
            PreviewFormat.LATEX: latex_converter or LatexConverter(),
            PreviewFormat.MARKDOWN: markdown_converter
            or MarkdownConverter(CodeHighlighter(self._config.highlight_style)),
            PreviewFormat.HTML: html_converter or HtmlPassthroughConverter(),
        }

        # 数学排版
        self._math_typesetter = math_typesetter or MathMLTypesetter(self._config.math)
        self._math_renderer = math_renderer or MathMLRenderer(self._config.math)

        # 图表
        self._diagram_renderer = diagram_renderer
        self._mermaid_converter = mermaid_converter or MermaidConverter(
            self._config.diagram_min_length
        )

        self._generation = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending_jobs(self) -> int:
        return len(self._tasks)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    @log_render
    async def render(self, text: str, fmt: PreviewFormat) -> RenderResult:
        """执行一次渲染，任何异常都不会向外抛出"""
        self._generation += 1
        generation = self._generation
        result = RenderResult(generation=generation, format=PreviewFormat.MARKDOWN)

        try:
            fmt = PreviewFormat.parse(fmt)
            result.format = fmt

            content = text.strip()
            if not content:
                await self._surface.inject(self._config.empty_message)
                result.html = self._config.empty_message
                return result

            logger.debug(
                f"[ContentPreviewer] 第 {generation} 次渲染，格式: {fmt.value}，内容长度: {len(content)}"
            )

            # 1. 格式转换
            html_body = self._converters[fmt].convert(content)

            # 2. 收集图表候选
            candidates: list[DiagramCandidate] = []
            if fmt is PreviewFormat.MARKDOWN:
                html_body, candidates = self._mermaid_converter.collect(html_body)

            # 3. 注入
            await self._surface.inject(html_body)
            result.html = html_body

            # 4. 数学排版
            await self._process_math(fmt, generation)

            # 5. 图表渲染
            self._submit_diagrams(candidates, generation, result)

            logger.info(
                f"[ContentPreviewer] 渲染完成 #{generation}: {fmt.value}, "
                f"图表 {result.diagrams_submitted} 个提交, {result.diagrams_deferred} 个待输入"
            )

        except Exception as e:
            logger.error(f"[ContentPreviewer] 渲染失败: {type(e).__name__}: {e}")
            logger.error(f"[ContentPreviewer] 堆栈信息:\n{traceback.format_exc()}")
            result.success = False
            result.error_message = str(e)
            await self._show_error(str(e))

        return result

    async def clear_math(self) -> None:
        """立即清除排版产物，并使进行中的异步任务过期"""
        self._generation += 1
        await self._clear_typeset()
        await self._surface.transform(self._math_renderer.clear)

    async def drain(self) -> None:
        """等待所有已提交的异步任务结束"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """取消未完成的异步任务"""
        for task in list(self._tasks):
            task.cancel()
        await self.drain()
        logger.info("[ContentPreviewer] 编排器资源已释放")

    async def _process_math(self, fmt: PreviewFormat, generation: int) -> None:
        if fmt is PreviewFormat.LATEX:
            await self._clear_typeset()
            self._spawn(self._typeset_later(generation))
        else:
            await self._surface.transform(self._math_renderer.render)

    async def _clear_typeset(self) -> None:
        try:
            await self._math_typesetter.clear(self._surface)
        except Exception as e:
            logger.warning(f"[ContentPreviewer] 清除排版失败: {e}")

    async def _typeset_later(self, generation: int) -> None:
        """稍等片刻再排版，期间有新的渲染则放弃"""
        await asyncio.sleep(self._config.typeset_delay_ms / 1000)
        if not self.is_current(generation):
            logger.debug(f"[ContentPreviewer] 排版任务 #{generation} 已过期，跳过")
            return

        try:
            await self._math_typesetter.typeset(self._surface)
            logger.debug(f"[ContentPreviewer] 排版完成 #{generation}")
        except Exception as e:
            # 公式保持原始分隔符可见
            logger.error(f"[ContentPreviewer] 数学排版失败: {type(e).__name__}: {e}")

    def _submit_diagrams(
        self,
        candidates: list[DiagramCandidate],
        generation: int,
        result: RenderResult,
    ) -> None:
        for candidate in candidates:
            if not candidate.ready:
                result.diagrams_deferred += 1
                continue
            if self._diagram_renderer is None:
                logger.debug("[ContentPreviewer] 未配置图表渲染器，保留源码")
                continue
            self._spawn(self._render_diagram(candidate, generation))
            result.diagrams_submitted += 1

    async def _render_diagram(self, candidate: DiagramCandidate, generation: int) -> None:
        diagram_id = candidate.generated_id
        try:
            svg = await run_with_timeout(
                self._diagram_renderer.render(
                    candidate.source, self._mermaid_converter.render_id(diagram_id)
                ),
                self._config.diagram_timeout_ms,
                f"图表 {diagram_id}",
            )
            replacement = self._mermaid_converter.rendered_html(diagram_id, svg)
        except Exception as e:
            logger.warning(f"[ContentPreviewer] 图表 {diagram_id} 渲染失败: {type(e).__name__}: {e}")
            replacement = self._mermaid_converter.error_html(diagram_id)

        if not self.is_current(generation):
            logger.debug(f"[ContentPreviewer] 图表 {diagram_id} 已过期 (#{generation})，丢弃")
            return

        try:
            if not await self._surface.replace_element(diagram_id, replacement):
                logger.warning(f"[ContentPreviewer] 图表 {diagram_id} 的占位已不存在")
        except Exception as e:
            logger.error(f"[ContentPreviewer] 替换图表 {diagram_id} 失败: {e}")

    async def _show_error(self, message: str) -> None:
        try:
            await self._surface.inject(
                self.ERROR_TEMPLATE.format(message=html.escape(message))
            )
        except Exception as e:
            logger.error(f"[ContentPreviewer] 无法显示错误信息: {e}")

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
