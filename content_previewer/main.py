"""
ContentPreviewer 命令行入口
将 Markdown / LaTeX / HTML 文件渲染为预览 HTML，可选在浏览器中排版并截图
"""
import argparse
import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

from .application import InputController, RenderOrchestrator
from .domain.errors import PreviewError
from .infrastructure.browser import (
    BrowserManager,
    MathJaxTypesetter,
    MermaidRenderer,
    PageSurface,
)
from .infrastructure.converter import CodeHighlighter
from .infrastructure.surface import HtmlSurface
from .types import PreviewConfig, PreviewFormat
from .utils.logger import logger, setup_logging

FORMAT_BY_SUFFIX = {
    ".md": PreviewFormat.MARKDOWN,
    ".markdown": PreviewFormat.MARKDOWN,
    ".tex": PreviewFormat.LATEX,
    ".latex": PreviewFormat.LATEX,
    ".html": PreviewFormat.HTML,
    ".htm": PreviewFormat.HTML,
}


class PreviewSession:
    """
    一次预览会话：显示区域 + 渲染编排器

    - 默认使用内存显示区域和 MathML 渲染
    - browser=True 时使用 Playwright 页面，MathJax 排版、Mermaid 渲染
    """

    def __init__(self, config: PreviewConfig, browser: bool = False):
        self.config = config
        self.browser = browser
        self._browser_manager: Optional[BrowserManager] = None
        self.surface = None
        self.orchestrator: Optional[RenderOrchestrator] = None

    async def __aenter__(self) -> "PreviewSession":
        if self.browser:
            self._browser_manager = BrowserManager()
            highlight_css = CodeHighlighter(self.config.highlight_style).stylesheet()
            self.surface = await PageSurface.open(
                self._browser_manager, self.config.math, highlight_css
            )
            self.orchestrator = RenderOrchestrator(
                self.surface,
                self.config,
                math_typesetter=MathJaxTypesetter(),
                diagram_renderer=MermaidRenderer(self.surface.page),
            )
        else:
            self.surface = HtmlSurface()
            self.orchestrator = RenderOrchestrator(self.surface, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.orchestrator is not None:
            await self.orchestrator.close()
        if self._browser_manager is not None:
            await self._browser_manager.close()

    async def output_html(self) -> str:
        """等待后台任务结束后读取显示区域内容"""
        await self.orchestrator.drain()
        return await self.surface.get_html()


def load_config(path: Optional[str]) -> PreviewConfig:
    if not path:
        return PreviewConfig()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PreviewError(f"无法读取配置文件 {path}: {e}")
    return PreviewConfig.from_dict(data)


def resolve_format(path: Path, fmt: Optional[str]) -> PreviewFormat:
    if fmt:
        return PreviewFormat.parse(fmt)
    return FORMAT_BY_SUFFIX.get(path.suffix.lower(), PreviewFormat.MARKDOWN)


def write_output(html_body: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(html_body, encoding="utf-8")
        logger.info(f"[ContentPreviewer] 预览已写入: {output}")
    else:
        sys.stdout.write(html_body + "\n")


async def run_render(args: argparse.Namespace) -> int:
    """渲染一次并输出最终 HTML"""
    source = Path(args.file)
    config = load_config(args.config)
    fmt = resolve_format(source, args.format)
    text = source.read_text(encoding="utf-8")

    browser = args.browser or bool(args.screenshot)
    async with PreviewSession(config, browser=browser) as session:
        result = await session.orchestrator.render(text, fmt)
        write_output(await session.output_html(), args.output)

        if args.screenshot:
            await session.surface.screenshot(Path(args.screenshot))

    return 0 if result.success else 1


async def run_watch(args: argparse.Namespace) -> int:
    """轮询文件变化，经防抖后重新渲染"""
    source = Path(args.file)
    config = load_config(args.config)
    fmt = resolve_format(source, args.format)

    async with PreviewSession(config, browser=args.browser) as session:
        controller = InputController(session.orchestrator, config, fmt)
        last_mtime: Optional[float] = None
        written_generation = 0
        logger.info(f"[ContentPreviewer] 开始监听: {source}")

        try:
            while True:
                mtime = source.stat().st_mtime
                if mtime != last_mtime:
                    last_mtime = mtime
                    controller.edit(source.read_text(encoding="utf-8"))

                result = controller.last_result
                if result is not None and result.generation != written_generation:
                    written_generation = result.generation
                    write_output(await session.output_html(), args.output)

                await asyncio.sleep(args.interval)
        finally:
            controller.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-previewer",
        description="Markdown / LaTeX / HTML 实时预览渲染",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("file", help="输入文件")
        sub.add_argument(
            "--format",
            choices=[f.value for f in PreviewFormat],
            help="输入格式，默认按扩展名判断",
        )
        sub.add_argument("--output", "-o", help="输出 HTML 文件，默认写到标准输出")
        sub.add_argument("--browser", action="store_true", help="在浏览器中排版")
        sub.add_argument("--config", help="JSON 配置文件")

    render = subparsers.add_parser("render", help="渲染一次")
    add_common(render)
    render.add_argument("--screenshot", help="保存整页截图 (隐含 --browser)")
    render.set_defaults(handler=run_render)

    watch = subparsers.add_parser("watch", help="监听文件并持续渲染")
    add_common(watch)
    watch.add_argument(
        "--interval", type=float, default=0.2, help="轮询间隔（秒）"
    )
    watch.set_defaults(handler=run_watch)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        return asyncio.run(args.handler(args))
    except KeyboardInterrupt:
        logger.info("[ContentPreviewer] 已停止")
        return 0
    except (PreviewError, OSError) as e:
        logger.error(f"[ContentPreviewer] {type(e).__name__}: {e}")
        logger.debug(f"[ContentPreviewer] 堆栈信息:\n{traceback.format_exc()}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
